from __future__ import annotations

from pathlib import Path

import pytest

from nexrel.core.result import Err, Ok, Result
from nexrel.output.console import MockConsole
from nexrel.platform.process import ProcessError
from nexrel.release.metadata import PackageMetadata, bump_version, read_package_metadata


class TestReadPackageMetadata:
    def test_reads_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text(
            '{"name": "lib", "version": "1.0.0-SNAPSHOT", "packaging": "jar"}',
            encoding="utf-8",
        )

        assert read_package_metadata(path) == Ok(
            PackageMetadata(name="lib", version="1.0.0-SNAPSHOT", packaging="jar")
        )

    def test_optional_packaging(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "lib", "version": "1.0.0-SNAPSHOT"}', encoding="utf-8")

        result = read_package_metadata(path)

        assert isinstance(result, Ok)
        assert result.value.packaging is None

    def test_missing(self, tmp_path: Path) -> None:
        result = read_package_metadata(tmp_path / "package.json")

        assert isinstance(result, Err)
        assert result.error.reason == "file not found"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{", encoding="utf-8")

        result = read_package_metadata(path)

        assert isinstance(result, Err)
        assert "invalid JSON" in result.error.reason

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("[]", encoding="utf-8")

        assert isinstance(read_package_metadata(path), Err)


class TestBumpVersion:
    def test_runs_npm_without_git_tag(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import nexrel.release.metadata as metadata

        seen: dict[str, object] = {}

        def fake_run(
            cmd: list[str],
            cwd: Path,
            env: dict[str, str] | None = None,
        ) -> Result[str, ProcessError]:
            seen["cmd"] = cmd
            seen["cwd"] = cwd
            return Ok("v1.0.0\n")

        monkeypatch.setattr(metadata, "run", fake_run)
        console = MockConsole()

        result = bump_version("1.0.0", root=tmp_path, console=console)

        assert isinstance(result, Ok)
        assert seen["cmd"] == ["npm", "version", "1.0.0", "--no-git-tag-version"]
        assert seen["cwd"] == tmp_path
        assert console.find("Version bumped to 1.0.0")

    def test_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import nexrel.release.metadata as metadata

        def fake_run(
            cmd: list[str],
            cwd: Path,
            env: dict[str, str] | None = None,
        ) -> Result[str, ProcessError]:
            return Err(ProcessError(tuple(cmd), 1, "", "npm ERR! Version not changed\n"))

        monkeypatch.setattr(metadata, "run", fake_run)

        result = bump_version("1.0.0", root=tmp_path, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.tool == "npm"
        assert result.error.detail == "npm ERR! Version not changed"
