from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import patch

from nexrel.core.config import ReleaseConfig, TargetConfig
from nexrel.core.result import Err, Ok
from nexrel.output.console import MockConsole
from nexrel.release.errors import InvalidOption, MetadataUnreadable, MissingOption
from nexrel.release.service import ReleaseContext, prepare_release, run_release

CONFIG: dict[str, object] = {
    "options": {"group_id": "com.x", "url": "http://nexus/repo"},
    "targets": {
        "release": {
            "options": {"packaging": "tgz"},
            "files": [{"src": ["**/*"], "cwd": "dist"}],
        }
    },
}


def _config(data: dict[str, object] = CONFIG) -> ReleaseConfig:
    return ReleaseConfig.from_dict(data).unwrap()


def _project(tmp_path: Path, version: str = "1.0.0-SNAPSHOT") -> Path:
    (tmp_path / "package.json").write_text(
        f'{{"name": "lib", "version": "{version}"}}', encoding="utf-8"
    )
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "index.js").write_text("main()", encoding="utf-8")
    return tmp_path


def _prepare(root: Path, config: ReleaseConfig | None = None, **kwargs: Any) -> ReleaseContext:
    cfg = config or _config()
    result = prepare_release(root=root, config=cfg, target=cfg.targets["release"], **kwargs)
    assert isinstance(result, Ok)
    return result.value


class TestPrepareRelease:
    def test_resolves_from_package_json(self, tmp_path: Path) -> None:
        ctx = _prepare(_project(tmp_path))

        assert ctx.options.artifact_id == "lib"
        assert ctx.options.version == "1.0.0"
        assert ctx.options.next_version == "1.0.1-SNAPSHOT"
        assert ctx.options.goal == "release"
        assert ctx.options.extension == "tgz"
        assert ctx.options.file == "lib-1.0.0.tgz"

    def test_dest_folder_injected(self, tmp_path: Path) -> None:
        ctx = _prepare(_project(tmp_path))

        assert [m.dest for m in ctx.files] == ["lib-1.0.0"]

    def test_explicit_version(self, tmp_path: Path) -> None:
        ctx = _prepare(_project(tmp_path), explicit_version="2.0.0")

        assert ctx.options.version == "2.0.0"
        assert ctx.options.next_version == "2.0.1-SNAPSHOT"

    def test_debug_flag(self, tmp_path: Path) -> None:
        ctx = _prepare(_project(tmp_path), debug=True)

        assert ctx.options.debug is True

    def test_required_checked_before_metadata(self, tmp_path: Path) -> None:
        config = _config({"targets": {"release": {}}})

        result = prepare_release(root=tmp_path, config=config, target=config.targets["release"])

        assert result == Err(MissingOption(("group_id", "url")))

    def test_non_string_group_id(self, tmp_path: Path) -> None:
        config = _config({"options": {"group_id": 1, "url": "u"}})

        result = prepare_release(root=tmp_path, config=config, target=TargetConfig(name="release"))

        assert result == Err(InvalidOption("group_id", "a string"))

    def test_missing_package_json(self, tmp_path: Path) -> None:
        config = _config()

        result = prepare_release(root=tmp_path, config=config, target=config.targets["release"])

        assert isinstance(result, Err)
        assert isinstance(result.error, MetadataUnreadable)

    def test_custom_version_file(self, tmp_path: Path) -> None:
        (tmp_path / "web").mkdir()
        (tmp_path / "web" / "package.json").write_text(
            '{"name": "web", "version": "3.1.0-SNAPSHOT"}', encoding="utf-8"
        )
        config = _config(
            {"options": {"group_id": "g", "url": "u", "version_file": "web/package.json"}}
        )

        result = prepare_release(
            root=tmp_path, config=config, target=TargetConfig(name="release")
        )

        assert isinstance(result, Ok)
        assert result.value.options.artifact_id == "web"
        assert result.value.options.version == "3.1.0"


class TestRunRelease:
    def test_dry_run_executes_nothing(self, tmp_path: Path) -> None:
        ctx = _prepare(_project(tmp_path))
        console = MockConsole()

        with patch("subprocess.run") as mock_run:
            result = run_release(ctx, console=console, dry_run=True)

        mock_run.assert_not_called()
        assert result.unwrap().results == ()
        assert console.find("com.x:lib 1.0.0")
        assert console.find("[6/10] package: lib-1.0.0.tgz")
        assert not (tmp_path / "lib-1.0.0.tgz").exists()

    def test_end_to_end(self, tmp_path: Path) -> None:
        root = _project(tmp_path)
        ctx = _prepare(root)
        calls: list[list[str]] = []

        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            calls.append(["git", *cmd[3:]] if cmd[0] == "git" else list(cmd))
            stdout = "## main...origin/main\n" if "status" in cmd else ""
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")

        with patch("subprocess.run", side_effect=fake_run):
            result = run_release(ctx, console=MockConsole())

        assert isinstance(result, Ok)
        assert ["git", "tag", "-a", "lib-1.0.0", "-m", "[nexrel] release tag lib-1.0.0"] in calls
        deploy = next(c for c in calls if c[0] == "mvn")
        assert "-Dversion=1.0.0" in deploy
        assert "-Dpackaging=tgz" in deploy
        assert "-Dfile=lib-1.0.0.tgz" in deploy
        commands = [c for c in calls if "rev-parse" not in c]
        assert commands[-3] == ["npm", "version", "1.0.1-SNAPSHOT", "--no-git-tag-version"]
        assert (root / "lib-1.0.0.tgz").exists()
