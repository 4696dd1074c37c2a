"""Tests for nexrel.core.config module."""

from __future__ import annotations

from pathlib import Path

from nexrel.core.config import (
    DEFAULT_TARGET,
    FileMapping,
    ReleaseConfig,
    TargetConfig,
    load_config,
    select_target,
)
from nexrel.core.result import Err, Ok


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "nexrel.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_shared_and_target_options(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
[options]
group_id = "com.x"
url = "http://nexus/repo"
classifier = "bin"

[targets.dist.options]
classifier = "sources"
repository_id = "nexus"

[[targets.dist.files]]
src = ["dist/**", "!dist/*.map"]
dest = "lib"

[[targets.dist.files]]
src = "README.md"
""",
        )

        result = load_config(path)

        assert isinstance(result, Ok)
        config = result.value
        target = config.targets["dist"]
        assert target.files == (
            FileMapping(src=("dist/**", "!dist/*.map"), dest="lib"),
            FileMapping(src=("README.md",)),
        )
        merged = config.merged_options(target)
        assert merged["group_id"] == "com.x"
        assert merged["classifier"] == "sources"
        assert merged["repository_id"] == "nexus"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nexrel.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message
        assert result.error.hint is not None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "[options\n")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_files_without_src(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[[targets.dist.files]]\ndest = "lib"\n')

        result = load_config(path)

        assert isinstance(result, Err)
        assert "targets.dist.files[0].src" in result.error.message

    def test_empty_src_pattern(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[[targets.dist.files]]\nsrc = ["dist/**", ""]\n')

        result = load_config(path)

        assert isinstance(result, Err)
        assert "targets.dist.files[0].src contains an empty pattern" in result.error.message

    def test_absolute_src_pattern(self, tmp_path: Path) -> None:
        path = _write(tmp_path, '[[targets.dist.files]]\nsrc = "!/opt/build/*.map"\n')

        result = load_config(path)

        assert isinstance(result, Err)
        assert "must be relative" in result.error.message

    def test_target_must_be_table(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'targets = { dist = "x" }\n')

        result = load_config(path)

        assert isinstance(result, Err)
        assert "targets.dist must be a table" in result.error.message


class TestSelectTarget:
    def test_no_targets_uses_default(self) -> None:
        result = select_target(ReleaseConfig(options={"url": "u"}), None)

        assert isinstance(result, Ok)
        assert result.value.name == DEFAULT_TARGET

    def test_single_target_is_implicit(self) -> None:
        config = ReleaseConfig(targets={"dist": TargetConfig(name="dist")})

        result = select_target(config, None)

        assert isinstance(result, Ok)
        assert result.value.name == "dist"

    def test_ambiguous_without_name(self) -> None:
        config = ReleaseConfig(
            targets={"a": TargetConfig(name="a"), "b": TargetConfig(name="b")}
        )

        result = select_target(config, None)

        assert isinstance(result, Err)
        assert result.error.hint == "Available: a, b"

    def test_unknown_target(self) -> None:
        config = ReleaseConfig(targets={"dist": TargetConfig(name="dist")})

        result = select_target(config, "docs")

        assert isinstance(result, Err)
        assert "docs" in result.error.message
