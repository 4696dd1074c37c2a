"""Typed loading of the release configuration file.

The config file is TOML (nexrel.toml by default):

    [options]
    group_id = "com.example"
    url = "https://nexus.example.com/repository/releases"

    [targets.dist.options]
    classifier = "bin"

    [[targets.dist.files]]
    src = ["dist/**"]
    dest = "bin"

Shared [options] apply to every target; a target's own options override them
key by key. Option values stay untyped here; the release option resolver
validates and defaults them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePath

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table, get_table_list

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_TARGET",
    "ConfigError",
    "FileMapping",
    "ReleaseConfig",
    "TargetConfig",
    "load_config",
    "select_target",
]

CONFIG_FILE_NAME = "nexrel.toml"

# Target used when the config declares no [targets] at all.
DEFAULT_TARGET = "release"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class FileMapping:
    """Files to put into the release archive.

    Attributes:
        src: Glob patterns, relative to cwd (or the project root).
        dest: Folder inside the archive; None means the archive root.
        cwd: Base directory the patterns are matched from.
    """

    src: tuple[str, ...]
    dest: str | None = None
    cwd: str | None = None


@dataclass(frozen=True, slots=True)
class TargetConfig:
    name: str
    options: StrDict = field(default_factory=dict)
    files: tuple[FileMapping, ...] = ()


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Parsed config file: shared options plus named targets."""

    options: StrDict = field(default_factory=dict)
    targets: dict[str, TargetConfig] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[ReleaseConfig, str]:
        shared = get_table(data, "options") or {}
        targets_table = get_table(data, "targets") or {}

        targets: dict[str, TargetConfig] = {}
        for name in targets_table:
            raw = get_table(targets_table, name)
            if raw is None:
                return Err(f"targets.{name} must be a table")
            files = _parse_files(raw, name)
            if isinstance(files, Err):
                return files
            targets[name] = TargetConfig(
                name=name,
                options=get_table(raw, "options") or {},
                files=files.value,
            )

        return Ok(cls(options=dict(shared), targets=targets))

    def merged_options(self, target: TargetConfig) -> StrDict:
        """Shared options overridden by the target's own options."""
        merged: StrDict = dict(self.options)
        merged.update(target.options)
        return merged


def _parse_files(raw: StrDict, target: str) -> Result[tuple[FileMapping, ...], str]:
    if "files" not in raw:
        return Ok(())
    tables = get_table_list(raw, "files")
    if tables is None:
        return Err(f"targets.{target}.files must be an array of tables")

    mappings: list[FileMapping] = []
    for i, table in enumerate(tables):
        src = get_str_list(table, "src")
        if not src:
            return Err(f"targets.{target}.files[{i}].src must be a string or list of strings")
        for pattern in src:
            bare = pattern.removeprefix("!").strip()
            if not bare:
                return Err(f"targets.{target}.files[{i}].src contains an empty pattern")
            if PurePath(bare).is_absolute():
                return Err(
                    f"targets.{target}.files[{i}].src pattern '{pattern}' must be relative"
                    " (set cwd for files outside the project)"
                )
        mappings.append(
            FileMapping(
                src=tuple(src),
                dest=get_str(table, "dest"),
                cwd=get_str(table, "cwd"),
            )
        )
    return Ok(tuple(mappings))


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"Config file not found: {path}",
                path=path,
                hint=f"Create {CONFIG_FILE_NAME} or pass --config.",
            )
        )
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse the release configuration from a TOML file.

    Args:
        path: Path to nexrel.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    parsed = ReleaseConfig.from_dict(result.value)
    if isinstance(parsed, Err):
        return Err(ConfigError(f"Invalid config structure: {parsed.error}", path=path))
    return Ok(parsed.value)


def select_target(config: ReleaseConfig, name: str | None) -> Result[TargetConfig, ConfigError]:
    """Pick the target to release.

    With no name, a config with a single target uses it, and a config with no
    targets releases the shared options under DEFAULT_TARGET.
    """
    if name is not None:
        target = config.targets.get(name)
        if target is not None:
            return Ok(target)
        if not config.targets and name == DEFAULT_TARGET:
            return Ok(TargetConfig(name=DEFAULT_TARGET))
        available = ", ".join(sorted(config.targets)) or "(none)"
        return Err(ConfigError(f"Unknown target: {name}", hint=f"Available: {available}"))

    if not config.targets:
        return Ok(TargetConfig(name=DEFAULT_TARGET))
    if len(config.targets) == 1:
        return Ok(next(iter(config.targets.values())))

    available = ", ".join(sorted(config.targets))
    return Err(ConfigError("Several targets configured; pick one", hint=f"Available: {available}"))
