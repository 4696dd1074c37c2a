"""Version metadata: read package.json, bump it with npm."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from nexrel.core.result import Err, Ok, Result
from nexrel.core.structured import as_str_dict, get_str
from nexrel.output.console import ConsoleProtocol
from nexrel.platform.process import command_line, run
from nexrel.release.errors import ExternalProcessFailure, MetadataUnreadable

DEFAULT_VERSION_FILE = "package.json"


@dataclass(frozen=True, slots=True)
class PackageMetadata:
    name: str | None
    version: str | None
    packaging: str | None = None


def read_package_metadata(path: Path) -> Result[PackageMetadata, MetadataUnreadable]:
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(MetadataUnreadable(path, "file not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(MetadataUnreadable(path, str(e)))
    except json.JSONDecodeError as e:
        return Err(MetadataUnreadable(path, f"invalid JSON: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(MetadataUnreadable(path, "root must be a JSON object"))

    return Ok(
        PackageMetadata(
            name=get_str(data, "name"),
            version=get_str(data, "version"),
            packaging=get_str(data, "packaging"),
        )
    )


def bump_version(
    version: str, *, root: Path, console: ConsoleProtocol
) -> Result[None, ExternalProcessFailure]:
    """Rewrite the version in package.json in place.

    npm must not commit or tag on its own: the pipeline's commit and tag steps
    own history, so git-tag-version is disabled.
    """
    cmd = ["npm", "version", version, "--no-git-tag-version"]
    console.debug(f"Bumping version to {version}: {command_line(cmd)}")

    result = run(cmd, cwd=root)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ExternalProcessFailure(
                tool="npm",
                command=command_line(cmd),
                returncode=e.returncode,
                detail=e.stderr.strip(),
            )
        )

    console.success(f"Version bumped to {version}")
    return Ok(None)
