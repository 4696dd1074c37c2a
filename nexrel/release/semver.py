from __future__ import annotations

import re
from dataclasses import dataclass

from nexrel.core.result import Err, Ok, Result
from nexrel.release.errors import VersionComputationFailed

SNAPSHOT_SUFFIX = "-SNAPSHOT"

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        return f"{base}-{self.prerelease}" if self.prerelease else base

    def bump_patch(self) -> SemVer:
        # A pre-release already sorts below its release triple, so "1.2.0-rc.1"
        # increments to "1.2.0" rather than "1.2.1".
        if self.prerelease:
            return SemVer(self.major, self.minor, self.patch)
        return SemVer(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> SemVer | None:
    """Parse MAJOR.MINOR.PATCH[-pre][+build]; build metadata is dropped."""
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))


def is_development_version(version: str) -> bool:
    return version.endswith(SNAPSHOT_SUFFIX)


def release_version_of(
    development_version: str | None,
) -> Result[str, VersionComputationFailed]:
    """Strip the -SNAPSHOT marker from a development version.

    "2.3.0-SNAPSHOT" -> "2.3.0"
    """
    if not development_version:
        return Err(VersionComputationFailed(None, "no version in package metadata"))
    if not is_development_version(development_version):
        return Err(
            VersionComputationFailed(
                development_version,
                f"metadata version is not a {SNAPSHOT_SUFFIX} development version",
            )
        )

    release = development_version[: -len(SNAPSHOT_SUFFIX)]
    if parse_version(release) is None:
        return Err(VersionComputationFailed(development_version, "not a semantic version"))
    return Ok(release)


def next_development_version(release_version: str) -> Result[str, VersionComputationFailed]:
    """Patch-increment a release version and mark it as development.

    "2.3.0" -> "2.3.1-SNAPSHOT"
    """
    parsed = parse_version(release_version)
    if parsed is None:
        return Err(
            VersionComputationFailed(
                release_version,
                "failed to determine next development version",
            )
        )
    return Ok(f"{parsed.bump_patch()}{SNAPSHOT_SUFFIX}")
