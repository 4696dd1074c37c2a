"""Error types for a release run.

Errors are plain values carried in Err results. Resolution errors
(MissingOption, InvalidOption, VersionComputationFailed, MetadataUnreadable)
stop the run before any side effect; the others abort the pipeline at the
step that produced them. None of them is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MissingOption:
    """One or more required options are absent; lists every missing key."""

    keys: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class InvalidOption:
    key: str
    expected: str


@dataclass(frozen=True, slots=True)
class VersionComputationFailed:
    version: str | None
    reason: str


@dataclass(frozen=True, slots=True)
class MetadataUnreadable:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class DirtyWorkingTree:
    """`git status` reported uncommitted changes.

    This is a content check: git itself exited 0.
    """

    entries: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ExternalProcessFailure:
    """An external tool exited non-zero or could not be started.

    Attributes:
        tool: Tool name (git, npm, mvn)
        command: Human-readable command that failed
        returncode: Exit code, -1 when the process never started
        detail: Captured stderr or the OS error, may be empty
    """

    tool: str
    command: str
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class PackagingFailed:
    archive: Path
    reason: str


ReleaseError = (
    MissingOption
    | InvalidOption
    | VersionComputationFailed
    | MetadataUnreadable
    | DirtyWorkingTree
    | ExternalProcessFailure
    | PackagingFailed
)
