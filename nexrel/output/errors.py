"""Error presentation utilities.

Centralized error formatting and exit code mapping for release runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nexrel.core.errors import ErrorCode
from nexrel.output.console import Style
from nexrel.release.errors import (
    DirtyWorkingTree,
    ExternalProcessFailure,
    InvalidOption,
    MetadataUnreadable,
    MissingOption,
    PackagingFailed,
    ReleaseError,
    VersionComputationFailed,
)

if TYPE_CHECKING:
    from nexrel.output.console import ConsoleProtocol
    from nexrel.release.pipeline import PipelineFailure

__all__ = ["print_release_error", "print_pipeline_failure", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error to console with appropriate formatting."""
    match error:
        case MissingOption(keys=keys):
            quoted = ", ".join(f'"{k}"' for k in keys)
            console.error(f"Required options {quoted} missing.")
        case InvalidOption(key=key, expected=expected):
            console.error(f'Option "{key}" must be {expected}.')
        case VersionComputationFailed(version=version, reason=reason):
            console.error(f"{reason} (version: {version or 'undefined'})")
        case MetadataUnreadable(path=path, reason=reason):
            console.error(f"cannot read version metadata {path}: {reason}")
        case DirtyWorkingTree(entries=entries):
            console.error(f"uncommitted changes ({len(entries)} file(s))")
            console.print("hint: commit or stash them, then retry", Style.DIM)
        case ExternalProcessFailure(tool=tool, command=command, returncode=rc, detail=detail):
            if rc < 0:
                console.error(f"{tool} could not be started: {command}")
            else:
                console.error(f"{tool} failed (exit {rc}): {command}")
            if detail:
                console.print(detail, Style.DIM)
        case PackagingFailed(archive=archive, reason=reason):
            console.error(f"failed to package {archive}: {reason}")


def print_pipeline_failure(failure: PipelineFailure, console: ConsoleProtocol) -> None:
    """Print the failing step and what was already applied.

    There is no rollback, so the list of completed steps is what the operator
    has to undo (or finish) by hand.
    """
    print_release_error(failure.error, console)
    console.error(f"release aborted at step {failure.step}")

    completed = failure.report.completed
    if completed:
        console.warning("already applied (not rolled back, manual cleanup required):")
        for r in completed:
            label = f"{r.step}: {r.argument}" if r.argument else r.step
            console.print(f"  {label}", Style.DIM)
    if failure.pending:
        console.print(f"skipped: {len(failure.pending)} step(s)", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case MissingOption() | InvalidOption() | VersionComputationFailed():
            return int(ErrorCode.USER_ERROR)
        case MetadataUnreadable() | DirtyWorkingTree():
            return int(ErrorCode.ENV_ERROR)
        case ExternalProcessFailure() | PackagingFailed():
            return int(ErrorCode.RELEASE_ERROR)
    return int(ErrorCode.RELEASE_ERROR)
