"""Git-backed release steps.

Each function runs one git operation, prints one progress line and maps the
outcome onto the release error taxonomy.
"""

from __future__ import annotations

from nexrel.core.result import Err, Ok, Result
from nexrel.git.repository import GitError, Repository
from nexrel.output.console import ConsoleProtocol, Style
from nexrel.release.errors import DirtyWorkingTree, ExternalProcessFailure, ReleaseError


def _process_failure(e: GitError) -> ExternalProcessFailure:
    return ExternalProcessFailure(
        tool="git",
        command=f"git {e.command}",
        returncode=e.returncode,
        detail=e.message,
    )


def check_clean(repo: Repository, console: ConsoleProtocol) -> Result[None, ReleaseError]:
    console.debug("Checking git for uncommitted changes")
    status = repo.status()
    if isinstance(status, Err):
        return Err(_process_failure(status.error))

    if not status.value.is_clean:
        entries = tuple(f"{e.pretty_xy()} {e.path}" for e in status.value.entries)
        for line in entries:
            console.print(f"  {line}", Style.DIM)
        return Err(DirtyWorkingTree(entries))

    console.success("Repo is clean")
    return Ok(None)


def commit(repo: Repository, message: str, console: ConsoleProtocol) -> Result[None, ReleaseError]:
    console.debug(f"Committing to git: {message}")
    result = repo.commit_all(message)
    if isinstance(result, Err):
        return Err(_process_failure(result.error))
    console.success(f"Committed: {message}")
    return Ok(None)


def tag(
    repo: Repository, name: str, message: str, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    console.debug(f"Tagging git with {name}")
    result = repo.tag_annotated(name, message)
    if isinstance(result, Err):
        return Err(_process_failure(result.error))
    console.success(f"Tagged {name}")
    return Ok(None)


def push(
    repo: Repository, *, follow_tags: bool, console: ConsoleProtocol
) -> Result[None, ReleaseError]:
    branch = repo.current_branch() or "HEAD"
    console.debug(f"Pushing {branch} to remote")
    result = repo.push(follow_tags=follow_tags)
    if isinstance(result, Err):
        return Err(_process_failure(result.error))
    console.success(f"Pushed {branch}{' with tags' if follow_tags else ''}")
    return Ok(None)
