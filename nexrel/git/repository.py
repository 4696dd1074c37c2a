"""Git repository abstraction.

The Repository class wraps the git commands a release needs: a status check
before anything is touched, commit, annotated tag and push. Every operation
spawns git and returns a Result; a non-zero exit or a spawn failure becomes
a GitError.

Usage:
    repo = Repository(Path("."))

    match repo.status():
        case Ok(status) if status.is_clean:
            print("Working tree clean")
        case Ok(status):
            print(f"{len(status.entries)} uncommitted change(s)")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nexrel.core.result import Err, Ok, Result
from nexrel.platform.process import ProcessError
from nexrel.platform.process import run as run_process

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "push")
        message: Error message
        returncode: Process return code (-1 if git could not be started)
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    def pretty_xy(self) -> str:
        """Format XY with dots for spaces (". M" instead of " M")."""
        return self.xy.replace(" ", ".")


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed `git status --porcelain=v1 -b` output.

    The "## branch" header line is skipped; only file entries are kept.

    Attributes:
        entries: All status entries (staged, unstaged, untracked)
    """

    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if working tree has no changes, untracked files included."""
        return len(self.entries) == 0


class Repository:
    """Git repository the release runs in.

    Attributes:
        path: Path to the repository working tree
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def status(self) -> Result[GitStatus, GitError]:
        """Get repository status.

        Any output beyond the branch header counts as an uncommitted change,
        so callers decide cleanliness from content, not from the exit code.
        """
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(_git_error("status", e))
            case Ok(stdout):
                return Ok(self._parse_status(stdout))

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def commit_all(self, message: str) -> Result[None, GitError]:
        """Stage all tracked changes and commit them.

        Untracked files are not added.
        """
        result = self._run(["commit", "-a", "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("commit", result.error))
        return Ok(None)

    def tag_annotated(self, tag: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD."""
        result = self._run(["tag", "-a", tag, "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("tag", result.error))
        return Ok(None)

    def push(self, *, follow_tags: bool = False) -> Result[None, GitError]:
        """Push the current branch to its upstream.

        Tags are only sent when follow_tags is set (annotated tags reachable
        from the pushed commits); otherwise they stay local.
        """
        args = ["push"]
        if follow_tags:
            args.append("--follow-tags")
        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error(" ".join(args), result.error))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository, without a timeout."""
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)

    def _parse_status(self, output: str) -> GitStatus:
        lines = [ln for ln in output.splitlines() if ln.strip() and not ln.startswith("##")]
        entries = tuple(e for e in (self._parse_entry(ln) for ln in lines) if e)
        return GitStatus(entries=entries)

    def _parse_entry(self, line: str) -> StatusEntry | None:
        if len(line) < 4:
            return None
        return StatusEntry(xy=line[:2], path=line[3:])


def _git_error(command: str, e: ProcessError) -> GitError:
    if e.spawn_failed:
        message = f"git could not be started: {e.stderr.strip()}"
    else:
        message = e.stderr.strip() or e.stdout.strip() or f"git {command} failed"
    return GitError(command=command, message=message, returncode=e.returncode)
