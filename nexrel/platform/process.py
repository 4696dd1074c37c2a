"""Subprocess execution with Result-based error handling.

Every external tool the release drives (git, npm, mvn) goes through here.
A spawn failure (tool not on PATH, permission denied) and a non-zero exit are
both reported as ProcessError; callers never see an exception.

Release steps run without a timeout: a hung tool stalls the release, which is
left to the tool (and the operator) to resolve.

Usage:
    match run(["git", "status", "--porcelain"], cwd=project_root):
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"git failed: {error.stderr}")
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from nexrel.core.result import Err, Ok, Result

__all__ = ["ProcessError", "command_line", "run", "run_silent"]

# Return code used when the process could not be started at all.
SPAWN_FAILED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or SPAWN_FAILED if it never started.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the OS error for spawn failures.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def spawn_failed(self) -> bool:
        return self.returncode == SPAWN_FAILED

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.spawn_failed:
            return f"{cmd_str} could not be started"
        return f"{cmd_str} failed (exit {self.returncode})"


def command_line(cmd: list[str]) -> str:
    """Render a command for log output."""
    return shlex.join(cmd)


def _spawn_error(cmd: list[str], e: OSError) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=SPAWN_FAILED, stdout="", stderr=str(e)))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command, capturing output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return _spawn_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Used for mvn, whose progress output the operator needs to see live.
    Nothing is captured, so a failure carries only the exit code.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return _spawn_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
