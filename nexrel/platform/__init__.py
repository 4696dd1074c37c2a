"""Platform helpers: subprocess execution."""

from nexrel.platform.process import ProcessError, command_line, run, run_silent

__all__ = ["ProcessError", "command_line", "run", "run_silent"]
