"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from nexrel.core.config import ConfigError
from nexrel.core.errors import ErrorCode
from nexrel.core.result import Err, Result
from nexrel.output.console import Style

if TYPE_CHECKING:
    from nexrel.cli.context import CLIContext

T = TypeVar("T")


def value_or_exit(result: Result[T, ConfigError], ctx: CLIContext) -> T:
    """Return the Ok value, or print the config error with its hint and exit."""
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(error.message)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return result.value
