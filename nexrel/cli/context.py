from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from nexrel.core.config import CONFIG_FILE_NAME, ReleaseConfig, load_config
from nexrel.core.errors import ErrorCode
from nexrel.core.result import Err
from nexrel.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(*, config_path: Path | None, verbose: bool = False) -> CLIContext:
    """Load the config file; the project root is the directory holding it."""
    console = RichConsole(verbose=verbose)
    path = (config_path or Path.cwd() / CONFIG_FILE_NAME).expanduser().resolve()

    config_result = load_config(path)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    console.debug(f"config: {path}")
    return CLIContext(root=path.parent, config=config_result.value, console=console)
