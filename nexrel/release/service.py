from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from nexrel.core.config import FileMapping, ReleaseConfig, TargetConfig
from nexrel.core.result import Err, Ok, Result
from nexrel.core.structured import get_str
from nexrel.git.repository import Repository
from nexrel.output.console import ConsoleProtocol, Style
from nexrel.release.errors import ReleaseError
from nexrel.release.metadata import DEFAULT_VERSION_FILE, read_package_metadata
from nexrel.release.options import ReleaseOptions, check_required, resolve_files, resolve_options
from nexrel.release.pipeline import (
    PipelineFailure,
    PipelineReport,
    build_release_plan,
    describe_plan,
    run_pipeline,
)


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything a run needs, resolved before the first step executes."""

    root: Path
    options: ReleaseOptions
    files: tuple[FileMapping, ...]


def prepare_release(
    *,
    root: Path,
    config: ReleaseConfig,
    target: TargetConfig,
    explicit_version: str | None = None,
    debug: bool = False,
) -> Result[ReleaseContext, ReleaseError]:
    raw = config.merged_options(target)
    if debug:
        raw["debug"] = True

    # Required keys are reported before the metadata file is even read.
    required = check_required(raw)
    if isinstance(required, Err):
        return required

    version_file = get_str(raw, "version_file") or DEFAULT_VERSION_FILE
    metadata = read_package_metadata(root / version_file)
    if isinstance(metadata, Err):
        return metadata

    options = resolve_options(
        raw,
        metadata.value,
        target=target.name,
        explicit_version=explicit_version,
    )
    if isinstance(options, Err):
        return options

    files = resolve_files(options.value, target.files)
    return Ok(ReleaseContext(root=root, options=options.value, files=files))


def print_summary(ctx: ReleaseContext, console: ConsoleProtocol) -> None:
    o = ctx.options
    console.header(f"{o.group_id}:{o.artifact_id} {o.version}")
    console.print(f"goal:         {o.goal}", Style.DIM)
    console.print(f"next version: {o.next_version}", Style.DIM)
    console.print(f"artifact:     {o.file}", Style.DIM)
    console.print(f"repository:   {o.url}", Style.DIM)
    console.print(f"tag:          {o.tag}", Style.DIM)
    if o.inject_dest_folder:
        console.print(f"dest folder:  {o.dest_folder_name}", Style.DIM)
    else:
        console.debug("dest folder injection disabled")


def run_release(
    ctx: ReleaseContext,
    *,
    console: ConsoleProtocol,
    dry_run: bool = False,
    repo: Repository | None = None,
) -> Result[PipelineReport, PipelineFailure]:
    """Build the release plan and run it (or just print it on dry runs)."""
    print_summary(ctx, console)
    plan = build_release_plan(
        ctx.options,
        ctx.files,
        root=ctx.root,
        console=console,
        repo=repo,
    )

    if dry_run:
        console.newline()
        describe_plan(plan, console=console)
        return Ok(PipelineReport(()))

    console.newline()
    return run_pipeline(plan, console=console)
