"""Release pipeline: a fixed, ordered list of steps run one after another.

The plan is built once from resolved options; every step's argument (version,
commit message, tag) is captured at that point and never re-resolved. The
executor stops at the first failing step. Nothing is rolled back: commits,
tags, pushes and version bumps applied before the failure stay in place and
the report names them so the operator can clean up.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from nexrel.core.config import FileMapping
from nexrel.core.result import Err, Ok, Result
from nexrel.git.repository import Repository
from nexrel.output.console import ConsoleProtocol, Style
from nexrel.release import steps
from nexrel.release.deploy import deploy_file
from nexrel.release.errors import ReleaseError
from nexrel.release.metadata import bump_version
from nexrel.release.options import ReleaseOptions
from nexrel.release.packaging import package_artifact

StepAction = Callable[[], Result[object, ReleaseError]]


@dataclass(frozen=True, slots=True)
class PipelineStep:
    name: str
    argument: str | None
    action: StepAction

    def describe(self) -> str:
        if self.argument is None:
            return self.name
        return f"{self.name}: {self.argument}"


@dataclass(frozen=True, slots=True)
class StepResult:
    step: str
    argument: str | None
    error: ReleaseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class PipelineReport:
    results: tuple[StepResult, ...]

    @property
    def completed(self) -> tuple[StepResult, ...]:
        return tuple(r for r in self.results if r.ok)

    @property
    def failed(self) -> StepResult | None:
        for r in self.results:
            if not r.ok:
                return r
        return None


@dataclass(frozen=True, slots=True)
class PipelineFailure:
    """A run that stopped at a step.

    Attributes:
        step: Name of the failing step.
        error: The step's error.
        report: Everything that ran, the failing step last.
        pending: Steps that never ran.
    """

    step: str
    error: ReleaseError
    report: PipelineReport
    pending: tuple[str, ...]


def build_release_plan(
    options: ReleaseOptions,
    files: tuple[FileMapping, ...],
    *,
    root: Path,
    console: ConsoleProtocol,
    repo: Repository | None = None,
) -> tuple[PipelineStep, ...]:
    """Build the fixed release sequence for one run.

    status -> bump(release) -> commit -> tag -> push -> package -> deploy ->
    bump(next) -> commit -> push
    """
    git = repo if repo is not None else Repository(root)
    archive = Path(options.file)
    follow_tags = options.push_tags

    def bump(version: str) -> StepAction:
        return lambda: bump_version(version, root=root, console=console)

    def commit(message: str) -> StepAction:
        return lambda: steps.commit(git, message, console)

    def push() -> Result[object, ReleaseError]:
        return steps.push(git, follow_tags=follow_tags, console=console)

    release_message = options.release_commit_message
    next_message = options.next_iteration_commit_message
    tag_name = options.tag
    tag_message = options.tag_message

    return (
        PipelineStep("git-status", None, lambda: steps.check_clean(git, console)),
        PipelineStep("version", options.version, bump(options.version)),
        PipelineStep("git-commit", release_message, commit(release_message)),
        PipelineStep(
            "git-tag", tag_name, lambda: steps.tag(git, tag_name, tag_message, console)
        ),
        PipelineStep("git-push", None, push),
        PipelineStep(
            "package",
            options.file,
            lambda: package_artifact(files, archive, root=root, console=console),
        ),
        PipelineStep(
            "deploy-file",
            options.url,
            lambda: deploy_file(options, root=root, console=console),
        ),
        PipelineStep("version", options.next_version, bump(options.next_version)),
        PipelineStep("git-commit", next_message, commit(next_message)),
        PipelineStep("git-push", None, push),
    )


def run_pipeline(
    plan: tuple[PipelineStep, ...], *, console: ConsoleProtocol
) -> Result[PipelineReport, PipelineFailure]:
    """Run every step in order, stopping at the first failure."""
    results: list[StepResult] = []
    for index, step in enumerate(plan):
        console.print(f"[{index + 1}/{len(plan)}] {step.describe()}", Style.BOLD)
        outcome = step.action()
        if isinstance(outcome, Err):
            results.append(StepResult(step.name, step.argument, outcome.error))
            return Err(
                PipelineFailure(
                    step=step.name,
                    error=outcome.error,
                    report=PipelineReport(tuple(results)),
                    pending=tuple(s.describe() for s in plan[index + 1 :]),
                )
            )
        results.append(StepResult(step.name, step.argument))

    return Ok(PipelineReport(tuple(results)))


def describe_plan(plan: tuple[PipelineStep, ...], *, console: ConsoleProtocol) -> None:
    """Print the plan without running anything (dry run)."""
    for index, step in enumerate(plan):
        console.print(f"[{index + 1}/{len(plan)}] {step.describe()}", Style.DIM)
