"""Deployment to the Maven repository via `mvn deploy:deploy-file`."""

from __future__ import annotations

from pathlib import Path

from nexrel.core.result import Err, Ok, Result
from nexrel.output.console import ConsoleProtocol
from nexrel.platform.process import command_line, run_silent
from nexrel.release.errors import ExternalProcessFailure
from nexrel.release.options import UNIQUE_VERSION_MARKER, ReleaseOptions

MAVEN = "mvn"
DEPLOY_GOAL = "deploy:deploy-file"


def build_deploy_args(options: ReleaseOptions) -> list[str]:
    """Arguments for the deploy-file goal, in a fixed order."""
    args = [
        DEPLOY_GOAL,
        f"-Dfile={options.file}",
        f"-DgroupId={options.group_id}",
        f"-DartifactId={options.artifact_id}",
        f"-Dpackaging={options.extension}",
        f"-Dversion={options.version}",
    ]
    if options.unsecure:
        args.append("-Dmaven.wagon.http.ssl.insecure=true")
        args.append("-Dmaven.wagon.http.ssl.allowall=true")
    if options.classifier:
        args.append(f"-Dclassifier={options.classifier}")
    if options.unique_version == UNIQUE_VERSION_MARKER:
        args.append("-DuniqueVersion=true")
    args.append(f"-Durl={options.url}")
    if options.repository_id:
        args.append(f"-DrepositoryId={options.repository_id}")
    if options.settings_xml:
        # Maven only reads the path correctly when it is glued to -s.
        args.append(f"-s{options.settings_xml}")
    # https://maven.apache.org/plugins/maven-deploy-plugin/deploy-file-mojo.html
    args.extend(options.optional_params)
    if options.debug:
        args.extend(["-e", "-X"])
    return args


def deploy_file(
    options: ReleaseOptions, *, root: Path, console: ConsoleProtocol
) -> Result[None, ExternalProcessFailure]:
    """Run mvn with output streaming to the terminal."""
    cmd = [MAVEN, *build_deploy_args(options)]
    console.debug(f"Running command: {command_line(cmd)}")

    result = run_silent(cmd, cwd=root)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ExternalProcessFailure(
                tool=MAVEN,
                command=command_line(cmd),
                returncode=e.returncode,
                detail=e.stderr.strip(),
            )
        )

    console.success(f"Deployed {options.file} to {options.url}")
    return Ok(None)
