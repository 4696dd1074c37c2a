"""Release option resolution.

Turns the raw option table of a config target, plus package metadata, into
one immutable ReleaseOptions. Nothing here touches git, npm or mvn.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from nexrel.core.config import FileMapping
from nexrel.core.result import Err, Ok, Result
from nexrel.core.structured import get_bool, get_str, get_str_list
from nexrel.release.artifact import (
    archive_file_name,
    default_file_name,
    file_name_base,
    inject_dest_folder,
    resolve_extension,
)
from nexrel.release.errors import (
    InvalidOption,
    MissingOption,
    ReleaseError,
    VersionComputationFailed,
)
from nexrel.release.metadata import PackageMetadata
from nexrel.release.semver import next_development_version, parse_version, release_version_of

REQUIRED_KEYS = ("group_id", "url")

DEFAULT_COMMIT_PREFIX = "%s"
COMMIT_TAG = "[nexrel]"

# Marker value deploy-file expects for -DuniqueVersion.
UNIQUE_VERSION_MARKER = "true"

_STR_KEYS = (
    "group_id",
    "url",
    "artifact_id",
    "packaging",
    "type",
    "classifier",
    "version",
    "file",
    "dest_folder",
    "commit_prefix",
    "repository_id",
    "settings_xml",
    "goal",
    "version_file",
)
_BOOL_KEYS = ("inject_dest_folder", "unsecure", "debug", "push_tags")


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    """Fully resolved options for one release run.

    packaging is the declared artifact type; extension is the file extension
    the artifact is written and deployed with. They differ for classified
    artifacts (a "jar" with classifier "sources" ships as "zip").
    """

    group_id: str
    artifact_id: str
    version: str
    next_version: str
    url: str
    file: str
    extension: str
    goal: str
    packaging: str | None = None
    type: str | None = None
    classifier: str | None = None
    dest_folder: str | None = None
    inject_dest_folder: bool = True
    commit_prefix: str = DEFAULT_COMMIT_PREFIX
    unique_version: str | None = None
    repository_id: str | None = None
    settings_xml: str | None = None
    unsecure: bool = False
    optional_params: tuple[str, ...] = ()
    debug: bool = False
    push_tags: bool = False

    @property
    def tag(self) -> str:
        return f"{self.artifact_id}-{self.version}"

    @property
    def tag_message(self) -> str:
        return f"{COMMIT_TAG} release tag {self.tag}"

    @property
    def release_commit_message(self) -> str:
        return format_commit_message(self.commit_prefix, f"{COMMIT_TAG} release {self.version}")

    @property
    def next_iteration_commit_message(self) -> str:
        return format_commit_message(
            self.commit_prefix, f"{COMMIT_TAG} prepare for next development iteration"
        )

    @property
    def dest_folder_name(self) -> str:
        """Folder injected in front of every archive destination."""
        return self.dest_folder or file_name_base(self.artifact_id, self.version, self.classifier)


def format_commit_message(prefix: str, message: str) -> str:
    """Render a commit message through the prefix template.

    "%s" in the prefix is replaced by the message; a prefix without a
    placeholder is simply prepended.
    """
    if "%s" in prefix:
        return prefix.replace("%s", message)
    return f"{prefix}{message}"


def check_required(raw: Mapping[str, object]) -> Result[None, MissingOption | InvalidOption]:
    """Fail with every required key that is absent, not just the first.

    A required key holding a non-string is an InvalidOption, not a missing one.
    """
    for key in REQUIRED_KEYS:
        if key in raw and not isinstance(raw[key], str):
            return Err(InvalidOption(key, "a string"))
    missing = tuple(k for k in REQUIRED_KEYS if get_str(raw, k) is None)
    if missing:
        return Err(MissingOption(missing))
    return Ok(None)


def check_types(raw: Mapping[str, object]) -> Result[None, InvalidOption]:
    for key in _STR_KEYS:
        if key in raw and not isinstance(raw[key], str):
            return Err(InvalidOption(key, "a string"))
    for key in _BOOL_KEYS:
        if key in raw and get_bool(raw, key) is None:
            return Err(InvalidOption(key, "true or false"))
    if "unique_version" in raw and not isinstance(raw["unique_version"], str | bool):
        return Err(InvalidOption("unique_version", "a string or boolean"))
    if "optional_params" in raw and get_str_list(raw, "optional_params") is None:
        return Err(InvalidOption("optional_params", "a list of strings"))
    return Ok(None)


def _commit_prefix(raw: Mapping[str, object]) -> str:
    # Not stripped: "PROJ-12 " keeps its separating space.
    value = raw.get("commit_prefix")
    if isinstance(value, str) and value:
        return value
    return DEFAULT_COMMIT_PREFIX


def _unique_version(raw: Mapping[str, object]) -> str | None:
    value = raw.get("unique_version")
    # TOML booleans stand for the matching string marker.
    if isinstance(value, bool):
        return "true" if value else "false"
    return get_str(raw, "unique_version")


def resolve_options(
    raw: Mapping[str, object],
    metadata: PackageMetadata,
    *,
    target: str,
    explicit_version: str | None = None,
) -> Result[ReleaseOptions, ReleaseError]:
    """Resolve raw options into ReleaseOptions.

    Args:
        raw: Option table (shared options merged with the target's).
        metadata: Parsed package.json supplying name/version/packaging defaults.
        target: Config target name, the default goal.
        explicit_version: Release version override (CLI), wins over the
            "version" option and over the metadata version.
    """
    required = check_required(raw)
    if isinstance(required, Err):
        return required
    typed = check_types(raw)
    if isinstance(typed, Err):
        return typed

    artifact_id = get_str(raw, "artifact_id") or metadata.name
    if artifact_id is None:
        return Err(MissingOption(("artifact_id",)))
    packaging = get_str(raw, "packaging") or metadata.packaging

    override = explicit_version or get_str(raw, "version")
    if override is not None:
        if parse_version(override) is None:
            return Err(VersionComputationFailed(override, "not a semantic version"))
        version = override
    else:
        stripped = release_version_of(metadata.version)
        if isinstance(stripped, Err):
            return stripped
        version = stripped.value

    next_version = next_development_version(version)
    if isinstance(next_version, Err):
        return next_version

    classifier = get_str(raw, "classifier")
    type_ = get_str(raw, "type")
    extension = resolve_extension(packaging, classifier, type_)
    file = get_str(raw, "file") or default_file_name(artifact_id, version, classifier, extension)

    return Ok(
        ReleaseOptions(
            group_id=get_str(raw, "group_id") or "",
            artifact_id=artifact_id,
            version=version,
            next_version=next_version.value,
            url=get_str(raw, "url") or "",
            file=archive_file_name(file, extension),
            extension=extension,
            goal=get_str(raw, "goal") or target,
            packaging=packaging,
            type=type_,
            classifier=classifier,
            dest_folder=get_str(raw, "dest_folder"),
            inject_dest_folder=get_bool(raw, "inject_dest_folder") is not False,
            commit_prefix=_commit_prefix(raw),
            unique_version=_unique_version(raw),
            repository_id=get_str(raw, "repository_id"),
            settings_xml=get_str(raw, "settings_xml"),
            unsecure=get_bool(raw, "unsecure") or False,
            optional_params=tuple(get_str_list(raw, "optional_params") or ()),
            debug=get_bool(raw, "debug") or False,
            push_tags=get_bool(raw, "push_tags") or False,
        )
    )


def resolve_files(
    options: ReleaseOptions, files: tuple[FileMapping, ...]
) -> tuple[FileMapping, ...]:
    """Apply destination-folder injection when it is enabled."""
    if not options.inject_dest_folder:
        return files
    return inject_dest_folder(options.dest_folder_name, files)
