"""Artifact naming: extension, file name and archive folder.

All functions here are pure; they only compute names from options.
"""

from __future__ import annotations

import posixpath
from dataclasses import replace
from pathlib import PurePath

from nexrel.core.config import FileMapping

# Container format written by the packaging step.
ARCHIVE_FORMAT = "zip"

_DOC_CLASSIFIERS = frozenset({"javadoc", "sources"})


def resolve_extension(packaging: str | None, classifier: str | None, type_: str | None) -> str:
    """Pick the artifact file extension.

    javadoc/sources classifiers always ship as zip; otherwise an explicit
    type wins over the declared packaging.
    """
    if classifier in _DOC_CLASSIFIERS:
        return ARCHIVE_FORMAT
    return type_ or packaging or ARCHIVE_FORMAT


def file_name_base(artifact_id: str, version: str, classifier: str | None) -> str:
    """<artifact_id>-<version>[-<classifier>]"""
    base = f"{artifact_id}-{version}"
    if classifier:
        base += f"-{classifier}"
    return base


def default_file_name(
    artifact_id: str, version: str, classifier: str | None, extension: str
) -> str:
    return f"{file_name_base(artifact_id, version, classifier)}.{extension}"


def archive_file_name(file: str, extension: str) -> str:
    """Final name of the packaged artifact.

    The archive is always a zip container; a ".zip" suffix is rewritten to
    the resolved extension (e.g. lib-1.0.zip -> lib-1.0.jar). Only the suffix
    is touched, so "zipper-1.0.zip" becomes "zipper-1.0.jar".
    """
    path = PurePath(file)
    if path.suffix == f".{ARCHIVE_FORMAT}" and extension != ARCHIVE_FORMAT:
        return str(path.with_suffix(f".{extension}"))
    return file


def inject_dest_folder(folder: str, mappings: tuple[FileMapping, ...]) -> tuple[FileMapping, ...]:
    """Prefix every mapping's destination with folder.

    An absolute dest is nested too ("/a" becomes "<folder>/a"). Not
    idempotent: applying it twice nests the folder twice.
    """
    return tuple(
        replace(m, dest=posixpath.normpath(posixpath.join(folder, (m.dest or "").lstrip("/"))))
        for m in mappings
    )
