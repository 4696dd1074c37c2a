"""Release archive packaging.

Builds the artifact from the target's file mappings. The container is always
a zip; its name already carries the resolved extension (see
artifact.archive_file_name), so nothing is renamed after writing.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from nexrel.core.config import FileMapping
from nexrel.core.result import Err, Ok, Result
from nexrel.output.console import ConsoleProtocol
from nexrel.release.errors import PackagingFailed


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    source: Path
    arcname: str


def _expand(path: Path) -> list[Path]:
    if path.is_dir():
        return sorted(p for p in path.rglob("*") if p.is_file())
    if path.is_file():
        return [path]
    return []


def _match(base: Path, patterns: tuple[str, ...]) -> list[Path]:
    """Glob patterns in order; a leading "!" removes earlier matches."""
    matched: dict[Path, None] = {}
    for pattern in patterns:
        if pattern.startswith("!"):
            for p in base.glob(pattern[1:]):
                for f in _expand(p):
                    matched.pop(f, None)
            continue
        for p in sorted(base.glob(pattern)):
            for f in _expand(p):
                matched.setdefault(f, None)
    return list(matched)


def collect_entries(files: tuple[FileMapping, ...], *, root: Path) -> list[ArchiveEntry]:
    """Resolve mappings to archive entries, sorted by archive name.

    Each matched file is stored under dest joined with its path relative to
    the mapping's cwd. When two files map to the same name the first mapping
    wins.
    """
    entries: dict[str, ArchiveEntry] = {}
    for mapping in files:
        base = root / mapping.cwd if mapping.cwd else root
        for path in _match(base, mapping.src):
            rel = path.relative_to(base).as_posix()
            arcname = posixpath.join(mapping.dest, rel) if mapping.dest else rel
            entries.setdefault(arcname, ArchiveEntry(source=path, arcname=arcname))
    return [entries[name] for name in sorted(entries)]


def package_artifact(
    files: tuple[FileMapping, ...],
    archive: Path,
    *,
    root: Path,
    console: ConsoleProtocol,
) -> Result[Path, PackagingFailed]:
    """Write the release archive.

    Args:
        files: Mappings, destinations already folder-injected.
        archive: Output path, relative to root unless absolute.
        root: Project root the mappings are resolved against.
    """
    out = archive if archive.is_absolute() else root / archive
    try:
        collected = collect_entries(files, root=root)
    except (ValueError, NotImplementedError) as e:
        # Path.glob rejects empty and absolute patterns.
        return Err(PackagingFailed(out, f"invalid file pattern: {e}"))
    entries = [e for e in collected if e.source.resolve() != out.resolve()]
    if not entries:
        return Err(PackagingFailed(out, "no files matched the configured mappings"))

    console.debug(f"Packaging {len(entries)} file(s) into {out}")
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        # Build outputs can carry pre-1980 mtimes, which zip cannot store.
        with ZipFile(out, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
            for entry in entries:
                console.debug(f"  {entry.arcname}")
                zf.write(entry.source, arcname=entry.arcname)
    except OSError as e:
        return Err(PackagingFailed(out, str(e)))

    console.success(f"Packaged {out.name} ({len(entries)} file(s))")
    return Ok(out)
