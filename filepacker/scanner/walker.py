"""Recursive enumeration of the assets directory.

Files are yielded in the order the file system reports them; nothing is
sorted, so the generated switch arms follow the native traversal order.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from filepacker.errors import MissingAssetsDirectoryError
from .classifier import is_text_candidate
from .models import AssetRecord

# .NET DateTime ticks (100 ns units since 0001-01-01) at the Unix epoch.
_TICKS_AT_UNIX_EPOCH = 621_355_968_000_000_000


def walk_assets(root: str | Path) -> Iterator[tuple[Path, str]]:
    """Enumerate every regular file under *root*.

    The existence check runs immediately, not on first iteration, so callers
    fail before producing any output.

    Args:
        root: The assets directory (normally ``<project>/Files``).

    Returns:
        A lazy iterator of ``(absolute_path, relative_path)`` pairs.  The
        relative path starts with ``/`` and always uses forward slashes.

    Raises:
        MissingAssetsDirectoryError: If *root* is not a directory.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise MissingAssetsDirectoryError(root_path)
    return _walk(root_path)


def _walk(root: Path) -> Iterator[tuple[Path, str]]:
    root_str = str(root)
    for dirpath, _dirnames, filenames in os.walk(root_str):
        for filename in filenames:
            absolute = os.path.join(dirpath, filename)
            if not os.path.isfile(absolute):
                continue
            yield Path(absolute), to_relative_path(absolute[len(root_str):])


def to_relative_path(suffix: str) -> str:
    """Normalise the part of a path below the assets root.

    ``"\\css\\site.css"`` and ``"css/site.css"`` both become ``"/css/site.css"``.
    """
    rel = suffix.replace("\\", "/")
    if not rel.startswith("/"):
        rel = "/" + rel
    return rel


def last_modified_ticks(path: Path) -> int:
    """Return the last write time of *path* as .NET UTC ticks."""
    return _TICKS_AT_UNIX_EPOCH + path.stat().st_mtime_ns // 100


def scan_assets(root: str | Path, text_extensions: Iterable[str]) -> Iterator[AssetRecord]:
    """Build an ``AssetRecord`` for every file under *root*.

    Raises:
        MissingAssetsDirectoryError: If *root* is not a directory.
    """
    extensions = tuple(text_extensions)
    pairs = walk_assets(root)
    return (_make_record(absolute, relative, extensions) for absolute, relative in pairs)


def _make_record(absolute: Path, relative: str, extensions: tuple[str, ...]) -> AssetRecord:
    return AssetRecord(
        relative_path=relative,
        absolute_path=absolute,
        last_modified_ticks=last_modified_ticks(absolute),
        is_text_candidate=is_text_candidate(relative, extensions),
        raw_content=absolute.read_bytes(),
    )
