"""Text-asset classification by path suffix."""

from __future__ import annotations

from collections.abc import Iterable


def is_text_candidate(relative_path: str, extensions: Iterable[str]) -> bool:
    """Return ``True`` if *relative_path* ends with one of *extensions*.

    This is a plain, case-sensitive suffix test: ``".js"`` matches
    ``"/app.min.js"`` but not ``"/APP.JS"``, and an un-normalised ``"js"``
    would also match ``"/notjs"``.
    """
    return any(relative_path.endswith(ext) for ext in extensions)
