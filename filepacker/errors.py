"""Exception hierarchy for the file packer.

Every fatal condition of a generation run derives from ``PackerError`` so the
orchestrator can report it uniformly.  Plain filesystem errors (``OSError``)
are not wrapped and propagate as-is.
"""

from __future__ import annotations

from pathlib import Path


class PackerError(Exception):
    """Base class for all generation failures."""


class MissingAssetsDirectoryError(PackerError):
    """Raised when the ``Files`` directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory '{path.name}' not found!")


class DuplicateAssetKeyError(PackerError):
    """Raised when two assets map to the same relative path or resource key."""

    def __init__(self, key: str, first: Path, second: Path) -> None:
        self.key = key
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate asset key '{key}' for '{first}' and '{second}'"
        )


class ManifestAnchorNotFoundError(PackerError):
    """Raised when the resource bundle cannot be wired into the manifest."""

    def __init__(self, source: str | Path) -> None:
        self.source = str(source)
        super().__init__(
            f"The RESX file couldn't be attached to the project! "
            f"No marker region or closing </Project> tag found in {Path(source).name}."
        )


class ResourceRegistrationTimeoutError(PackerError):
    """Raised when the host never reports the resource file as a project item."""

    def __init__(self, path: Path, attempts: int) -> None:
        self.path = path
        self.attempts = attempts
        super().__init__(
            f"The RESX file couldn't be found as a project item after {attempts} "
            f"attempts! This can usually be fixed by trying again."
        )
