"""Recovery of user choices from existing source files.

A project may already contain a generated ``FileHandler.cs`` (possibly edited
to a different namespace or class name) and a hand-written
``FileHandlerCustom.cs`` providing ``GetFileCustom`` / ``GetFileVersionCustom``.
The detector reads both so a regeneration keeps the user's namespace and
class name and wires the fallback arms to the custom file when it exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from filepacker.config import PackerConfig
from filepacker.scanner.models import CUSTOM_FILE_NAME, OUTPUT_FILE_NAME
from filepacker.utils import read_text_file

_NAMESPACE_KEYWORD = "namespace "
_CLASS_KEYWORD = "class "
_NAMESPACE_STOP = re.compile(r"[ {;]")
_CLASS_STOP = re.compile(r"[ \t:{]")


@dataclass(frozen=True)
class Customization:
    """What the detector found for a project."""

    namespace: str
    type_name: str
    has_custom_fallback: bool


def detect_namespace(path: Path) -> str | None:
    """Return the namespace declared in *path*, or ``None``.

    Only the first line that starts with ``namespace `` is considered; the
    name runs up to the first space, ``{`` or ``;``.  Both block-scoped and
    file-scoped declarations are recognised.
    """
    if not path.is_file():
        return None
    for line in read_text_file(path).splitlines():
        if line.startswith(_NAMESPACE_KEYWORD):
            rest = line[len(_NAMESPACE_KEYWORD):]
            return _NAMESPACE_STOP.split(rest, maxsplit=1)[0]
    return None


def detect_class(path: Path) -> str | None:
    """Return the first class name declared in *path*, or ``None``.

    A line qualifies when its first ``class `` occurrence is at the start of
    the line or directly after a space or tab.  The name runs up to the first
    space, tab, ``:`` or ``{``.
    """
    if not path.is_file():
        return None
    for line in read_text_file(path).splitlines():
        index = line.find(_CLASS_KEYWORD)
        if index == -1 or (index != 0 and line[index - 1] not in " \t"):
            continue
        rest = line[index + len(_CLASS_KEYWORD):]
        return _CLASS_STOP.split(rest, maxsplit=1)[0]
    return None


def detect_customization(
    project_root: Path, config: PackerConfig, project_name: str
) -> Customization:
    """Recover namespace, class name and fallback availability.

    The generated module takes precedence over the custom file; when neither
    yields a value the configured default namespace and the project name are
    used.
    """
    generated = project_root / OUTPUT_FILE_NAME
    custom = project_root / CUSTOM_FILE_NAME
    namespace = _first_found(detect_namespace(generated), detect_namespace(custom))
    type_name = _first_found(detect_class(generated), detect_class(custom))
    return Customization(
        namespace=config.default_namespace if namespace is None else namespace,
        type_name=project_name if type_name is None else type_name,
        has_custom_fallback=custom.is_file(),
    )


def _first_found(*values: str | None) -> str | None:
    return next((value for value in values if value is not None), None)


def resolve_project_name(project_root: Path) -> str:
    """Name of the project in *project_root*.

    The stem of the only ``*.csproj`` in the directory, otherwise the
    directory name.
    """
    manifests = sorted(Path(project_root).glob("*.csproj"))
    if len(manifests) == 1:
        return manifests[0].stem
    return Path(project_root).resolve().name
