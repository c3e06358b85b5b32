"""The ``PluginFiles.resx`` side resource file.

Every bundled asset becomes one ``System.Byte[]`` entry named after its
derived key.  The file is regenerated from scratch on each run, so keys from a
previous run never survive.
"""

from __future__ import annotations

import asyncio
import base64
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from filepacker.emitter.templates import TemplateRenderer
from filepacker.utils import write_text_file

RESX_TEMPLATE = "PluginFiles.resx.j2"


@dataclass(frozen=True)
class ResourceEntry:
    """One bundled asset: accessor key and the file providing its bytes."""

    key: str
    source_path: Path


class ResourceSet:
    """Ordered, duplicate-free collection of ``ResourceEntry`` objects."""

    def __init__(self) -> None:
        self._entries: dict[str, ResourceEntry] = {}

    def add(self, key: str, source_path: Path) -> ResourceEntry:
        """Register *source_path* under *key*.

        Raises:
            ValueError: If *key* is already present.
        """
        if key in self._entries:
            raise ValueError(f"Resource key already registered: {key}")
        entry = ResourceEntry(key, Path(source_path))
        self._entries[key] = entry
        return entry

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


# ---------------------------------------------------------------------------
# Reading and writing
# ---------------------------------------------------------------------------


def render_resx(resources: ResourceSet, renderer: TemplateRenderer) -> str:
    """Render the resx document, reading each source file's current bytes."""
    payloads = [
        {
            "key": entry.key,
            "payload": base64.b64encode(entry.source_path.read_bytes()).decode("ascii"),
        }
        for entry in resources
    ]
    return renderer.render(RESX_TEMPLATE, {"resources": payloads})


async def write_resx(
    resources: ResourceSet, path: Path, renderer: TemplateRenderer
) -> Path:
    """Render and overwrite the resx file at *path*."""
    content = await asyncio.to_thread(render_resx, resources, renderer)
    await asyncio.to_thread(write_text_file, path, content)
    return path


def read_resx_keys(path: Path) -> list[str]:
    """Return the ``data`` entry names of an existing resx file, in order."""
    tree = ET.parse(path)
    return [
        node.attrib["name"]
        for node in tree.getroot().iter("data")
        if "name" in node.attrib
    ]
