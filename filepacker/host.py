"""Host-side capabilities used by the generator.

The generator never talks to an IDE directly.  Everything it needs from the
environment (progress text, message boxes, project reloads, project item
lookup and custom-tool runs) goes through the ``HostActions`` protocol, which
is injected into the orchestrator.  ``StandaloneHost`` implements it for the
command line with Rich console output.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from filepacker.bundle.resx import read_resx_keys
from filepacker.emitter.templates import TemplateRenderer
from filepacker.scanner.models import RESOURCE_CLASS_NAME, RESOURCE_DIR_NAME
from filepacker.utils import print_error, print_info, print_success, write_text_file

DESIGNER_TEMPLATE = "PluginFiles.Designer.cs.j2"


@runtime_checkable
class HostActions(Protocol):
    """Capabilities the generator consumes from its host."""

    def report_progress(self, text: str) -> None: ...

    def show_error(self, title: str, text: str) -> None: ...

    def show_info(self, title: str, text: str) -> None: ...

    def reload_project(self, project_name: str) -> None: ...

    def find_project_item(self, project_name: str, path: Path) -> Any | None:
        """Return a handle for *path* if *project_name* contains it, else ``None``."""
        ...

    def regenerate_from_item(self, item: Any) -> None:
        """Run the item's code generator (e.g. ``ResXFileCodeGenerator``)."""
        ...


@dataclass(frozen=True)
class ProjectItem:
    """A file the standalone host treats as part of a project."""

    path: Path
    project_name: str


class StandaloneHost:
    """``HostActions`` for running outside an IDE.

    Messages go to the Rich console.  There is no project system to reload,
    so any existing file counts as a project item, and regenerating the resx
    item writes ``PluginFiles.Designer.cs`` next to it.

    Args:
        quiet: Suppress progress lines (errors are always printed).
        renderer: Template renderer for the designer file.
    """

    def __init__(self, quiet: bool = False, renderer: TemplateRenderer | None = None) -> None:
        self.quiet = quiet
        self.renderer = renderer or TemplateRenderer()
        self.reloaded: list[str] = []

    def report_progress(self, text: str) -> None:
        if not self.quiet:
            print_info(text)

    def show_error(self, title: str, text: str) -> None:
        print_error(f"{title} {text}")

    def show_info(self, title: str, text: str) -> None:
        if not self.quiet:
            print_success(f"{title} {text}")

    def reload_project(self, project_name: str) -> None:
        self.reloaded.append(project_name)
        self.report_progress(f"Project file of {project_name} changed.")

    def find_project_item(self, project_name: str, path: Path) -> ProjectItem | None:
        path = Path(path)
        return ProjectItem(path, project_name) if path.is_file() else None

    def regenerate_from_item(self, item: ProjectItem) -> None:
        write_designer(item.path, item.project_name, self.renderer)


def write_designer(
    resx_path: Path, project_name: str, renderer: TemplateRenderer
) -> Path:
    """Write the strongly typed accessor class for a ``PluginFiles.resx``.

    The class lives in ``<project_name>.Properties``, the namespace the
    generated ``FileHandler.cs`` imports.
    """
    resx_path = Path(resx_path)
    content = renderer.render(
        DESIGNER_TEMPLATE,
        {
            "resource_namespace": f"{project_name}.{RESOURCE_DIR_NAME}",
            "class_name": RESOURCE_CLASS_NAME,
            "keys": read_resx_keys(resx_path),
        },
    )
    target = resx_path.with_name(f"{RESOURCE_CLASS_NAME}.Designer.cs")
    write_text_file(target, content)
    return target
