"""Jinja2 rendering for generated C# and resx files.

All three outputs (``FileHandler.cs``, ``PluginFiles.resx`` and the standalone
``PluginFiles.Designer.cs``) come from ``.j2`` files in
``filepacker/emitter/templates/``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .templater import csharp_string_literal

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders the generator's templates.

    Output is C# and XML assembled from already-escaped fragments, so
    autoescaping is off.  ``trim_blocks`` / ``lstrip_blocks`` keep the output
    byte-identical across runs for identical input.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["cs_string"] = csharp_string_literal
        self.env.filters["wrap"] = wrap_chunks

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render *template_name* (e.g. ``"FileHandler.cs.j2"``) with *context*."""
        return self.env.get_template(template_name).render(**context)


def wrap_chunks(value: str, width: int = 80) -> list[str]:
    """Split *value* into chunks of at most *width* characters."""
    return [value[i:i + width] for i in range(0, len(value), width)]
