"""Assembly of the generated ``FileHandler.cs`` module.

The emitter collects one ``GetFile`` arm and one ``GetFileVersion`` arm per
asset, in the order the assets are added, and renders them through the
``FileHandler.cs.j2`` template.  Each lookup ends with exactly one fallback
arm that either returns ``null`` or delegates to the hand-written
``FileHandlerCustom.cs``.
"""

from __future__ import annotations

import asyncio
import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from filepacker.scanner.models import RESOURCE_CLASS_NAME, AssetRecord, GenerationContext
from filepacker.utils import write_text_file
from .templates import TemplateRenderer

MODULE_TEMPLATE = "FileHandler.cs.j2"


@dataclass(frozen=True)
class ContentArm:
    """``"<path>" => <expression>,`` inside ``GetFile``."""

    relative_path: str
    expression: str


@dataclass(frozen=True)
class VersionArm:
    """``"<path>" => "<ticks>",`` inside ``GetFileVersion``."""

    relative_path: str
    version: str


# ---------------------------------------------------------------------------
# Arm expressions
# ---------------------------------------------------------------------------


def templated_expression(interpolated_literal: str) -> str:
    """Encode an interpolated string literal to bytes at runtime."""
    return f"System.Text.Encoding.UTF8.GetBytes({interpolated_literal})"


def inline_expression(raw: bytes) -> str:
    """Decode the file bytes from an inline base64 literal at runtime."""
    encoded = base64.b64encode(raw).decode("ascii")
    return f'Convert.FromBase64String("{encoded}")'


def bundle_expression(key: str) -> str:
    """Reference the generated ``PluginFiles`` accessor for *key*."""
    return f"{RESOURCE_CLASS_NAME}.{key}"


# ---------------------------------------------------------------------------
# AccessorEmitter
# ---------------------------------------------------------------------------


class AccessorEmitter:
    """Accumulates lookup arms and writes the generated module.

    Args:
        context: Project-wide values (namespace, type name, fallback flag).
        renderer: Template renderer; a default one is created if omitted.
        uses_resources: Emit ``using <Project>.Properties;`` so that bundle
            arms can reference ``PluginFiles`` unqualified.
    """

    def __init__(
        self,
        context: GenerationContext,
        renderer: TemplateRenderer | None = None,
        *,
        uses_resources: bool = False,
    ) -> None:
        self.context = context
        self.renderer = renderer or TemplateRenderer()
        self.uses_resources = uses_resources
        self.content_arms: list[ContentArm] = []
        self.version_arms: list[VersionArm] = []

    def add(self, asset: AssetRecord, expression: str) -> None:
        """Append the content and version arm for *asset*."""
        self.content_arms.append(ContentArm(asset.relative_path, expression))
        self.version_arms.append(
            VersionArm(asset.relative_path, str(asset.last_modified_ticks))
        )

    def __len__(self) -> int:
        return len(self.content_arms)

    # -- Rendering ---------------------------------------------------------

    def template_context(self) -> dict[str, Any]:
        """Build the Jinja2 context for the module template."""
        return {
            "resource_namespace": (
                self.context.resource_namespace if self.uses_resources else ""
            ),
            "namespace": self.context.namespace,
            "type_name": self.context.type_name,
            "plugin_base": self.context.plugin_base,
            "has_custom_fallback": self.context.has_custom_fallback,
            "content_arms": self.content_arms,
            "version_arms": self.version_arms,
        }

    def render(self) -> str:
        """Return the full text of ``FileHandler.cs``."""
        return self.renderer.render(MODULE_TEMPLATE, self.template_context())

    async def write(self, path: Path | None = None) -> Path:
        """Overwrite the generated module on disk.

        No diffing is done; the file is always rewritten.  A failure while
        writing propagates and the partially written file is left as is.
        """
        target = path or self.context.output_path
        content = self.render()
        await asyncio.to_thread(write_text_file, target, content)
        return target
