"""Payload strategies for non-templated assets.

``INLINE`` embeds each file as a base64 literal inside ``FileHandler.cs``.
``BUNDLE`` stores the files in ``Properties/PluginFiles.resx`` and references
the generated ``PluginFiles.<key>`` accessors, which requires the manifest to
wire the resx through ``ResXFileCodeGenerator``.

The selector is used in two steps: :meth:`ResourceStrategySelector.plan`
computes the new manifest text without touching the disk (so an unpatchable
manifest aborts the run early), and :meth:`ResourceStrategySelector.finalize`
performs the side effects once ``FileHandler.cs`` has been written.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from filepacker.config import PackerConfig
from filepacker.emitter.accessors import bundle_expression, inline_expression
from filepacker.emitter.templates import TemplateRenderer
from filepacker.errors import ResourceRegistrationTimeoutError
from filepacker.scanner.models import AssetRecord, GenerationContext
from filepacker.utils import delete_if_exists, write_text_file
from .manifest import BUNDLE_REGION, ManifestRegion
from .resx import ResourceSet, write_resx


class ResourceStrategy(str, Enum):
    """How non-templated file bytes are stored."""

    INLINE = "inline"
    BUNDLE = "bundle"

    @classmethod
    def from_config(cls, config: PackerConfig) -> "ResourceStrategy":
        return cls.INLINE if config.use_inline_payloads else cls.BUNDLE


class ManifestAction(str, Enum):
    """What finalisation does with the bundle and the manifest."""

    ATTACH = "attach"
    DETACH = "detach"
    NONE = "none"


@dataclass(frozen=True)
class ManifestPlan:
    """Outcome of :meth:`ResourceStrategySelector.plan`.

    Attributes:
        action: Whether the bundle gets attached, detached or left alone.
        original: Manifest text as read, ``None`` if it was not read or does
            not exist.
        updated: Manifest text to write, ``None`` when nothing is written.
        region_removed: ``True`` if a detach removed an existing region.
    """

    action: ManifestAction
    original: str | None = None
    updated: str | None = None
    region_removed: bool = False

    @property
    def changed(self) -> bool:
        return self.updated is not None and self.updated != self.original


# ---------------------------------------------------------------------------
# Project item polling
# ---------------------------------------------------------------------------


async def wait_for_project_item(
    host: Any,
    project_name: str,
    path: Path,
    attempts: int,
    delay: float,
) -> Any | None:
    """Poll the host until it reports *path* as a project item.

    Args:
        host: Object providing ``find_project_item(project_name, path)``.
        project_name: Project expected to contain *path*.
        path: File that was just written.
        attempts: Maximum number of lookups (at least one is made).
        delay: Seconds to sleep between lookups.

    Returns:
        The item handle, or ``None`` if every attempt came back empty.
    """
    for attempt in range(max(attempts, 1)):
        item = host.find_project_item(project_name, path)
        if item is not None:
            return item
        if attempt < attempts - 1:
            await asyncio.sleep(delay)
    return None


# ---------------------------------------------------------------------------
# ResourceStrategySelector
# ---------------------------------------------------------------------------


class ResourceStrategySelector:
    """Chooses arm expressions and applies the bundle side effects.

    Args:
        context: Project-wide values (paths, project name).
        config: Run configuration; selects the strategy.
        host: ``HostActions`` implementation for reloads and item lookup.
        renderer: Template renderer for the resx file.
        region: Manifest region wiring the bundle into the build.
    """

    def __init__(
        self,
        context: GenerationContext,
        config: PackerConfig,
        host: Any,
        renderer: TemplateRenderer | None = None,
        region: ManifestRegion = BUNDLE_REGION,
    ) -> None:
        self.context = context
        self.config = config
        self.host = host
        self.renderer = renderer or TemplateRenderer()
        self.region = region
        self.strategy = ResourceStrategy.from_config(config)
        self.resources = ResourceSet()

    @property
    def uses_resources(self) -> bool:
        """``True`` if arms may reference ``PluginFiles``."""
        return self.strategy is ResourceStrategy.BUNDLE

    def expression_for(self, asset: AssetRecord, key: str) -> str:
        """Return the ``GetFile`` arm expression for a non-templated asset."""
        if self.strategy is ResourceStrategy.INLINE:
            return inline_expression(asset.raw_content)
        self.resources.add(key, asset.absolute_path)
        return bundle_expression(key)

    # -- Planning (pure) ---------------------------------------------------

    def plan(self) -> ManifestPlan:
        """Compute the manifest change for the current resource set.

        Raises:
            ManifestAnchorNotFoundError: If the bundle must be attached but
                the manifest has no place for the region.
            FileNotFoundError: If the bundle must be attached and the manifest
                does not exist.
        """
        manifest = self.context.manifest_path

        if self.strategy is ResourceStrategy.BUNDLE and self.resources:
            original = _read_manifest(manifest)
            updated = self.region.apply(original, source=str(manifest))
            return ManifestPlan(ManifestAction.ATTACH, original, updated)

        if self.strategy is ResourceStrategy.INLINE and not self.config.clean_stale_bundle:
            return ManifestPlan(ManifestAction.NONE)

        if not manifest.is_file():
            return ManifestPlan(ManifestAction.DETACH)
        original = _read_manifest(manifest)
        updated, removed = self.region.remove(original)
        return ManifestPlan(
            ManifestAction.DETACH,
            original,
            updated if removed else None,
            region_removed=removed,
        )

    # -- Side effects ------------------------------------------------------

    async def finalize(self, plan: ManifestPlan) -> bool:
        """Apply *plan*.

        Returns:
            ``True`` if the manifest file was rewritten.

        Raises:
            ResourceRegistrationTimeoutError: If the host never reports the
                resx as a project item.  The resx and the manifest patch stay
                on disk.
        """
        if plan.action is ManifestAction.ATTACH:
            return await self._attach(plan)
        if plan.action is ManifestAction.DETACH:
            return await self._detach(plan)
        return False

    async def _attach(self, plan: ManifestPlan) -> bool:
        ctx = self.context
        await write_resx(self.resources, ctx.resx_path, self.renderer)

        if plan.changed:
            await asyncio.to_thread(write_text_file, ctx.manifest_path, plan.updated)
            self.host.reload_project(ctx.project_name)

        item = await wait_for_project_item(
            self.host,
            ctx.project_name,
            ctx.resx_path,
            self.config.registration_attempts,
            self.config.registration_delay,
        )
        if item is None:
            raise ResourceRegistrationTimeoutError(
                ctx.resx_path, self.config.registration_attempts
            )
        self.host.regenerate_from_item(item)
        return plan.changed

    async def _detach(self, plan: ManifestPlan) -> bool:
        ctx = self.context
        await asyncio.to_thread(delete_if_exists, ctx.resx_path)
        await asyncio.to_thread(delete_if_exists, ctx.designer_path)

        if plan.region_removed and plan.updated is not None:
            await asyncio.to_thread(write_text_file, ctx.manifest_path, plan.updated)
            self.host.reload_project(ctx.project_name)
            return True
        return False


def _read_manifest(path: Path) -> str:
    # Decoded verbatim so that a BOM and CRLF line endings survive a rewrite.
    return path.read_bytes().decode("utf-8")
