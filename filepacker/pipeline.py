"""File packer orchestrator.

Sequences one generation run for a project:

1. Recover namespace, class name and custom fallback from existing files.
2. Walk ``Files/`` and build one lookup arm per asset (templated text,
   inline base64 or bundle accessor).
3. Plan the manifest change, so an unpatchable manifest aborts early.
4. Overwrite ``FileHandler.cs``.
5. Attach or detach the ``PluginFiles.resx`` bundle.

Usage::

    python -m filepacker.pipeline path/to/MyPlugin
    python -m filepacker.pipeline path/to/MyPlugin --inline
    python -m filepacker.pipeline PluginA PluginB --text-extensions "css,js,html"
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from filepacker.bundle.strategy import ResourceStrategySelector
from filepacker.config import PackerConfig
from filepacker.detector import detect_customization, resolve_project_name
from filepacker.emitter.accessors import AccessorEmitter, templated_expression
from filepacker.emitter.templater import decode_text, template_text
from filepacker.emitter.templates import TemplateRenderer
from filepacker.host import HostActions, StandaloneHost
from filepacker.scanner.keys import AssetKeyRegistry
from filepacker.scanner.models import OUTPUT_FILE_NAME, AssetRecord, GenerationContext
from filepacker.scanner.walker import scan_assets
from filepacker.utils import console, print_summary_table

# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Summary of one project's generation run."""

    project_name: str
    success: bool
    strategy: str
    error: str | None = None
    output_path: Path | None = None
    asset_count: int = Field(default=0, ge=0)
    templated_count: int = Field(default=0, ge=0)
    bundled_count: int = Field(default=0, ge=0)
    manifest_changed: bool = False


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class FilePacker:
    """Generates ``FileHandler.cs`` for a project.

    This is the only entry point a host needs: it never raises for a failed
    run.  Errors are reported through ``host.show_error`` and returned as a
    ``GenerationResult`` with ``success=False``, so one broken project does
    not take the host down.

    Attributes:
        config: Read-only run configuration.
        host: Injected host capabilities.
        renderer: Shared Jinja2 renderer for all generated files.
    """

    def __init__(
        self,
        config: PackerConfig | None = None,
        host: HostActions | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or PackerConfig()
        self.host = host or StandaloneHost()
        self.renderer = renderer or TemplateRenderer()

    @property
    def strategy_name(self) -> str:
        return "inline" if self.config.use_inline_payloads else "bundle"

    # -- Public API --------------------------------------------------------

    async def generate(
        self, project_root: str | Path, project_name: str | None = None
    ) -> GenerationResult:
        """Run a full generation for one project.

        Args:
            project_root: Directory containing ``Files/`` and the manifest.
            project_name: Project (and manifest) name.  Detected from the
                directory when omitted.

        Returns:
            The run summary.  ``success`` is ``False`` if anything failed;
            ``FileHandler.cs`` may already have been overwritten in that case.
        """
        root = Path(project_root)
        name = project_name or resolve_project_name(root)

        self.host.report_progress(f"Generating {OUTPUT_FILE_NAME} for {name}...")
        try:
            result = await self._run(root, name)
        except Exception as exc:
            self.host.show_error(
                "Error!",
                f"An error occurred while generating {OUTPUT_FILE_NAME} for {name}:\n{exc}",
            )
            self.host.report_progress(
                f"An error occurred while generating {OUTPUT_FILE_NAME} for {name}!"
            )
            return GenerationResult(
                project_name=name,
                success=False,
                strategy=self.strategy_name,
                error=str(exc),
            )

        message = f"Successfully generated {OUTPUT_FILE_NAME} for {name}!"
        self.host.report_progress(message)
        if self.config.notify_on_success:
            self.host.show_info("Done!", message)
        return result

    async def generate_many(
        self, projects: list[tuple[str | Path, str | None]]
    ) -> list[GenerationResult]:
        """Generate several projects one after another.

        A failing project is reported and skipped; the rest still run.
        """
        results: list[GenerationResult] = []
        for project_root, project_name in projects:
            results.append(await self.generate(project_root, project_name))
        return results

    # -- Run ---------------------------------------------------------------

    async def _run(self, root: Path, name: str) -> GenerationResult:
        customization = detect_customization(root, self.config, name)
        context = GenerationContext(
            project_name=name,
            project_root=root,
            namespace=customization.namespace,
            type_name=customization.type_name,
            has_custom_fallback=customization.has_custom_fallback,
            framework_namespace=self.config.framework_namespace,
        )

        assets = scan_assets(context.assets_root, self.config.text_extensions)
        selector = ResourceStrategySelector(context, self.config, self.host, self.renderer)
        emitter = AccessorEmitter(context, self.renderer)
        registry = AssetKeyRegistry()

        templated = 0
        for asset in assets:
            key = registry.register(asset.relative_path, asset.absolute_path)
            expression = _templated_arm(asset, context)
            if expression is None:
                expression = selector.expression_for(asset, key)
            else:
                templated += 1
            emitter.add(asset, expression)

        # Only import PluginFiles' namespace when an arm references it.
        emitter.uses_resources = bool(selector.resources)

        plan = selector.plan()
        output = await emitter.write()
        manifest_changed = await selector.finalize(plan)

        return GenerationResult(
            project_name=name,
            success=True,
            strategy=selector.strategy.value,
            output_path=output,
            asset_count=len(emitter),
            templated_count=templated,
            bundled_count=len(selector.resources),
            manifest_changed=manifest_changed,
        )


def _templated_arm(asset: AssetRecord, context: GenerationContext) -> str | None:
    if not asset.is_text_candidate:
        return None
    literal = template_text(decode_text(asset.raw_content), context.domain_main_call)
    if literal is None:
        return None
    return templated_expression(literal)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_config(args: Any) -> PackerConfig:
    """Merge a config file (or ``PFP_*`` environment) with CLI overrides."""
    config = PackerConfig.load(Path(args.config)) if args.config else PackerConfig.from_env()
    overrides: dict[str, Any] = {}
    if args.inline:
        overrides["use_inline_payloads"] = True
    if args.bundle:
        overrides["use_inline_payloads"] = False
    if args.text_extensions is not None:
        overrides["text_extensions"] = args.text_extensions
    if args.default_namespace:
        overrides["default_namespace"] = args.default_namespace
    if args.quiet:
        overrides["notify_on_success"] = False
    if not overrides:
        return config
    return PackerConfig.model_validate({**config.model_dump(), **overrides})


def main() -> None:
    """CLI entry point for ``python -m filepacker.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Embed a project's Files/ directory into a generated FileHandler.cs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  filepacker ./MyPlugin\n"
            "  filepacker ./MyPlugin --inline\n"
            "  filepacker ./PluginA ./PluginB --text-extensions \"css,js,html\"\n"
        ),
    )
    parser.add_argument(
        "projects",
        nargs="+",
        help="Project directories (each containing Files/ and <Name>.csproj)",
    )
    parser.add_argument(
        "--project-name",
        default=None,
        help="Override the project name (only with a single project)",
    )
    strategy = parser.add_mutually_exclusive_group()
    strategy.add_argument(
        "--inline",
        action="store_true",
        help="Embed files as base64 literals instead of a PluginFiles.resx bundle",
    )
    strategy.add_argument(
        "--bundle",
        action="store_true",
        help="Store files in a PluginFiles.resx bundle (default)",
    )
    parser.add_argument(
        "--text-extensions",
        default=None,
        help="Extensions treated as text, separated by comma/semicolon/space",
    )
    parser.add_argument(
        "--default-namespace",
        default=None,
        help="Namespace used when no existing FileHandler declares one",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: PFP_* environment variables)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only print errors",
    )

    args = parser.parse_args()

    if args.project_name and len(args.projects) > 1:
        console.print("[bold red]Error:[/bold red] --project-name requires a single project")
        sys.exit(2)

    config = build_config(args)
    packer = FilePacker(config, StandaloneHost(quiet=args.quiet))
    results = asyncio.run(
        packer.generate_many([(p, args.project_name) for p in args.projects])
    )

    if not args.quiet:
        for result in results:
            if result.success:
                print_summary_table(
                    {
                        "Strategy": result.strategy,
                        "Assets": str(result.asset_count),
                        "Templated": str(result.templated_count),
                        "Bundled": str(result.bundled_count),
                        "Manifest changed": "yes" if result.manifest_changed else "no",
                        "Output": str(result.output_path),
                    },
                    title=result.project_name,
                )

    if not all(r.success for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
