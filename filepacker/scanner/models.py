"""Data classes shared across one generation run.

``AssetRecord`` describes a single discovered file and ``GenerationContext``
carries the project-wide values derived once per run.  Both are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Well-known project paths
# ---------------------------------------------------------------------------

ASSETS_DIR_NAME = "Files"
OUTPUT_FILE_NAME = "FileHandler.cs"
CUSTOM_FILE_NAME = "FileHandlerCustom.cs"
RESOURCE_DIR_NAME = "Properties"
RESOURCE_CLASS_NAME = "PluginFiles"


@dataclass(frozen=True)
class AssetRecord:
    """One file under the assets root, captured at scan time."""

    relative_path: str
    absolute_path: Path
    last_modified_ticks: int
    is_text_candidate: bool
    raw_content: bytes


@dataclass(frozen=True)
class GenerationContext:
    """Project-wide values for a single generation run."""

    project_name: str
    project_root: Path
    namespace: str
    type_name: str
    has_custom_fallback: bool
    framework_namespace: str = "uwap.WebFramework"

    # -- Framework references ----------------------------------------------

    @property
    def plugins_namespace(self) -> str:
        """Namespace that declares the ``Plugin`` base class."""
        return f"{self.framework_namespace}.Plugins"

    @property
    def plugin_base(self) -> str:
        """``Plugin``, qualified unless the namespace already lives inside its package."""
        if _is_within(self.namespace, self.plugins_namespace):
            return "Plugin"
        return f"{self.plugins_namespace}.Plugin"

    @property
    def domain_main_call(self) -> str:
        """``Parsers.DomainMain``, qualified unless inside the framework namespace."""
        if _is_within(self.namespace, self.framework_namespace):
            return "Parsers.DomainMain"
        return f"{self.framework_namespace}.Parsers.DomainMain"

    # -- Derived paths -----------------------------------------------------

    @property
    def assets_root(self) -> Path:
        return self.project_root / ASSETS_DIR_NAME

    @property
    def output_path(self) -> Path:
        return self.project_root / OUTPUT_FILE_NAME

    @property
    def custom_path(self) -> Path:
        return self.project_root / CUSTOM_FILE_NAME

    @property
    def manifest_path(self) -> Path:
        return self.project_root / f"{self.project_name}.csproj"

    @property
    def resx_path(self) -> Path:
        return self.project_root / RESOURCE_DIR_NAME / f"{RESOURCE_CLASS_NAME}.resx"

    @property
    def designer_path(self) -> Path:
        return self.project_root / RESOURCE_DIR_NAME / f"{RESOURCE_CLASS_NAME}.Designer.cs"

    @property
    def resource_namespace(self) -> str:
        """Namespace of the strongly typed ``PluginFiles`` accessor class."""
        return f"{self.project_name}.{RESOURCE_DIR_NAME}"


def _is_within(namespace: str, package: str) -> bool:
    return namespace == package or namespace.startswith(package + ".")
