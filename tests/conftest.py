"""Shared pytest fixtures for the filepacker test suite.

Provides reusable fixtures for:
- Temporary plugin projects (``Files/``, ``.csproj``, custom handler files)
- A recording ``HostActions`` implementation
- Fast configurations (no registration delay)
"""

from __future__ import annotations

import os
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from filepacker.config import PackerConfig
from filepacker.emitter.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Sample content
# ---------------------------------------------------------------------------

_SAMPLE_MANIFEST = textwrap.dedent("""\
    <Project Sdk="Microsoft.NET.Sdk">

      <PropertyGroup>
        <TargetFramework>net8.0</TargetFramework>
        <Nullable>enable</Nullable>
      </PropertyGroup>

    </Project>
""")

_LOGO_BYTES = b"\x89PNG\r\n\x1a\n\x00\x01"

_CUSTOM_HANDLER = textwrap.dedent("""\
    namespace Custom.Fallback;

    public partial class CustomPlugin
    {
        public byte[]? GetFileCustom(string relPath, string pathPrefix, string domain) => null;
        public string? GetFileVersionCustom(string relPath) => null;
    }
""")

# 2023-11-14T22:13:20Z as nanoseconds since the Unix epoch.
_FIXED_MTIME_NS = 1_700_000_000_000_000_000
_FIXED_TICKS = 638_355_968_000_000_000


# ---------------------------------------------------------------------------
# Recording host
# ---------------------------------------------------------------------------


class RecordingHost:
    """``HostActions`` that records every call.

    Args:
        visible_after: Number of ``find_project_item`` lookups that return
            ``None`` before the item shows up.
        never_visible: Never report the item.
    """

    def __init__(self, visible_after: int = 0, never_visible: bool = False) -> None:
        self.visible_after = visible_after
        self.never_visible = never_visible
        self.progress: list[str] = []
        self.errors: list[tuple[str, str]] = []
        self.infos: list[tuple[str, str]] = []
        self.reloads: list[str] = []
        self.lookups: list[Path] = []
        self.lookup_projects: list[str] = []
        self.regenerated: list[Any] = []

    def report_progress(self, text: str) -> None:
        self.progress.append(text)

    def show_error(self, title: str, text: str) -> None:
        self.errors.append((title, text))

    def show_info(self, title: str, text: str) -> None:
        self.infos.append((title, text))

    def reload_project(self, project_name: str) -> None:
        self.reloads.append(project_name)

    def find_project_item(self, project_name: str, path: Path) -> Any | None:
        self.lookups.append(Path(path))
        self.lookup_projects.append(project_name)
        if self.never_visible or len(self.lookups) <= self.visible_after:
            return None
        return Path(path)

    def regenerate_from_item(self, item: Any) -> None:
        self.regenerated.append(item)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def host() -> RecordingHost:
    """A host that finds project items immediately."""
    return RecordingHost()


@pytest.fixture
def make_host() -> Callable[..., RecordingHost]:
    """Factory for hosts that find items late or never.

    Usage::

        host = make_host(visible_after=3)
    """
    return RecordingHost


@pytest.fixture
def sample_manifest() -> str:
    """A minimal SDK-style manifest without a bundle region."""
    return _SAMPLE_MANIFEST


@pytest.fixture
def logo_bytes() -> bytes:
    """Ten bytes of binary content (PNG signature plus two bytes)."""
    return _LOGO_BYTES


@pytest.fixture
def custom_handler() -> str:
    """A ``FileHandlerCustom.cs`` declaring ``Custom.Fallback.CustomPlugin``."""
    return _CUSTOM_HANDLER


@pytest.fixture
def fixed_mtime_ns() -> int:
    """Modification time applied by ``make_project``."""
    return _FIXED_MTIME_NS


@pytest.fixture
def fixed_ticks() -> int:
    """``fixed_mtime_ns`` as .NET UTC ticks."""
    return _FIXED_TICKS


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def bundle_config() -> PackerConfig:
    """Bundle strategy without registration delay."""
    return PackerConfig(use_inline_payloads=False, registration_delay=0)


@pytest.fixture
def inline_config() -> PackerConfig:
    """Inline strategy without registration delay."""
    return PackerConfig(use_inline_payloads=True, registration_delay=0)


ProjectFactory = Callable[..., Path]


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Factory creating a plugin project under ``tmp_path``.

    Usage::

        root = make_project(files={"style.css": "body{}"})

    Args (of the returned callable):
        name: Project name; also the manifest stem.
        files: Mapping of path below ``Files/`` to ``str`` or ``bytes``.
            ``None`` skips creating ``Files/`` entirely.
        manifest: Manifest text, or ``None`` for no manifest.
        custom: Content of ``FileHandlerCustom.cs``, if any.
        generated: Content of an existing ``FileHandler.cs``, if any.
        mtime_ns: Modification time applied to every asset.
    """

    def _make(
        name: str = "DemoPlugin",
        files: dict[str, str | bytes] | None = None,
        manifest: str | None = _SAMPLE_MANIFEST,
        custom: str | None = None,
        generated: str | None = None,
        mtime_ns: int = _FIXED_MTIME_NS,
    ) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        if files is not None:
            assets = root / "Files"
            assets.mkdir(exist_ok=True)
            for rel, content in files.items():
                target = assets / rel
                target.parent.mkdir(parents=True, exist_ok=True)
                if isinstance(content, str):
                    target.write_bytes(content.encode("utf-8"))
                else:
                    target.write_bytes(content)
                os.utime(target, ns=(mtime_ns, mtime_ns))
        if manifest is not None:
            (root / f"{name}.csproj").write_bytes(manifest.encode("utf-8"))
        if custom is not None:
            (root / "FileHandlerCustom.cs").write_text(custom, encoding="utf-8")
        if generated is not None:
            (root / "FileHandler.cs").write_text(generated, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def demo_project(make_project: ProjectFactory) -> Path:
    """The canonical two-asset project: a templated stylesheet and a logo."""
    return make_project(
        files={
            "style.css": "body{color:[DOMAIN]}",
            "logo.png": _LOGO_BYTES,
        }
    )
