"""File packer configuration.

Typed settings consumed read-only by the generator.  All settings use a
Pydantic v2 model so they are validated at construction time and can be
serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_TEXT_EXTENSIONS = "css,js,txt,json"


def normalize_extensions(value: str | list[str] | tuple[str, ...] | set[str]) -> list[str]:
    """Normalise a list of text extensions.

    Accepts either a single string separated by commas, semicolons or spaces,
    or an iterable of strings.  Entries are trimmed, empty entries dropped and
    a leading ``.`` is added where missing.  Order is preserved and duplicates
    are removed.

    Examples::

        normalize_extensions("css, js;txt") -> [".css", ".js", ".txt"]
        normalize_extensions([".json", "json"]) -> [".json"]
    """
    if isinstance(value, str):
        raw = re.split(r"[,; ]", value)
    else:
        raw = list(value)

    result: list[str] = []
    for item in raw:
        ext = item.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return result


class PackerConfig(BaseModel):
    """Settings for a generation run.

    Mirrors the options page of the IDE extension: payload strategy, the
    extensions treated as text, the fallback namespace and whether a popup is
    shown on success.  The remaining fields tune behaviour that the IDE
    hard-codes.
    """

    use_inline_payloads: bool = Field(
        default=False,
        description=(
            "Encode non-templated files as inline base64 literals instead of "
            "adding them to the PluginFiles resource bundle"
        ),
    )
    text_extensions: list[str] = Field(
        default_factory=lambda: normalize_extensions(DEFAULT_TEXT_EXTENSIONS),
        description="Path suffixes treated as text files eligible for placeholders",
    )
    default_namespace: str = Field(
        default="uwap.WebFramework.Plugins",
        description="Namespace used when no existing FileHandler declares one",
    )
    notify_on_success: bool = Field(
        default=True, description="Show an info message once generation succeeds"
    )
    framework_namespace: str = Field(
        default="uwap.WebFramework",
        description="Root namespace of the web framework providing Plugin and Parsers",
    )
    clean_stale_bundle: bool = Field(
        default=True,
        description="Remove a bundle left by a previous run when using inline payloads",
    )
    registration_attempts: int = Field(
        default=10, ge=1, description="How often to look for the resource file as a project item"
    )
    registration_delay: float = Field(
        default=1.0, ge=0, description="Seconds between project item lookups"
    )

    @field_validator("text_extensions", mode="before")
    @classmethod
    def _normalize_text_extensions(cls, value: Any) -> list[str]:
        if value is None:
            return []
        return normalize_extensions(value)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "PackerConfig":
        """Load a previously saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "PackerConfig":
        """Build a ``PackerConfig`` from environment variables.

        Recognised variables (all optional):
            PFP_USE_INLINE_PAYLOADS, PFP_TEXT_EXTENSIONS, PFP_DEFAULT_NAMESPACE,
            PFP_NOTIFY_ON_SUCCESS, PFP_FRAMEWORK_NAMESPACE, PFP_CLEAN_STALE_BUNDLE,
            PFP_REGISTRATION_ATTEMPTS, PFP_REGISTRATION_DELAY.
        """
        kwargs: dict[str, Any] = {}
        for flag in ("use_inline_payloads", "notify_on_success", "clean_stale_bundle"):
            raw = os.environ.get(f"PFP_{flag.upper()}")
            if raw:
                kwargs[flag] = _parse_bool(raw)
        if os.environ.get("PFP_TEXT_EXTENSIONS") is not None:
            kwargs["text_extensions"] = os.environ["PFP_TEXT_EXTENSIONS"]
        if os.environ.get("PFP_DEFAULT_NAMESPACE"):
            kwargs["default_namespace"] = os.environ["PFP_DEFAULT_NAMESPACE"]
        if os.environ.get("PFP_FRAMEWORK_NAMESPACE"):
            kwargs["framework_namespace"] = os.environ["PFP_FRAMEWORK_NAMESPACE"]
        if os.environ.get("PFP_REGISTRATION_ATTEMPTS"):
            kwargs["registration_attempts"] = int(os.environ["PFP_REGISTRATION_ATTEMPTS"])
        if os.environ.get("PFP_REGISTRATION_DELAY"):
            kwargs["registration_delay"] = float(os.environ["PFP_REGISTRATION_DELAY"])
        return cls(**kwargs)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")
