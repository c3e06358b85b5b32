"""Generation of ``FileHandler.cs`` -- placeholder templating and module layout.

Quick usage::

    from filepacker.emitter import AccessorEmitter, inline_expression

    emitter = AccessorEmitter(context)
    for asset in assets:
        emitter.add(asset, inline_expression(asset.raw_content))
    await emitter.write()
"""

from filepacker.emitter.accessors import (
    AccessorEmitter,
    ContentArm,
    VersionArm,
    bundle_expression,
    inline_expression,
    templated_expression,
)
from filepacker.emitter.templater import csharp_string_literal, template_text
from filepacker.emitter.templates import TemplateRenderer

__all__ = [
    "AccessorEmitter",
    "ContentArm",
    "TemplateRenderer",
    "VersionArm",
    "bundle_expression",
    "csharp_string_literal",
    "inline_expression",
    "template_text",
    "templated_expression",
]
