"""filepacker -- embeds a project's static files into a generated C# handler.

Quick usage::

    from filepacker import FilePacker, PackerConfig

    packer = FilePacker(PackerConfig(use_inline_payloads=True))
    result = await packer.generate("path/to/MyPlugin")
"""

from filepacker.config import PackerConfig
from filepacker.pipeline import FilePacker, GenerationResult

__all__ = [
    "FilePacker",
    "GenerationResult",
    "PackerConfig",
]
