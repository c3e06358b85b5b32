"""Asset discovery: walking the ``Files`` directory, classification and keys.

Quick usage::

    from filepacker.scanner import scan_assets

    for asset in scan_assets(project / "Files", [".css", ".js"]):
        print(asset.relative_path, asset.is_text_candidate)
"""

from filepacker.scanner.classifier import is_text_candidate
from filepacker.scanner.keys import AssetKeyRegistry, decode_key, derive_key
from filepacker.scanner.models import AssetRecord, GenerationContext
from filepacker.scanner.walker import last_modified_ticks, scan_assets, walk_assets

__all__ = [
    "AssetKeyRegistry",
    "AssetRecord",
    "GenerationContext",
    "decode_key",
    "derive_key",
    "is_text_candidate",
    "last_modified_ticks",
    "scan_assets",
    "walk_assets",
]
