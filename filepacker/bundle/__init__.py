"""Resource bundle handling: payload strategy, resx side file, manifest patch.

Quick usage::

    from filepacker.bundle import ResourceStrategySelector

    selector = ResourceStrategySelector(context, config, host)
    expression = selector.expression_for(asset, key)
    plan = selector.plan()
    await selector.finalize(plan)
"""

from filepacker.bundle.manifest import BUNDLE_REGION, ManifestRegion
from filepacker.bundle.resx import ResourceEntry, ResourceSet, read_resx_keys, write_resx
from filepacker.bundle.strategy import (
    ManifestAction,
    ManifestPlan,
    ResourceStrategy,
    ResourceStrategySelector,
    wait_for_project_item,
)

__all__ = [
    "BUNDLE_REGION",
    "ManifestAction",
    "ManifestPlan",
    "ManifestRegion",
    "ResourceEntry",
    "ResourceSet",
    "ResourceStrategy",
    "ResourceStrategySelector",
    "read_resx_keys",
    "wait_for_project_item",
    "write_resx",
]
