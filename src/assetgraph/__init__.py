"""
assetgraph - dependency graph over Quake III game content.

    from assetgraph import AssetGraph

    graph = AssetGraph()
    with open("maps/q3dm1.bsp", "rb") as f:
        graph.add("maps/q3dm1.bsp", f.read())
    q3dm1 = graph.maps()["maps/q3dm1.bsp"]
"""

from .config import GraphConfig
from .graph import (
    AssetGraph,
    AssetType,
    AssetTypeConflict,
    AssetVertex,
    FormatParsers,
    asset_key,
)

__version__ = "1.0.0"

__all__ = [
    'AssetGraph',
    'AssetType',
    'AssetTypeConflict',
    'AssetVertex',
    'FormatParsers',
    'GraphConfig',
    'asset_key',
]
