"""Asset graph - dependency resolution for Quake III game content."""

from .assets import AssetType, AssetVertex
from .core import AssetGraph, AssetTypeConflict
from .directed import DirectedGraph, Edge, Vertex
from .keys import asset_key, generalize, sanitize
from .loader import FormatParsers, ingest

__all__ = [
    'AssetType',
    'AssetVertex',
    'AssetGraph',
    'AssetTypeConflict',
    'DirectedGraph',
    'Edge',
    'Vertex',
    'asset_key',
    'generalize',
    'sanitize',
    'FormatParsers',
    'ingest',
]
