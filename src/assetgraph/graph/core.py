"""
Asset graph - registry and reference builder over a DirectedGraph.

Edges point from a referencing asset to the asset it references. For shaders
that direction is deliberately inverted relative to file layout: a shader
references the script it is defined in, so walking outgoing edges from a map
reaches the scripts it needs even though no file ever names a script.
"""

import logging
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from ..config import TYPE_CONFLICT_REJECT, GraphConfig
from .assets import AssetType, AssetVertex
from .directed import DirectedGraph, Edge
from .keys import asset_key

logger = logging.getLogger(__name__)


class AssetTypeConflict(ValueError):
    """A key was registered again under a different asset type."""

    def __init__(self, key: str, existing: AssetType, requested: AssetType):
        self.key = key
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"Asset {key!r} is already registered as {existing.value}, "
            f"cannot register it as {requested.value}"
        )


class AssetGraph:
    """
    Dependency graph of game assets.

    All mutation goes through add() (or the lower level register_asset and
    add_reference it is built on). Calls must be sequential; nothing here is
    locked.
    """

    def __init__(self, config: Optional[GraphConfig] = None, parsers=None):
        self.config = config or GraphConfig()
        self.parsers = parsers
        self._graph = DirectedGraph(AssetVertex)

        # canonical key -> vertex id
        self._asset_ids: Dict[str, int] = {}
        # sanitized map name -> vertex id
        self._map_ids: Dict[str, int] = {}
        # (key, requested type) pairs already warned about
        self._conflicts: Set[Tuple[str, AssetType]] = set()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register_asset(self, name: str, asset_type: AssetType) -> AssetVertex:
        """
        Get or create the vertex for a raw reference.

        Every name that normalizes to the same key returns the same vertex;
        new spellings are appended to its names.
        """
        key = asset_key(name, asset_type)
        vertex_id = self._asset_ids.get(key)

        if vertex_id is None:
            v = self._graph.add_vertex(key=key, type=asset_type)
            self._asset_ids[key] = v.id
            logger.debug(f"New {asset_type.value} asset #{v.id}: {key}")
        else:
            v = self._graph.vertex(vertex_id)
            if v.type is not asset_type:
                self._type_conflict(v, asset_type)

        if name not in v.names:
            v.names.append(name)

        return v

    def _type_conflict(self, v: AssetVertex, requested: AssetType):
        if self.config.type_conflict == TYPE_CONFLICT_REJECT:
            raise AssetTypeConflict(v.key, v.type, requested)

        if (v.key, requested) not in self._conflicts:
            self._conflicts.add((v.key, requested))
            logger.warning(
                f"{v.key} referenced as {requested.value} but registered as "
                f"{v.type.value}, keeping {v.type.value}"
            )

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------

    def add_reference(self, source: AssetVertex, dest: AssetVertex) -> Optional[Edge]:
        """Add source -> dest unless that edge already exists."""
        for e in source.out_edges:
            if e.dest == dest.id:
                return None
        return self._graph.add_edge(source, dest)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def add(self, name: str, content: Union[bytes, str, None] = None) -> AssetVertex:
        """Ingest one file by name, parsing it when its type has structure."""
        from .loader import ingest
        return ingest(self, name, content)

    def _record_map(self, name: str, v: AssetVertex):
        self._map_ids[name] = v.id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def maps(self) -> Dict[str, AssetVertex]:
        """Maps ingested so far, by sanitized file name."""
        return {name: self._graph.vertex(i) for name, i in self._map_ids.items()}

    def filter(self, predicate: Callable[[AssetVertex], bool]) -> List[AssetVertex]:
        """All vertices matching predicate, in id order."""
        return [v for v in self._graph.vertices if predicate(v)]

    def get(self, key: str) -> Optional[AssetVertex]:
        """Vertex for a canonical key, if any."""
        vertex_id = self._asset_ids.get(key)
        if vertex_id is None:
            return None
        return self._graph.vertex(vertex_id)

    def find(self, name: str, asset_type: AssetType) -> Optional[AssetVertex]:
        """Vertex a raw reference would resolve to, without registering it."""
        return self.get(asset_key(name, asset_type))

    def vertex(self, vertex_id: int) -> AssetVertex:
        return self._graph.vertex(vertex_id)

    def references(self, v: AssetVertex) -> List[AssetVertex]:
        """Assets v references directly (outgoing edges)."""
        return [self._graph.vertex(e.dest) for e in v.out_edges]

    def referenced_by(self, v: AssetVertex) -> List[AssetVertex]:
        """Assets that reference v directly (incoming edges)."""
        return [self._graph.vertex(e.source) for e in v.in_edges]

    def statistics(self) -> Dict:
        """Generate basic graph statistics."""
        by_type = {t.value: 0 for t in AssetType}
        for v in self._graph.vertices:
            by_type[v.type.value] += 1

        return {
            'total_assets': len(self._graph),
            'total_references': self._graph.edge_count(),
            'maps': len(self._map_ids),
            'by_type': by_type,
        }

    def __len__(self) -> int:
        return len(self._graph)

    def __str__(self) -> str:
        stats = self.statistics()
        counts = ", ".join(f"{t}={n}" for t, n in stats['by_type'].items() if n)
        return (
            f"AssetGraph:\n"
            f"  Assets: {stats['total_assets']}\n"
            f"  References: {stats['total_references']}\n"
            f"  Maps: {stats['maps']}\n"
            f"  Types: {counts or 'none'}\n"
        )
