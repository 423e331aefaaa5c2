"""Minimal append-only directed graph."""

from dataclasses import dataclass, field
from typing import List, Type


@dataclass(frozen=True)
class Edge:
    """A directed edge, stored as vertex ids into the owning graph."""
    source: int
    dest: int

    def __repr__(self) -> str:
        return f"Edge({self.source} -> {self.dest})"


@dataclass(eq=False)
class Vertex:
    """A vertex in a DirectedGraph. Compared by identity."""
    id: int
    in_edges: List[Edge] = field(default_factory=list, repr=False)
    out_edges: List[Edge] = field(default_factory=list, repr=False)


class DirectedGraph:
    """
    Append-only directed graph.

    Vertices live in one ordered list and their id is their index in it;
    edges refer to vertices by id only. There is no removal and no
    membership check on add_edge.
    """

    def __init__(self, vertex_class: Type[Vertex] = Vertex):
        self.vertex_class = vertex_class
        self.vertices: List[Vertex] = []

    def add_vertex(self, **fields) -> Vertex:
        """Create a vertex with the next sequential id and return it."""
        v = self.vertex_class(id=len(self.vertices), **fields)
        self.vertices.append(v)
        return v

    def add_edge(self, a: Vertex, b: Vertex) -> Edge:
        """Create the edge a -> b and attach it to both endpoints."""
        e = Edge(a.id, b.id)
        a.out_edges.append(e)
        b.in_edges.append(e)
        return e

    def vertex(self, vertex_id: int) -> Vertex:
        return self.vertices[vertex_id]

    def edge_count(self) -> int:
        return sum(len(v.out_edges) for v in self.vertices)

    def __len__(self) -> int:
        return len(self.vertices)
