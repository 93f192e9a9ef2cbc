"""Plot graph: one chronological tree ("spine") per character plus overlay edges.

Vertices live in an arena keyed by integer handles. The topology is a networkx
MultiDiGraph whose edge keys are the edge ids, so parallel edges of any type are
allowed and cloning keeps every vertex handle and edge id intact.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Optional, Union

import networkx as nx

from .edge import Edge, EdgeType
from .vertex import Vertex, VertexType

logger = logging.getLogger(__name__)

VertexRef = Union[Vertex, int]


class PlotGraphError(ValueError):
    """Raised for structural misuse of a plot graph."""


class PlotGraph:
    """Directed multigraph of plot events.

    Usage:
        graph = PlotGraph()
        hen = graph.add_root("hen")
        found = graph.append(hen, Vertex.create("found(wheat)", VertexType.PERCEPT))
        plan = graph.append(found, Vertex.create("!plant(wheat)", VertexType.INTENTION))
        graph.add_edge(EdgeType.MOTIVATION, found, plan)
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._graph = nx.MultiDiGraph()
        self._roots: list[int] = []
        self._next_id = 0

    # ------------------------------------------------------------------
    # Vertices
    # ------------------------------------------------------------------

    @property
    def nx_graph(self) -> nx.MultiDiGraph:
        """The underlying topology. Node attribute "vertex", edge attribute "type"."""
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, vertex: VertexRef) -> bool:
        return self._handle(vertex) in self._graph

    def _handle(self, vertex: VertexRef) -> int:
        return vertex.id if isinstance(vertex, Vertex) else vertex

    def vertex(self, vertex: VertexRef) -> Vertex:
        """Look up a vertex by handle."""
        handle = self._handle(vertex)
        if handle not in self._graph:
            raise PlotGraphError(f"Vertex {handle} is not part of graph '{self.name}'")
        return self._graph.nodes[handle]["vertex"]

    @property
    def vertices(self) -> Iterator[Vertex]:
        for _, vertex in self._graph.nodes(data="vertex"):
            yield vertex

    @property
    def roots(self) -> list[Vertex]:
        return [self.vertex(handle) for handle in self._roots]

    def root_of(self, vertex: VertexRef) -> Vertex:
        return self.vertex(self.vertex(vertex).root)

    def character_of(self, vertex: VertexRef) -> str:
        return self.root_of(vertex).label

    def _register(self, vertex: Vertex) -> Vertex:
        vertex.id = self._next_id
        self._next_id += 1
        self._graph.add_node(vertex.id, vertex=vertex)
        return vertex

    def add_root(self, label: str) -> Vertex:
        """Add the ROOT vertex of a new character tree."""
        root = self._register(Vertex(label=label, type=VertexType.ROOT))
        root.root = root.id
        self._roots.append(root.id)
        return root

    def append(self, parent: VertexRef, vertex: Vertex) -> Vertex:
        """Add `vertex` to the graph as spine successor of `parent`."""
        parent = self.vertex(parent)
        self._register(vertex)
        vertex.root = parent.root
        self._link(parent, vertex)
        return vertex

    def _link(self, parent: Vertex, child: Vertex) -> Edge:
        edge_type = EdgeType.ROOT if parent.type == VertexType.ROOT else EdgeType.TEMPORAL
        return self.add_edge(edge_type, parent, child)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(self, edge_type: EdgeType, source: VertexRef, target: VertexRef) -> Edge:
        """Add a directed edge of the given type between two vertices of this graph."""
        source = self.vertex(source)
        target = self.vertex(target)
        edge = Edge(type=edge_type, source=source.id, target=target.id)
        self._graph.add_edge(source.id, target.id, key=edge.id, type=edge_type)
        logger.debug("Added %s edge %s -> %s", edge_type.value, source.label, target.label)
        return edge

    def add_bidirectional_edge(self, edge_type: EdgeType, first: VertexRef, second: VertexRef) -> tuple[Edge, Edge]:
        """Connect two vertices with a pair of opposite edges of the same type."""
        return self.add_edge(edge_type, first, second), self.add_edge(edge_type, second, first)

    def _edges(self, data: Iterable) -> list[Edge]:
        return [
            Edge(type=edge_type, source=source, target=target, id=key)
            for source, target, key, edge_type in data
        ]

    @property
    def edges(self) -> list[Edge]:
        return self._edges(self._graph.edges(keys=True, data="type"))

    def out_edges(self, vertex: VertexRef, *types: EdgeType) -> list[Edge]:
        """Outgoing edges of a vertex, optionally restricted to some types."""
        edges = self._edges(self._graph.out_edges(self._handle(vertex), keys=True, data="type"))
        return [edge for edge in edges if not types or edge.type in types]

    def in_edges(self, vertex: VertexRef, *types: EdgeType) -> list[Edge]:
        """Incoming edges of a vertex, optionally restricted to some types."""
        edges = self._edges(self._graph.in_edges(self._handle(vertex), keys=True, data="type"))
        return [edge for edge in edges if not types or edge.type in types]

    def edge_types(self, source: VertexRef, target: VertexRef) -> list[EdgeType]:
        """Types of all parallel edges from source to target."""
        source, target = self._handle(source), self._handle(target)
        if not self._graph.has_edge(source, target):
            return []
        return [data["type"] for data in self._graph[source][target].values()]

    def has_edge(self, source: VertexRef, target: VertexRef, edge_type: Optional[EdgeType] = None) -> bool:
        types = self.edge_types(source, target)
        return bool(types) if edge_type is None else edge_type in types

    def number_of_edges(self, edge_type: Optional[EdgeType] = None) -> int:
        if edge_type is None:
            return self._graph.number_of_edges()
        return sum(1 for edge in self.edges if edge.type == edge_type)

    # ------------------------------------------------------------------
    # Spine traversal
    # ------------------------------------------------------------------

    def spine_predecessor(self, vertex: VertexRef) -> Optional[Vertex]:
        for edge in self.in_edges(vertex, EdgeType.ROOT, EdgeType.TEMPORAL):
            return self.vertex(edge.source)
        return None

    def spine_successors(self, vertex: VertexRef) -> list[Vertex]:
        successors = [self.vertex(edge.target) for edge in self.out_edges(vertex, EdgeType.ROOT, EdgeType.TEMPORAL)]
        return sorted(successors, key=lambda v: (v.step, v.id))

    def iter_spine(self, root: VertexRef) -> Iterator[Vertex]:
        """Yield a character's events in chronological (depth-first) order, root excluded.

        Only ROOT and TEMPORAL edges are followed.
        """
        stack = list(reversed(self.spine_successors(root)))
        seen = set()
        while stack:
            vertex = stack.pop()
            if vertex.id in seen:
                continue
            seen.add(vertex.id)
            yield vertex
            stack.extend(reversed(self.spine_successors(vertex)))

    def spine(self, root: VertexRef) -> list[Vertex]:
        return list(self.iter_spine(root))

    def last_of(self, root: VertexRef) -> Vertex:
        """Most recent event of a character, or its root if it has none yet."""
        last = self.vertex(root)
        for last in self.iter_spine(root):
            pass
        return last

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def remove_vertex_and_patch(self, root: VertexRef, vertex: VertexRef) -> None:
        """Remove a vertex and reconnect its spine around the gap.

        The spine predecessor is linked to every spine successor. Overlay edges
        pointing at the removed vertex move to its first successor.
        """
        root = self.vertex(root)
        vertex = self.vertex(vertex)
        if vertex.type == VertexType.ROOT:
            raise PlotGraphError(f"Cannot remove root vertex '{vertex.label}'")
        if vertex.root != root.id:
            raise PlotGraphError(f"Vertex '{vertex.label}' does not belong to character '{root.label}'")

        predecessor = self.spine_predecessor(vertex)
        successors = self.spine_successors(vertex)
        incoming = [
            edge for edge in self.in_edges(vertex)
            if not edge.type.is_spine and edge.source != vertex.id
        ]

        self._graph.remove_node(vertex.id)
        logger.debug("Removed vertex %s", vertex.label)

        if predecessor is not None:
            for successor in successors:
                self._link(predecessor, successor)

        if successors:
            heir = successors[0]
            for edge in incoming:
                self.add_edge(edge.type, edge.source, heir)
        elif incoming:
            logger.debug("Dropped %d edge(s) into removed leaf %s", len(incoming), vertex.label)

    def remove_vertex(self, vertex: VertexRef) -> None:
        """Remove a vertex via its own root; see remove_vertex_and_patch."""
        vertex = self.vertex(vertex)
        self.remove_vertex_and_patch(vertex.root, vertex)

    def mark_vertex_as_unit(self, vertex: VertexRef, unit_name: str) -> None:
        """Tag a vertex with the name of a functional unit it is part of."""
        vertex = self.vertex(vertex)
        if unit_name not in vertex.units:
            vertex.units.append(unit_name)

    def clone(self, name: Optional[str] = None) -> "PlotGraph":
        """Deep copy with identical vertex handles and edge ids."""
        clone = PlotGraph(name=self.name if name is None else name)
        clone._graph = self._graph.copy()
        for handle, vertex in self._graph.nodes(data="vertex"):
            clone._graph.nodes[handle]["vertex"] = vertex.copy()
        clone._roots = list(self._roots)
        clone._next_id = self._next_id
        return clone

    def __repr__(self) -> str:
        return (
            f"PlotGraph(name={self.name!r}, characters={len(self._roots)}, "
            f"vertices={len(self)}, edges={self._graph.number_of_edges()})"
        )
