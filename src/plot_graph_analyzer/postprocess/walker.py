"""Shared traversal for the post-processing passes."""

from collections import deque
from typing import Callable, Optional

from plot_graph_analyzer.config import Settings, get_settings
from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.graph.vertex import Vertex, VertexType

Handler = Callable[[Vertex], None]


class SpinePass:
    """Walks every character's spine once, in chronological order.

    Each pass works on its own clone of the input graph. Subclasses map vertex
    types to handlers in `handlers()`; vertices of other types go to
    `visit_default`. While a character is walked, `history` holds its already
    visited events, most recent first.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.graph = PlotGraph()
        self.history: deque[Vertex] = deque()
        self.current_root: Optional[Vertex] = None

    def handlers(self) -> dict[VertexType, Handler]:
        return {}

    def apply(self, graph: PlotGraph) -> PlotGraph:
        """Run the pass over a clone of `graph` and return the clone."""
        self.graph = graph.clone()
        dispatch = self.handlers()

        for root in self.graph.roots:
            self.visit_root(root)
            # Only ROOT/TEMPORAL edges decide the order; overlay edges are never followed
            for vertex in self.graph.spine(root):
                dispatch.get(vertex.type, self.visit_default)(vertex)

        self.post_processing()
        return self.graph

    def visit_root(self, vertex: Vertex) -> None:
        self.history.clear()
        self.current_root = vertex

    def visit_default(self, vertex: Vertex) -> None:
        self.remember(vertex)

    def remember(self, vertex: Vertex) -> None:
        self.history.appendleft(vertex)

    def remove(self, vertex: Vertex) -> None:
        self.graph.remove_vertex_and_patch(self.current_root, vertex)

    def post_processing(self) -> None:
        pass
