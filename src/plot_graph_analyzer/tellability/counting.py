"""
Plot Statistics

Simple counts over a post-processed plot graph: size, plot length, conflicts
and suspense.
"""

from dataclasses import dataclass

from plot_graph_analyzer.graph.edge import EdgeType
from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.graph.vertex import VertexType


@dataclass
class PlotStatistics:
    """Counts a tellability score is computed from."""
    num_all_vertices: int = 0
    plot_length: int = 0
    conflicts: int = 0
    productive_conflicts: int = 0
    suspense: int = 0

    @classmethod
    def count(cls, graph: PlotGraph) -> "PlotStatistics":
        stats = cls()
        positions: dict[int, int] = {}

        for root in graph.roots:
            spine = graph.spine(root)
            stats.num_all_vertices += len(spine)
            stats.plot_length = max(stats.plot_length, len(spine))
            for position, vertex in enumerate(spine, start=1):
                positions[vertex.id] = position

        for vertex in graph.vertices:
            if vertex.type != VertexType.INTENTION:
                continue
            stats.conflicts += 1

            attempts = graph.out_edges(vertex, EdgeType.ACTUALIZATION)
            if not attempts:
                continue
            stats.productive_conflicts += 1

            # Resolved by the latest own event actualizing or terminating the intention
            resolvers = [edge.target for edge in attempts]
            resolvers += [edge.source for edge in graph.in_edges(vertex, EdgeType.TERMINATION)]
            start = positions.get(vertex.id, 0)
            for handle in resolvers:
                resolver = graph.vertex(handle)
                if resolver.root == vertex.root and handle in positions:
                    stats.suspense = max(stats.suspense, positions[handle] - start)

        return stats
