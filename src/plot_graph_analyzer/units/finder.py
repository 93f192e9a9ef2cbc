"""Locating functional units in a plot graph by subgraph monomorphism."""

import logging
from collections import Counter
from typing import Optional

import networkx as nx
from networkx.algorithms.isomorphism import MultiDiGraphMatcher

from plot_graph_analyzer.graph.plot_graph import PlotGraph

from .catalog import FunctionalUnit
from .types import is_compatible, unit_vertex_type

logger = logging.getLogger(__name__)

Mapping = dict[int, int]


def unit_view(graph: PlotGraph) -> nx.MultiDiGraph:
    """Project a plot graph onto unit vertex types, keeping handles and edge types."""
    view = nx.MultiDiGraph()
    for vertex in graph.vertices:
        view.add_node(vertex.id, unit_type=unit_vertex_type(vertex))
    view.add_edges_from(graph.nx_graph.edges(keys=True, data=True))
    return view


def _node_match(target: dict, pattern: dict) -> bool:
    return is_compatible(pattern["unit_type"], target["unit_type"])


def _edge_match(target: dict, pattern: dict) -> bool:
    # both arguments map edge key -> attributes for all parallel edges of one direction
    available = Counter(data["type"] for data in target.values())
    required = Counter(data["type"] for data in pattern.values())
    return all(available[edge_type] >= count for edge_type, count in required.items())


def find_units(
    target: PlotGraph,
    unit: FunctionalUnit,
    view: Optional[nx.MultiDiGraph] = None,
) -> list[Mapping]:
    """Find every occurrence of a unit in a plot graph.

    The search is exhaustive and injective; the target may carry additional
    vertices and edges around an occurrence.

    Args:
        target: Post-processed plot graph
        unit: Unit to look for
        view: Precomputed `unit_view(target)`, to share between units

    Returns:
        One mapping pattern vertex -> target vertex handle per occurrence
    """
    if view is None:
        view = unit_view(target)

    matcher = MultiDiGraphMatcher(view, unit.graph, node_match=_node_match, edge_match=_edge_match)
    mappings = []
    for match in matcher.subgraph_monomorphisms_iter():
        # matcher yields target -> pattern
        mapping = {pattern_node: target_node for target_node, pattern_node in match.items()}
        if mapping not in mappings:
            mappings.append(mapping)

    logger.debug("Unit '%s' matched %d time(s) in %s", unit.name, len(mappings), target.name or "plot")
    return mappings
