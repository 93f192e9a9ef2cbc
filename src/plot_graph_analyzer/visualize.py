"""Interactive HTML rendering of analyzed plot graphs."""

from pathlib import Path

import networkx as nx
from pyvis.network import Network

from plot_graph_analyzer.graph.edge import EdgeType
from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.graph.vertex import VertexType

VERTEX_COLORS = {
    VertexType.ROOT: "#FFFFFF",
    VertexType.ACTION: "#4CAF50",     # Green
    VertexType.PERCEPT: "#2196F3",    # Blue
    VertexType.INTENTION: "#FF9800",  # Orange
    VertexType.SPEECH: "#9C27B0",     # Purple
}

EDGE_COLORS = {
    EdgeType.MOTIVATION: "#FFC107",
    EdgeType.COMMUNICATION: "#9C27B0",
    EdgeType.ACTUALIZATION: "#4CAF50",
    EdgeType.TERMINATION: "#F44336",
    EdgeType.EQUIVALENCE: "#00BCD4",
    EdgeType.CAUSALITY: "#2196F3",
    EdgeType.CROSSCHARACTER: "#E91E63",
}


def display_graph(graph: PlotGraph) -> nx.MultiDiGraph:
    """Plain networkx copy of a plot graph with pyvis display attributes."""
    display = nx.MultiDiGraph()

    for vertex in graph.vertices:
        title = f"{vertex.label}\nType: {vertex.type.value}\nStep: {vertex.step}"
        if vertex.emotions:
            title += f"\nEmotions: {', '.join(sorted(vertex.emotions))}"
        if vertex.units:
            title += f"\nUnits: {', '.join(vertex.units)}"

        display.add_node(
            vertex.id,
            label=str(vertex),
            title=title,
            color=VERTEX_COLORS.get(vertex.type, "#9E9E9E"),
            size=25 if vertex.type == VertexType.ROOT else 10 + 5 * len(vertex.units),
            borderWidth=3 if vertex.polyvalent else 1,
        )

    for edge in graph.edges:
        display.add_edge(
            edge.source,
            edge.target,
            title=edge.type.value,
            color=EDGE_COLORS.get(edge.type, "#9E9E9E"),
            dashes=not edge.type.is_spine,
        )

    return display


def save_html(graph: PlotGraph, output_path: Path) -> Path:
    """Write an interactive visualization of the graph."""
    net = Network(
        height="800px",
        width="100%",
        bgcolor="#222222",
        font_color="white",
        directed=True,
        cdn_resources="remote",
    )

    net.barnes_hut(
        gravity=-3000,
        central_gravity=0.3,
        spring_length=120,
        spring_strength=0.05,
    )

    net.from_nx(display_graph(graph))
    net.save_graph(str(output_path))
    return output_path
