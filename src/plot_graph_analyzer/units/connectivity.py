"""Graph of functional unit instances connected by shared plot vertices."""

from dataclasses import dataclass

import networkx as nx

from plot_graph_analyzer.graph.plot_graph import PlotGraph

from .catalog import FunctionalUnit
from .finder import Mapping


@dataclass(frozen=True)
class UnitInstance:
    """One occurrence of a functional unit in a plot."""

    unit: str
    vertices: frozenset[int]
    subject: str

    @classmethod
    def from_mapping(cls, graph: PlotGraph, unit: FunctionalUnit, mapping: Mapping) -> "UnitInstance":
        subject = graph.character_of(mapping[unit.first_vertex])
        return cls(unit=unit.name, vertices=frozenset(mapping.values()), subject=subject)

    def __str__(self) -> str:
        return f"{self.unit} ({self.subject})"


class ConnectivityGraph:
    """Undirected graph of unit instances; instances sharing a plot vertex are adjacent."""

    def __init__(self, graph: PlotGraph):
        self.plot = graph
        self.graph = nx.Graph()

    def add(self, unit: FunctionalUnit, mapping: Mapping) -> UnitInstance:
        instance = UnitInstance.from_mapping(self.plot, unit, mapping)
        if instance in self.graph:
            return instance
        for other in list(self.graph.nodes):
            if instance.vertices & other.vertices:
                self.graph.add_edge(instance, other)
        self.graph.add_node(instance)
        return instance

    @property
    def instances(self) -> list[UnitInstance]:
        return list(self.graph.nodes)

    def neighbors(self, instance: UnitInstance) -> list[UnitInstance]:
        return list(self.graph.neighbors(instance))

    def components(self) -> list[set[UnitInstance]]:
        return [set(component) for component in nx.connected_components(self.graph)]

    def __len__(self) -> int:
        return self.graph.number_of_nodes()
