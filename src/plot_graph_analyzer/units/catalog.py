"""Catalog of functional units: small typed plot patterns after Lehnert's plot units."""

from dataclasses import dataclass, field

import networkx as nx

from plot_graph_analyzer.graph.edge import EdgeType

from .types import UnitVertexType


class UnitPattern:
    """Builder for the pattern graph of a functional unit.

    Pattern vertices are numbered in creation order, starting at 1.

    Usage:
        pattern = UnitPattern()
        v1 = pattern.intention()
        v2 = pattern.intention()
        v3 = pattern.wildcard()
        pattern.connect(v1, v2, EdgeType.MOTIVATION)
        pattern.connect(v2, v3, EdgeType.ACTUALIZATION)
        graph = pattern.build()
    """

    def __init__(self):
        self._graph = nx.MultiDiGraph()

    def _vertex(self, unit_type: UnitVertexType) -> int:
        node = self._graph.number_of_nodes() + 1
        self._graph.add_node(node, unit_type=unit_type)
        return node

    def intention(self) -> int:
        return self._vertex(UnitVertexType.INTENTION)

    def positive(self) -> int:
        return self._vertex(UnitVertexType.POSITIVE)

    def negative(self) -> int:
        return self._vertex(UnitVertexType.NEGATIVE)

    def wildcard(self) -> int:
        return self._vertex(UnitVertexType.WILDCARD)

    def connect(self, source: int, target: int, edge_type: EdgeType) -> "UnitPattern":
        self._graph.add_edge(source, target, type=edge_type)
        return self

    def build(self) -> nx.MultiDiGraph:
        return nx.freeze(self._graph.copy())


@dataclass(frozen=True)
class FunctionalUnit:
    """A named pattern graph. Primitive units only feed the connectivity graph."""

    name: str
    graph: nx.MultiDiGraph = field(compare=False, repr=False)
    primitive: bool = False

    @property
    def size(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def first_vertex(self) -> int:
        return min(self.graph.nodes)

    def describe(self) -> list[str]:
        """Human readable pattern edges, e.g. ``I1 -motivation-> I2``."""
        names = {
            node: f"{data['unit_type'].value[0].upper()}{node}"
            for node, data in self.graph.nodes(data=True)
        }
        return [
            f"{names[source]} -{edge_type.value}-> {names[target]}"
            for source, target, edge_type in self.graph.edges(data="type")
        ]


def _denied_request() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3, v4 = p.intention(), p.intention(), p.intention(), p.negative()
    p.connect(v1, v2, EdgeType.COMMUNICATION)
    p.connect(v2, v3, EdgeType.MOTIVATION)
    p.connect(v3, v4, EdgeType.COMMUNICATION)
    return FunctionalUnit("Denied Request", p.build())


def _nested_goal() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.intention(), p.intention(), p.wildcard()
    p.connect(v1, v2, EdgeType.MOTIVATION)
    p.connect(v2, v3, EdgeType.ACTUALIZATION)
    return FunctionalUnit("Nested Goal", p.build())


def _retaliation() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3, v4 = p.intention(), p.negative(), p.intention(), p.intention()
    v5, v6, v7, v8 = p.positive(), p.intention(), p.intention(), p.negative()
    p.connect(v1, v2, EdgeType.COMMUNICATION)
    p.connect(v2, v3, EdgeType.MOTIVATION)
    p.connect(v3, v4, EdgeType.MOTIVATION)
    p.connect(v4, v5, EdgeType.ACTUALIZATION)
    p.connect(v3, v6, EdgeType.MOTIVATION)
    p.connect(v6, v7, EdgeType.COMMUNICATION)
    p.connect(v7, v8, EdgeType.ACTUALIZATION)
    return FunctionalUnit("Retaliation", p.build())


def _intentional_problem_resolution() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.negative(), p.intention(), p.positive()
    p.connect(v1, v2, EdgeType.MOTIVATION)
    p.connect(v2, v3, EdgeType.ACTUALIZATION)
    p.connect(v3, v1, EdgeType.TERMINATION)
    return FunctionalUnit("Intentional Problem Resolution", p.build())


def _fortuitous_problem_resolution() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.negative(), p.intention(), p.positive()
    p.connect(v1, v2, EdgeType.MOTIVATION)
    p.connect(v3, v1, EdgeType.TERMINATION)
    return FunctionalUnit("Fortuitous Problem Resolution", p.build())


def _success_born_of_adversity() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.negative(), p.intention(), p.positive()
    p.connect(v1, v2, EdgeType.MOTIVATION)
    p.connect(v2, v3, EdgeType.ACTUALIZATION)
    return FunctionalUnit("Success born of Adversity", p.build())


def _fleeting_success() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.intention(), p.positive(), p.negative()
    p.connect(v1, v2, EdgeType.ACTUALIZATION)
    p.connect(v3, v2, EdgeType.TERMINATION)
    return FunctionalUnit("Fleeting Success", p.build())


def _starting_over() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3, v4 = p.intention(), p.positive(), p.negative(), p.intention()
    p.connect(v1, v2, EdgeType.ACTUALIZATION)
    p.connect(v3, v2, EdgeType.TERMINATION)
    p.connect(v3, v4, EdgeType.MOTIVATION)
    p.connect(v4, v1, EdgeType.EQUIVALENCE)
    return FunctionalUnit("Starting Over", p.build())


def _giving_up() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.intention(), p.negative(), p.intention()
    p.connect(v1, v2, EdgeType.ACTUALIZATION)
    p.connect(v2, v3, EdgeType.MOTIVATION)
    p.connect(v3, v1, EdgeType.TERMINATION)
    return FunctionalUnit("Giving Up", p.build())


def _sacrifice() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2, v3 = p.positive(), p.intention(), p.positive()
    p.connect(v2, v3, EdgeType.ACTUALIZATION)
    p.connect(v3, v1, EdgeType.TERMINATION)
    return FunctionalUnit("Sacrifice", p.build())


def _debug_speech() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2 = p.intention(), p.wildcard()
    p.connect(v1, v2, EdgeType.COMMUNICATION)
    return FunctionalUnit("Debug Speech", p.build(), primitive=True)


def _debug_termination() -> FunctionalUnit:
    p = UnitPattern()
    v1, v2 = p.intention(), p.wildcard()
    p.connect(v2, v1, EdgeType.TERMINATION)
    return FunctionalUnit("Debug Termination", p.build(), primitive=True)


@dataclass(frozen=True)
class FunctionalUnitLibrary:
    """Immutable catalog of functional units, safe to share between analyses."""

    units: tuple[FunctionalUnit, ...]
    primitives: tuple[FunctionalUnit, ...] = ()

    @classmethod
    def default(cls) -> "FunctionalUnitLibrary":
        return cls(
            units=(
                _denied_request(),
                _nested_goal(),
                _retaliation(),
                _intentional_problem_resolution(),
                _fortuitous_problem_resolution(),
                _success_born_of_adversity(),
                _fleeting_success(),
                _starting_over(),
                _giving_up(),
                _sacrifice(),
            ),
            primitives=(_debug_speech(), _debug_termination()),
        )

    @property
    def all_units(self) -> tuple[FunctionalUnit, ...]:
        return self.units + self.primitives

    def get(self, name: str) -> FunctionalUnit:
        for unit in self.all_units:
            if unit.name == name:
                return unit
        raise KeyError(name)


DEFAULT_LIBRARY = FunctionalUnitLibrary.default()
