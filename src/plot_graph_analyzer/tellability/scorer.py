"""
Tellability Scoring

Detects functional units and polyvalent vertices in a post-processed plot graph
and combines them with plot statistics into a single tellability score.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.units import DEFAULT_LIBRARY, ConnectivityGraph, FunctionalUnitLibrary, find_units, unit_view

from .counting import PlotStatistics
from .symmetry import compute_symmetry

logger = logging.getLogger(__name__)


@dataclass
class TellabilityResult:
    """Features of a plot and the tellability score derived from them."""
    # Functional polyvalence
    num_functional_units: int = 0
    num_polyvalent_vertices: int = 0
    num_all_vertices: int = 0
    functional_unit_count: dict[str, int] = field(default_factory=dict)

    # Plot statistics
    productive_conflicts: int = 0
    suspense: int = 0
    plot_length: int = 0

    # Semantic symmetry, not part of the score yet
    symmetry: float = 0.0

    connectivity_graph: Optional[ConnectivityGraph] = field(default=None, repr=False, compare=False)

    @property
    def plot_unit_types(self) -> list[str]:
        """Names of the units found at least once."""
        return [name for name, count in self.functional_unit_count.items() if count > 0]

    def compute(self) -> float:
        """Overall tellability: equally weighted, normalized features.

        A plot without a productive conflict has no tellability.
        """
        if self.productive_conflicts < 1:
            logger.info("Overall tellability: 0 (no productive conflict)")
            return 0.0

        polyvalence = self.num_polyvalent_vertices / self.num_all_vertices if self.num_all_vertices else 0.0
        suspense = self.suspense / self.plot_length if self.plot_length else 0.0
        tellability = polyvalence + suspense
        logger.info("Overall tellability: %s", tellability)
        return tellability

    def to_dict(self) -> dict:
        return {
            "tellability": self.compute(),
            "num_functional_units": self.num_functional_units,
            "num_polyvalent_vertices": self.num_polyvalent_vertices,
            "num_all_vertices": self.num_all_vertices,
            "functional_unit_count": dict(self.functional_unit_count),
            "productive_conflicts": self.productive_conflicts,
            "suspense": self.suspense,
            "plot_length": self.plot_length,
            "symmetry": self.symmetry,
        }


def detect_polyvalence(
    graph: PlotGraph,
    library: FunctionalUnitLibrary = DEFAULT_LIBRARY,
    result: Optional[TellabilityResult] = None,
) -> TellabilityResult:
    """Find all units, tag the vertices they cover and flag vertices in two or more matches.

    Mutates the vertices of `graph`.
    """
    result = result or TellabilityResult()
    connectivity = ConnectivityGraph(graph)
    view = unit_view(graph)
    matches: Counter[int] = Counter()

    for unit in library.units:
        mappings = find_units(graph, unit, view)
        result.functional_unit_count[unit.name] = len(mappings)
        result.num_functional_units += len(mappings)
        logger.info("Found '%s' %d times.", unit.name, len(mappings))

        for mapping in mappings:
            connectivity.add(unit, mapping)
            for handle in mapping.values():
                graph.mark_vertex_as_unit(handle, unit.name)
                matches[handle] += 1
                if matches[handle] == 2:
                    result.num_polyvalent_vertices += 1
                    graph.vertex(handle).polyvalent = True

    for unit in library.primitives:
        for mapping in find_units(graph, unit, view):
            connectivity.add(unit, mapping)

    result.connectivity_graph = connectivity
    return result


def score(graph: PlotGraph, library: FunctionalUnitLibrary = DEFAULT_LIBRARY) -> TellabilityResult:
    """Analyze a post-processed plot graph.

    Mutates the vertices of `graph` (unit tags and polyvalence flags); pass a clone
    to keep the original untouched.
    """
    result = detect_polyvalence(graph, library)

    stats = PlotStatistics.count(graph)
    result.num_all_vertices = stats.num_all_vertices
    result.productive_conflicts = stats.productive_conflicts
    result.suspense = stats.suspense
    result.plot_length = stats.plot_length

    result.symmetry = compute_symmetry(graph)
    return result
