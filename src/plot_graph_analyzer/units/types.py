"""Abstract vertex types used for functional unit matching."""

from enum import Enum

from plot_graph_analyzer.graph.vertex import Vertex


class UnitVertexType(str, Enum):
    """What a plot vertex looks like to a functional unit."""

    INTENTION = "intention"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    WILDCARD = "wildcard"
    NONE = "none"


def unit_vertex_type(vertex: Vertex) -> UnitVertexType:
    """Derive the unit vertex type of a plot vertex.

    Intentions win over emotions; a vertex with both positive and negative
    emotions is a WILDCARD.
    """
    if vertex.intention:
        return UnitVertexType.INTENTION
    is_positive, is_negative = vertex.valences
    if is_positive and is_negative:
        return UnitVertexType.WILDCARD
    if is_positive:
        return UnitVertexType.POSITIVE
    if is_negative:
        return UnitVertexType.NEGATIVE
    return UnitVertexType.NONE


_VALENCED = (UnitVertexType.POSITIVE, UnitVertexType.NEGATIVE)


def is_compatible(pattern_type: UnitVertexType, target_type: UnitVertexType) -> bool:
    """Whether a target vertex may fill a pattern vertex."""
    if pattern_type == target_type:
        return True
    if pattern_type == UnitVertexType.WILDCARD:
        return target_type in _VALENCED
    return False
