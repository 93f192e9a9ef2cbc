"""Functional units: catalog, unit finder and connectivity graph."""

from .catalog import DEFAULT_LIBRARY, FunctionalUnit, FunctionalUnitLibrary, UnitPattern
from .connectivity import ConnectivityGraph, UnitInstance
from .finder import find_units, unit_view
from .types import UnitVertexType, is_compatible, unit_vertex_type

__all__ = [
    "DEFAULT_LIBRARY",
    "ConnectivityGraph",
    "FunctionalUnit",
    "FunctionalUnitLibrary",
    "UnitInstance",
    "UnitPattern",
    "UnitVertexType",
    "find_units",
    "is_compatible",
    "unit_vertex_type",
    "unit_view",
]
