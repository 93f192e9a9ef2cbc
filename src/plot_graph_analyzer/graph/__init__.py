"""Plot graph primitives: annotated events, typed edges and per-character spines."""

from .annotations import (
    AnnotationParseError,
    get_annotation,
    get_annots,
    parse_annotations,
    remove_annots,
)
from .edge import Edge, EdgeType
from .plot_graph import PlotGraph, PlotGraphError
from .recorder import PlotRecorder
from .vertex import Vertex, VertexType

__all__ = [
    "AnnotationParseError",
    "get_annotation",
    "get_annots",
    "parse_annotations",
    "remove_annots",
    "Edge",
    "EdgeType",
    "PlotGraph",
    "PlotGraphError",
    "PlotRecorder",
    "Vertex",
    "VertexType",
]
