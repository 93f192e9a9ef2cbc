"""Post-processing of recorded plot graphs."""

from typing import Optional

from plot_graph_analyzer.config import Settings
from plot_graph_analyzer.graph.plot_graph import PlotGraph

from .annotations import AnnotationPass
from .structure import StructurePass
from .walker import SpinePass


def postprocess(graph: PlotGraph, settings: Optional[Settings] = None) -> PlotGraph:
    """Run the structural and the annotation pass; `graph` itself stays untouched."""
    graph = StructurePass(settings).apply(graph)
    return AnnotationPass(settings).apply(graph)


__all__ = ["AnnotationPass", "SpinePass", "StructurePass", "postprocess"]
