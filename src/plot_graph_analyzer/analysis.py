"""Analysis session: clone, post-process and score a plot graph."""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings, get_settings
from .graph.plot_graph import PlotGraph
from .postprocess import postprocess
from .tellability import TellabilityResult, score
from .units import DEFAULT_LIBRARY, FunctionalUnitLibrary

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Post-processed, unit-annotated plot graph and its tellability."""

    graph: PlotGraph
    tellability: TellabilityResult

    @property
    def score(self) -> float:
        return self.tellability.compute()


class PlotAnalyzer:
    """Runs the analysis chain on clones of live plot graphs.

    The unit library is read-only and may be shared between analyzers.
    """

    def __init__(self, library: FunctionalUnitLibrary = DEFAULT_LIBRARY, settings: Optional[Settings] = None):
        self.library = library
        self.settings = settings or get_settings()

    def postprocess(self, graph: PlotGraph) -> PlotGraph:
        """Return a post-processed copy of `graph`."""
        return postprocess(graph, self.settings)

    def analyze(self, graph: PlotGraph) -> AnalysisResult:
        logger.info("Analyzing %r", graph)
        processed = self.postprocess(graph)
        return AnalysisResult(graph=processed, tellability=score(processed, self.library))
