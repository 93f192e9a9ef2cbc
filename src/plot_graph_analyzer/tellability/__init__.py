"""Tellability of plot graphs."""

from .counting import PlotStatistics
from .scorer import TellabilityResult, detect_polyvalence, score
from .symmetry import compute_symmetry

__all__ = ["PlotStatistics", "TellabilityResult", "compute_symmetry", "detect_polyvalence", "score"]
