"""Data models for event reports and recorded plots."""

from plot_graph_analyzer.models.events import EventReport, PlotLog

__all__ = ["EventReport", "PlotLog"]
