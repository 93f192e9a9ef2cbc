"""Plot Graph Analyzer - plot graph post-processing, functional units and tellability."""

__version__ = "0.1.0"
