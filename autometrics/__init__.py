"""Prometheus query links, result-label overrides, span exemplars and Sloth SLO files."""

__version__ = "0.1.0"