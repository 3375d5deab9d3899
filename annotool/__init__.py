"""Geometric annotation labels, shared label properties, point-cloud and recent-list helpers."""

__version__ = "1.13.1"