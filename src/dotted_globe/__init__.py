"""Dotted globe: country polygons to classified sphere sample points."""

__version__ = "0.1.0"
