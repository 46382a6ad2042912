"""Cyclomatic complexity of Go functions, reported as text and drawn as a tree in SVG or PNG."""

__version__ = "0.1.0"