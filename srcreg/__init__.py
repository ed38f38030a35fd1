"""Append-only source registry with a unique URL index."""

__version__ = "0.1.0"
