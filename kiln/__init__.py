"""Incremental build driver for Java sources."""

__version__ = "0.1.0"
