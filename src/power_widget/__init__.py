"""Configurable strip of toggleable status indicators."""

__version__ = "0.4.0"
