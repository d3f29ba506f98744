"""Simulated sensor array with a line-based serial command protocol."""

__version__ = "0.1.0"

__all__ = ["__version__"]