"""Merge Word documents through a conversion backend and download the result."""

__all__ = ["__version__"]

__version__ = "0.1.0"
