"""Tools for locating, filtering and reporting secrets found in source code."""

__version__ = "0.1.0"