"""lsearch - list files ranked by a chain of content inspections."""

__version__ = "0.1.0"
