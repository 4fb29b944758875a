"""Content loaders and scorers."""
