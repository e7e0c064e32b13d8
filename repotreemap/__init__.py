"""repotreemap: squarified treemaps of repository file trees."""

__version__ = "0.1.0"
