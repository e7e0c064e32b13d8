"""Argument parsing support for the repotreemap CLI."""
