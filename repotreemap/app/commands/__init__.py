"""Command handlers for the repotreemap CLI."""
