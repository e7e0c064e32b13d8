"""Application layer: interactive view, commands, and output rendering."""
