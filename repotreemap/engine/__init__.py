"""Layout engine: size resolution, squarified partitioning, and hit testing."""
