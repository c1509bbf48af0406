"""Command-line interface for conic."""
