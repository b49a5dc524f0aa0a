"""Command-line interface for legendarios."""
