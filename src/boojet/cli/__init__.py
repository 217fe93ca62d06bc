"""Command-line interface for boojet."""
