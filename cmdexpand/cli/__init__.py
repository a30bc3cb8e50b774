"""Command-line interface for cmdexpand."""
