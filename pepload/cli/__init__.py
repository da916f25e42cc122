"""Command-line interface for pepload."""
