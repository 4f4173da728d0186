"""Command-line interface for finmetrics."""
