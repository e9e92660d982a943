"""Command-line harness for interplay."""
