"""Command-line interface for Vocab Drill."""
