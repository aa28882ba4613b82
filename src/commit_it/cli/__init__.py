"""Command line interface for commit-it."""
