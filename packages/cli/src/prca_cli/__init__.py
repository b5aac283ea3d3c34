"""Command-line wrapper for prca."""
