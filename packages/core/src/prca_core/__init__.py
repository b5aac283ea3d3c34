"""Reconciles code analysis findings with pull request discussion threads."""
