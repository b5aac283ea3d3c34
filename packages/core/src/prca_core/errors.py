"""Exceptions raised by prca."""

from __future__ import annotations


class PrcaError(Exception):
    """Base class for all prca errors."""


class ConfigurationError(PrcaError):
    """Raised when the orchestrator or its settings are constructed with invalid arguments."""


class RemoteSystemError(PrcaError):
    """Raised by pull request system adapters when a remote call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
