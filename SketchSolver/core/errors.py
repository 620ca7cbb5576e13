"""Exception hierarchy for recoverable session errors.

An unavailable drawing surface is not represented here: surface operations
simply return when no buffer exists.
"""
from __future__ import annotations


class SketchSolverError(Exception):
    """Base class for application errors."""


class ServiceFailure(SketchSolverError):
    """The recognition service could not be reached or reported an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(ServiceFailure):
    """The service replied, but the body did not match the expected schema."""
