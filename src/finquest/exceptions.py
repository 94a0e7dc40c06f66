"""Domain errors raised by the progression engine and services.

Each error carries the HTTP status the global handler maps it to, so services
stay free of FastAPI imports.
"""

from __future__ import annotations


class FinQuestError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(FinQuestError, ValueError):
    """Malformed or out-of-range input, rejected before any mutation."""

    status_code = 400


class NotFoundError(FinQuestError, LookupError):
    """A referenced character, quest or achievement does not exist."""

    status_code = 404


class ForbiddenError(FinQuestError):
    """A business rule forbids the action (e.g. level gate)."""

    status_code = 403


class ConflictError(FinQuestError):
    """The action conflicts with current state (e.g. quest already accepted)."""

    status_code = 409
