"""Exceptions raised by the quiz coordinator.

The server layer maps each class to one HTTP status, so callers can tell an
expired admin session apart from a round that already started.
"""


class QuizError(Exception):
    """Base class for every coordinator failure."""


class AuthError(QuizError):
    """Bad password, no admin session yet, or a stale admin token."""


class ValidationError(QuizError):
    """Missing or malformed input; raised before any state changes."""


class ConflictError(QuizError):
    """The operation is not allowed in the current round state."""


class StorageError(QuizError):
    """The content document could not be read or written."""


class LedgerError(StorageError):
    """A session identifier could not be durably recorded."""
