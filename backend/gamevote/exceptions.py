"""Error types raised by the voting core.

Routes translate these into JSON error responses; each class carries the
HTTP status it maps to.
"""

from typing import Any, Dict, Optional


class GameVoteError(Exception):
    """Base class for all gamevote errors."""

    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self):
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({details})"
        return self.message


class ValidationError(GameVoteError):
    """Malformed caller input: missing or empty name, non-list payload."""

    status_code = 400


class NotFoundError(GameVoteError):
    """A game name or id that does not resolve."""

    status_code = 404


class StorageError(GameVoteError):
    """The database was unreachable or a statement failed.

    The session has already been rolled back when this is raised, so no
    half-applied vote survives it.
    """

    status_code = 500


class AuthenticationError(GameVoteError):
    """The OAuth provider rejected or failed a login attempt."""

    status_code = 502
