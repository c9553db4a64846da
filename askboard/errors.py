"""
Error taxonomy shared by the store, the record operations and the routes.

Every error carries the HTTP status it maps to and the short code sent back
to clients as ``{"error": code}``.
"""

from __future__ import annotations


class BoardError(Exception):
    status_code = 500
    code = "server_error"

    def __init__(self, code: str | None = None, message: str | None = None):
        if code:
            self.code = code
        super().__init__(message or self.code)


class ValidationError(BoardError):
    """Bad or missing input."""

    status_code = 400
    code = "invalid_input"


class NotFound(BoardError):
    status_code = 404
    code = "not_found"


class UnknownAction(BoardError):
    status_code = 400
    code = "unknown_action"


class ServerError(BoardError):
    """Catch-all failure; storage errors surface as this to clients."""


class ReadFailure(ServerError):
    """Neither replica could be read."""


class WriteFailure(ServerError):
    """Both replicas rejected the write."""
