"""Exceptions raised by the backend API client."""

from __future__ import annotations


class PocketLedgerError(Exception):
    """Base exception for all PocketLedger errors.

    ``server_message`` holds the human-readable text from the response body,
    when the backend supplied one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        server_message: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.server_message = server_message
        super().__init__(self.message)


class NetworkOrServerError(PocketLedgerError):
    """Raised when the backend is unreachable, times out, or answers with 5xx."""

    def __init__(
        self,
        message: str = "The server could not be reached",
        status_code: int | None = None,
        server_message: str | None = None,
    ):
        super().__init__(message, status_code=status_code, server_message=server_message)


class ValidationRejected(PocketLedgerError):
    """Raised when the backend rejects a request with a client-error status."""

    def __init__(
        self,
        message: str = "The request was rejected",
        status_code: int = 400,
        server_message: str | None = None,
    ):
        super().__init__(message, status_code=status_code, server_message=server_message)


def user_message(exc: BaseException, fallback: str) -> str:
    """Return the server-provided message when one exists, else ``fallback``."""

    server_message = getattr(exc, "server_message", None)
    if isinstance(server_message, str) and server_message.strip():
        return server_message.strip()
    return fallback


__all__ = ["NetworkOrServerError", "PocketLedgerError", "ValidationRejected", "user_message"]
