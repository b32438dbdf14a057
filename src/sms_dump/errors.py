from __future__ import annotations


class SmsDumpError(Exception):
    """Base class for errors raised by this service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(SmsDumpError):
    """
    The request itself is wrong: method, `func` value or parameter format.

    Answered with `status_code` and `message`; nothing is stored.
    """

    status_code: int = 400


class MethodNotAllowed(ClientInputError):
    status_code = 405


class BadRequest(ClientInputError):
    status_code = 400


class StorageError(SmsDumpError):
    """Writing a record to the database failed."""


class StartupError(SmsDumpError):
    """The database could not be reached at startup."""
