"""Error taxonomy for git data operations."""

from __future__ import annotations


class GitDataError(Exception):
    """Base error; carries the operation that failed and the underlying cause."""

    def __init__(
        self, operation: str, message: str, cause: Exception | None = None
    ) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: {message}")
        if cause is not None:
            self.__cause__ = cause


class DecodeError(GitDataError):
    """A wire document could not be decoded into a git object."""


class EncodeError(GitDataError):
    """A git object could not be encoded for the wire."""


class TransportError(GitDataError):
    """Network failure or non-success HTTP status."""

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(operation, message, cause)


class NotFoundError(TransportError):
    """The remote store has no object at the requested address."""

    def __init__(self, operation: str, message: str = "not found") -> None:
        super().__init__(operation, message, status_code=404)


class UnsupportedOperationError(GitDataError, NotImplementedError):
    """The operation exists in the interface but has no behaviour."""
