"""
Exceptions for the Chain SDK.
"""
from typing import Any, Optional


class ChainError(Exception):
    """Base exception for all Chain SDK errors."""
    pass


class BadURLError(ChainError):
    """Raised when the Chain Core URL is malformed or not allowed."""
    pass


class ConnectivityError(ChainError):
    """Raised when the Chain Core server cannot be reached."""
    pass


class HTTPError(ChainError):
    """Raised when the HTTP request fails for any other reason."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class JSONError(ChainError):
    """Raised when a response is not JSON or does not have the expected shape."""

    def __init__(self, message: str, request_id: Optional[str] = None):
        self.request_id = request_id
        super().__init__(message)


class APIError(ChainError):
    """
    Raised when Chain Core returns a structured error.

    Attributes:
        code: Chain error code, e.g. "CH735"
        message: Human readable message from the server
        detail: Additional detail about the failure
        data: Structured error data, if any
        temporary: Whether the server flagged the error as retriable
        request_id: Value of the Chain-Request-Id response header
        status_code: HTTP status code, when the error came from an HTTP error status
    """

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        detail: Optional[str] = None,
        data: Optional[Any] = None,
        temporary: bool = False,
        request_id: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        self.code = code
        self.message = message
        self.detail = detail
        self.data = data
        self.temporary = temporary
        self.request_id = request_id
        self.status_code = status_code
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"Code: {self.code} Message: {self.message}"
        if self.detail:
            text += f" Detail: {self.detail}"
        if self.request_id:
            text += f" Request-ID: {self.request_id}"
        return text
