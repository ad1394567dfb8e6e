from typing import Optional, List, Dict, Any

from .base import APIError, GoogleDriveClientError


class DriveApiError(APIError):
    """
    Raised when the Drive API answers with a non-success status.

    The exception message is the server-provided error message, verbatim.
    """

    def __init__(
            self,
            message: str,
            status_code: Optional[int] = None,
            reason: Optional[str] = None,
            errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.reason = reason
        self.errors = errors or []


class ResponseDecodeError(GoogleDriveClientError):
    """Raised when a response body expected to be JSON cannot be decoded."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(GoogleDriveClientError):
    """Raised when the HTTP request itself fails (connection, timeout, ...)."""
    pass
