from .base import GoogleDriveClientError, AuthenticationError, APIError, ValidationError, ConfigurationError
from .auth import UnauthenticatedError, InvalidCredentialsError
from .drive import DriveApiError, ResponseDecodeError, TransportError

__all__ = [
    "GoogleDriveClientError",
    "AuthenticationError",
    "APIError",
    "ValidationError",
    "ConfigurationError",
    "UnauthenticatedError",
    "InvalidCredentialsError",
    "DriveApiError",
    "ResponseDecodeError",
    "TransportError",
]
