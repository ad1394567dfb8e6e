"""Thin client for the Google Drive v3 REST API."""

from .config import DriveConfig, DEFAULT_ENDPOINTS, DRIVE_SCOPES
from .user_client import UserClient
from .auth import authorize, TokenStore
from .services.drive import (
    DriveApiService, DriveFile, DriveFileList, Permission, DriveQueryBuilder, build_filter
)
from .exceptions import (
    GoogleDriveClientError, AuthenticationError, UnauthenticatedError, InvalidCredentialsError,
    APIError, DriveApiError, ConfigurationError, ValidationError, ResponseDecodeError, TransportError
)

__version__ = "0.1.0"

__all__ = [
    "DriveConfig",
    "DEFAULT_ENDPOINTS",
    "DRIVE_SCOPES",
    "UserClient",
    "authorize",
    "TokenStore",
    "DriveApiService",
    "DriveFile",
    "DriveFileList",
    "Permission",
    "DriveQueryBuilder",
    "build_filter",
    "GoogleDriveClientError",
    "AuthenticationError",
    "UnauthenticatedError",
    "InvalidCredentialsError",
    "APIError",
    "DriveApiError",
    "ConfigurationError",
    "ValidationError",
    "ResponseDecodeError",
    "TransportError",
]
