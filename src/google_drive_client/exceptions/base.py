class GoogleDriveClientError(Exception):
    """Base exception for all Google Drive client errors."""
    pass


class AuthenticationError(GoogleDriveClientError):
    """Raised when authentication fails."""
    pass


class APIError(GoogleDriveClientError):
    """Raised when API calls fail."""
    pass


class ValidationError(GoogleDriveClientError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(GoogleDriveClientError):
    """Raised when an endpoint or setting is missing from the configuration."""
    pass
