from .base import AuthenticationError


class UnauthenticatedError(AuthenticationError):
    """Raised when a request is made before any credential has been set."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when credentials are invalid or cannot be obtained."""
    pass
