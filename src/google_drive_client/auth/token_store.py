from typing import Optional
import logging

from google.oauth2.credentials import Credentials

from ..exceptions import UnauthenticatedError, ValidationError

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Holds the OAuth credential used by one client.

    A single slot: the last credential set wins and is never merged with the
    previous one. Not thread-safe; give each thread its own client.
    """

    def __init__(self, credentials: Optional[Credentials] = None):
        self._credentials = credentials

    def set_token(self, credentials: Credentials) -> Credentials:
        """
        Store a credential, replacing any previous one.
        Args:
            credentials: The OAuth2 credential to store.
        Returns:
            The stored credential.
        """
        if credentials is None:
            raise ValidationError("credentials cannot be None, use clear() instead")
        self._credentials = credentials
        logger.info("Credential stored")
        return credentials

    def get_token(self) -> Credentials:
        """
        Return the stored credential.
        Raises:
            UnauthenticatedError: If no credential has been set.
        """
        if self._credentials is None:
            raise UnauthenticatedError("Not authenticated. Call authorize() or set a credential first.")
        return self._credentials

    def has_token(self) -> bool:
        return self._credentials is not None

    def clear(self) -> None:
        """Forget the stored credential."""
        self._credentials = None
        logger.info("Credential cleared")
