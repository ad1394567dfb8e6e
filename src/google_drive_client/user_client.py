"""
User-centric Google Drive client.

Each client instance owns its credential and configuration, so several users
can be served side by side without sharing state.
"""

from typing import Optional, Callable

import requests
from google.oauth2.credentials import Credentials

from .auth.auth import authorize, get_credentials_from_file, get_credentials_from_info
from .auth.token_store import TokenStore
from .config import DriveConfig
from .exceptions import InvalidCredentialsError
from .services.drive.api_service import DriveApiService


class UserClient:
    """
    Client that provides access to the Drive API for one user.

    Usage Examples:
        # Interactive authorization
        user = UserClient.authorize(client_id, client_secret)
        page = user.drive.list_files_in_folder("0XXXXXXXX")

        # Cached token on disk
        user = UserClient.from_file()

        # Multi-user scenario
        user_1 = UserClient.from_credentials_info(app_creds, user1_token)
        user_2 = UserClient.from_credentials_info(app_creds, user2_token)
    """

    def __init__(
            self,
            credentials: Optional[Credentials] = None,
            config: Optional[DriveConfig] = None,
            session_factory: Optional[Callable[[Credentials], requests.Session]] = None
    ):
        """
        Initialize user client.

        Args:
            credentials: Google OAuth2 credentials for this user, may be set later
            config: Client configuration, defaults to DriveConfig()
            session_factory: Builds the authorized HTTP session for a credential
        """
        self.config = config or DriveConfig()
        self.token_store = TokenStore(credentials)
        self.drive = DriveApiService(self.token_store, self.config, session_factory)

    @classmethod
    def authorize(cls, client_id: Optional[str] = None, client_secret: Optional[str] = None,
                  config: Optional[DriveConfig] = None, port: int = 0) -> "UserClient":
        """
        Create a UserClient by running the interactive OAuth2 flow.

        Args:
            client_id: OAuth client ID, defaults to config.client_id
            client_secret: OAuth client secret, defaults to config.client_secret
            config: Client configuration
            port: Local port for the redirect server

        Returns:
            UserClient instance
        """
        config = config or DriveConfig.from_env()
        client_id = client_id or config.client_id
        client_secret = client_secret or config.client_secret
        if not client_id or not client_secret:
            raise InvalidCredentialsError(
                "No OAuth client configured. Pass client_id and client_secret or set "
                "GOOGLE_DRIVE_CLIENT_ID and GOOGLE_DRIVE_CLIENT_SECRET."
            )
        credentials = authorize(client_id, client_secret, config.scopes, port=port)
        return cls(credentials, config)

    @classmethod
    def from_file(cls, credentials_path: str = None, token_path: str = None,
                  config: Optional[DriveConfig] = None) -> "UserClient":
        """
        Create a UserClient from credential files (single user scenario).

        Args:
            credentials_path: Path to credentials.json file
            token_path: Path to token.json file
            config: Client configuration

        Returns:
            UserClient instance
        """
        config = config or DriveConfig.from_env()
        credentials = get_credentials_from_file(
            credentials_path or config.credentials_path,
            token_path or config.token_path,
            config.scopes,
        )
        return cls(credentials, config)

    @classmethod
    def from_credentials_info(cls, app_credentials: dict, user_token_data: dict = None,
                              config: Optional[DriveConfig] = None) -> "UserClient":
        """
        Create a UserClient from credential data (multi-user scenario).

        Args:
            app_credentials: OAuth client configuration dict
            user_token_data: Previously stored user token data dict
            config: Client configuration

        Returns:
            UserClient instance
        """
        config = config or DriveConfig()
        credentials, _ = get_credentials_from_info(app_credentials, user_token_data, config.scopes)
        return cls(credentials, config)

    def set_credentials(self, credentials: Credentials) -> Credentials:
        """Replace this user's credential (e.g. after re-authorization)."""
        return self.token_store.set_token(credentials)

    @property
    def is_authenticated(self) -> bool:
        return self.token_store.has_token()
