import os
import logging
from typing import Optional, List, Tuple, Dict, Any

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from ..config import DRIVE_SCOPES, TOKEN_PATH, CREDENTIALS_PATH
from ..exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_client_config(client_id: str, client_secret: str) -> Dict[str, Any]:
    """
    Build an installed-app client configuration from a client ID and secret.

    Args:
        client_id: OAuth client ID from the Google API Console.
        client_secret: OAuth client secret from the Google API Console.

    Returns:
        dict: Client configuration in the credentials.json format.
    """
    if not client_id or not client_secret:
        raise InvalidCredentialsError("Both client_id and client_secret are required to authorize")

    return {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
            "redirect_uris": ["http://localhost"],
        }
    }


def authorize(client_id: str, client_secret: str, scopes: Optional[List[str]] = None, port: int = 0) -> Credentials:
    """
    Run the interactive OAuth2 authorization-code flow for Google Drive.

    Args:
        client_id: OAuth client ID.
        client_secret: OAuth client secret.
        scopes: Scopes to request (defaults to full Drive access).
        port: Local port for the redirect server, 0 picks a free one.

    Returns:
        Credentials: The authorized user credential.
    """
    scopes = scopes or DRIVE_SCOPES
    client_config = build_client_config(client_id, client_secret)

    logger.info("Starting OAuth2 flow")
    try:
        flow = InstalledAppFlow.from_client_config(client_config, scopes)
        creds = flow.run_local_server(port=port)
    except (GoogleAuthError, ValueError) as e:
        raise InvalidCredentialsError(f"Failed to obtain new credentials: {e}")

    logger.info("OAuth2 flow completed successfully")
    return creds


def get_credentials_from_info(app_credentials: dict, user_token_data: dict = None, scopes: list = None,
                              port: int = 0) -> Tuple[Credentials, Dict[str, Any]]:
    """
    Handle OAuth flow without file storage.

    Args:
        app_credentials (dict): OAuth client configuration (contents of credentials.json)
        user_token_data (dict, optional): Previously stored token data.
        scopes (list[str]): List of scopes to request
        port (int): Local port for the redirect server.

    Returns:
        tuple: (credentials, updated_token_data_to_store)
    """
    scopes = scopes or DRIVE_SCOPES
    creds = None

    if user_token_data:
        creds = Credentials.from_authorized_user_info(user_token_data, scopes)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired credentials")
            try:
                creds.refresh(Request())
            except GoogleAuthError as e:
                raise InvalidCredentialsError(f"Failed to refresh credentials: {e}")
        else:
            try:
                flow = InstalledAppFlow.from_client_config(app_credentials, scopes)
                creds = flow.run_local_server(port=port)
            except (GoogleAuthError, ValueError) as e:
                raise InvalidCredentialsError(f"Failed to obtain new credentials: {e}")

    token_data_to_store = {
        'token': creds.token,
        'refresh_token': creds.refresh_token,
        'token_uri': creds.token_uri,
        'client_id': creds.client_id,
        'client_secret': creds.client_secret,
        'scopes': creds.scopes
    }

    return creds, token_data_to_store


def get_credentials_from_file(credentials_path: str = None, token_path: str = None, scopes: list = None,
                              port: int = 0) -> Credentials:
    """
    Load cached credentials from token_path, refreshing or re-authorizing as needed.

    Args:
        credentials_path: Path to the client secrets file (credentials.json).
        token_path: Path of the cached user token (token.json).
        scopes: List of scopes to request.
        port: Local port for the redirect server.

    Returns:
        Credentials: Valid credentials, also written back to token_path.
    """
    token_path = token_path or TOKEN_PATH
    credentials_path = credentials_path or CREDENTIALS_PATH
    scopes = scopes or DRIVE_SCOPES

    creds = None

    if os.path.exists(token_path):
        try:
            creds = Credentials.from_authorized_user_file(token_path, scopes)
            logger.info("Loaded credentials from token file")
        except ValueError as e:
            raise InvalidCredentialsError(f"Failed to load existing credentials: {e}")

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired credentials")
            try:
                creds.refresh(Request())
            except GoogleAuthError as e:
                raise InvalidCredentialsError(f"Failed to refresh credentials: {e}")
        else:
            if not os.path.exists(credentials_path):
                raise InvalidCredentialsError(
                    f"Credentials file not found at {credentials_path}. "
                    "Please download it from Google Cloud Console."
                )
            flow = InstalledAppFlow.from_client_secrets_file(
                credentials_path, scopes
            )
            creds = flow.run_local_server(port=port)

        with open(token_path, "w") as token:
            token.write(creds.to_json())
        logger.info("Credentials saved to token file")

    return creds
