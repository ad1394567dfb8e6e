"""OAuth2 authorization and credential storage."""

from .auth import authorize, get_credentials_from_file, get_credentials_from_info
from .token_store import TokenStore

__all__ = [
    "authorize",
    "get_credentials_from_file",
    "get_credentials_from_info",
    "TokenStore",
]
