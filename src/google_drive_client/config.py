"""
Configuration for the Google Drive client.

The endpoint table maps a logical endpoint name to a URL template. Templates
may contain ``{fileId}`` and ``{permissionId}`` placeholders which are filled
in by the endpoint resolver.
"""

import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Optional, List, Mapping

DRIVE_SCOPES: List[str] = ["https://www.googleapis.com/auth/drive"]

DRIVE_API_BASE = "https://www.googleapis.com/drive/v3"
DRIVE_UPLOAD_BASE = "https://www.googleapis.com/upload/drive/v3"

DEFAULT_ENDPOINTS: Mapping[str, str] = MappingProxyType({
    # About
    "about": f"{DRIVE_API_BASE}/about",

    # Files
    "files.copy": f"{DRIVE_API_BASE}/files/{{fileId}}/copy",
    "upload.files.create": f"{DRIVE_UPLOAD_BASE}/files",
    "files.delete": f"{DRIVE_API_BASE}/files/{{fileId}}",
    "files.generateIds": f"{DRIVE_API_BASE}/files/generateIds",
    "files.get": f"{DRIVE_API_BASE}/files/{{fileId}}",
    "files.list": f"{DRIVE_API_BASE}/files",
    "files.update": f"{DRIVE_API_BASE}/files/{{fileId}}",

    # Permissions
    "permissions.create": f"{DRIVE_API_BASE}/files/{{fileId}}/permissions",
    "permissions.delete": f"{DRIVE_API_BASE}/files/{{fileId}}/permissions/{{permissionId}}",
    "permissions.get": f"{DRIVE_API_BASE}/files/{{fileId}}/permissions/{{permissionId}}",
    "permissions.list": f"{DRIVE_API_BASE}/files/{{fileId}}/permissions",
})

TOKEN_PATH = "token.json"
CREDENTIALS_PATH = "credentials.json"


@dataclass(frozen=True)
class DriveConfig:
    """
    Immutable settings shared by a client instance.
    Args:
        client_id: OAuth client ID from the Google API Console.
        client_secret: OAuth client secret from the Google API Console.
        scopes: OAuth scopes requested during authorization.
        endpoints: Logical endpoint name to URL template mapping.
        token_path: Where authorized user tokens are cached on disk.
        credentials_path: Location of the downloaded client secrets file.
        timeout: Per-request timeout in seconds, None for the transport default.
    """
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    scopes: List[str] = field(default_factory=lambda: list(DRIVE_SCOPES))
    endpoints: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ENDPOINTS)
    token_path: str = TOKEN_PATH
    credentials_path: str = CREDENTIALS_PATH
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "DriveConfig":
        """
        Build a configuration from environment variables, falling back to defaults.
        Returns:
            A DriveConfig instance.
        """
        timeout = os.getenv("GOOGLE_DRIVE_TIMEOUT")
        return cls(
            client_id=os.getenv("GOOGLE_DRIVE_CLIENT_ID"),
            client_secret=os.getenv("GOOGLE_DRIVE_CLIENT_SECRET"),
            token_path=os.getenv("GOOGLE_TOKEN_PATH", TOKEN_PATH),
            credentials_path=os.getenv("GOOGLE_CREDENTIALS_PATH", CREDENTIALS_PATH),
            timeout=float(timeout) if timeout else None,
        )

    def with_endpoint(self, name: str, url: str) -> "DriveConfig":
        """
        Return a copy of this configuration with one endpoint template replaced or added.
        Args:
            name: Logical endpoint name (e.g. "files.list").
            url: URL template for the endpoint.
        Returns:
            A new DriveConfig instance.
        """
        endpoints = dict(self.endpoints)
        endpoints[name] = url
        return replace(self, endpoints=MappingProxyType(endpoints))

    def with_client(self, client_id: str, client_secret: str) -> "DriveConfig":
        """Return a copy of this configuration with the OAuth client replaced."""
        return replace(self, client_id=client_id, client_secret=client_secret)
