from typing import Optional, Mapping
from urllib.parse import quote
import logging

from ...config import DEFAULT_ENDPOINTS
from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)

FILE_ID_PLACEHOLDER = "{fileId}"
PERMISSION_ID_PLACEHOLDER = "{permissionId}"


def _encode_segment(value: str) -> str:
    # A single path segment: "/" and other reserved characters are escaped too.
    return quote(str(value), safe="")


class EndpointResolver:
    """
    Turns logical endpoint names into concrete Drive URLs.
    """

    def __init__(self, endpoints: Optional[Mapping[str, str]] = None):
        """
        Initialize the resolver.

        Args:
            endpoints: Logical endpoint name to URL template mapping.
        """
        self._endpoints = endpoints if endpoints is not None else DEFAULT_ENDPOINTS

    def template(self, name: str) -> str:
        """
        Look up the URL template for an endpoint.
        Args:
            name: Logical endpoint name.
        Returns:
            The URL template.
        Raises:
            ConfigurationError: If the endpoint is not configured.
        """
        try:
            return self._endpoints[name]
        except KeyError:
            raise ConfigurationError(f"Unknown endpoint: {name}")

    def resolve(self, name: str, file_id: Optional[str] = None, permission_id: Optional[str] = None) -> str:
        """
        Build the URL for an endpoint, filling in its path placeholders.

        IDs are percent-encoded as single path segments.

        Args:
            name: Logical endpoint name (e.g. "files.get").
            file_id: Value for the {fileId} placeholder.
            permission_id: Value for the {permissionId} placeholder.
        Returns:
            The resolved URL.
        Raises:
            ConfigurationError: If the endpoint is unknown or a required placeholder value is missing.
        """
        url = self.template(name)

        if "{" not in url:
            return url

        if PERMISSION_ID_PLACEHOLDER in url:
            if not permission_id:
                raise ConfigurationError(f"Endpoint {name} requires a permission_id")
            url = url.replace(PERMISSION_ID_PLACEHOLDER, _encode_segment(permission_id))

        if FILE_ID_PLACEHOLDER in url:
            if not file_id:
                raise ConfigurationError(f"Endpoint {name} requires a file_id")
            url = url.replace(FILE_ID_PLACEHOLDER, _encode_segment(file_id))

        logger.debug("Resolved endpoint %s to %s", name, url)
        return url
