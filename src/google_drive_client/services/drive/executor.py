"""
HTTP execution for Drive REST calls.

Every public method issues exactly one request through a google-auth
``AuthorizedSession`` bound to the credential held by the token store, and
applies the same status check: a non-2xx answer raises ``DriveApiError``
carrying the server's error message verbatim. Nothing is retried.
"""

from typing import Optional, Dict, Any, Callable
import logging

import requests
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials

from ...auth.token_store import TokenStore
from ...exceptions import DriveApiError, ResponseDecodeError, TransportError, InvalidCredentialsError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def _encode_query_value(value: Any) -> Any:
    # Drive expects lowercase booleans in query strings.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def error_message_from_response(response: requests.Response) -> str:
    """
    Extract the server-provided error message from a failed response.

    Drive errors look like {"error": {"code": 404, "message": "...", "errors": [...]}};
    OAuth errors look like {"error": "invalid_grant", "error_description": "..."}.
    Anything else falls back to "HTTP <status>: <reason>".
    """
    fallback = f"HTTP {response.status_code}: {response.reason}"
    try:
        body = response.json()
    except ValueError:
        return fallback

    if not isinstance(body, dict):
        return fallback

    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str):
        return body.get("error_description") or error
    return fallback


class RequestExecutor:
    """
    Performs Drive HTTP calls with the credential from a TokenStore.
    """

    def __init__(
            self,
            token_store: TokenStore,
            session_factory: Optional[Callable[[Credentials], requests.Session]] = None,
            timeout: Optional[float] = None
    ):
        """
        Initialize the executor.

        Args:
            token_store: Store holding the credential used for every request.
            session_factory: Builds an authorized HTTP session for a credential,
                defaults to google-auth's AuthorizedSession.
            timeout: Per-request timeout in seconds, None for the transport default.
        """
        self._token_store = token_store
        self._session_factory = session_factory or AuthorizedSession
        self._timeout = timeout
        self._session: Optional[requests.Session] = None
        self._session_credentials: Optional[Credentials] = None

    def _get_session(self) -> requests.Session:
        # Raises UnauthenticatedError before any network activity.
        credentials = self._token_store.get_token()
        if self._session is None or self._session_credentials is not credentials:
            self._session = self._session_factory(credentials)
            self._session_credentials = credentials
        return self._session

    def _send(
            self,
            method: str,
            url: str,
            params: Optional[Dict[str, Any]] = None,
            json_body: Optional[Dict[str, Any]] = None,
            data: Optional[bytes] = None,
            headers: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        session = self._get_session()

        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = {k: _encode_query_value(v) for k, v in params.items()}
        if json_body is not None:
            kwargs["json"] = json_body
        if data is not None:
            kwargs["data"] = data
        if headers:
            kwargs["headers"] = headers
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        logger.debug("%s %s params=%s", method, url, sorted((params or {}).keys()))
        try:
            response = session.request(method, url, **kwargs)
        except google_auth_exceptions.RefreshError as e:
            raise InvalidCredentialsError(f"Failed to refresh credentials: {e}") from e
        except (requests.RequestException, google_auth_exceptions.TransportError) as e:
            raise TransportError(f"{method} request failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if 200 <= response.status_code < 300:
            return

        message = error_message_from_response(response)
        errors = []
        try:
            body = response.json()
            if isinstance(body, dict) and isinstance(body.get("error"), dict):
                errors = body["error"].get("errors", [])
        except ValueError:
            pass

        logger.error("Drive API returned %s: %s", response.status_code, message)
        raise DriveApiError(message, status_code=response.status_code, reason=response.reason, errors=errors)

    @staticmethod
    def _decode_json(response: requests.Response, allow_empty: bool = False) -> Optional[Dict[str, Any]]:
        if not response.content:
            if allow_empty:
                return None
            raise ResponseDecodeError(
                "Expected a JSON response but the body was empty",
                status_code=response.status_code,
                body="",
            )
        try:
            return response.json()
        except ValueError as e:
            raise ResponseDecodeError(
                f"Expected a JSON response but could not decode it: {e}",
                status_code=response.status_code,
                body=response.text[:200],
            ) from e

    def _json_call(self, method: str, url: str, allow_empty: bool = False, **kwargs) -> Optional[Dict[str, Any]]:
        response = self._send(method, url, **kwargs)
        self._raise_for_status(response)
        return self._decode_json(response, allow_empty=allow_empty)

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a JSON resource."""
        return self._json_call("GET", url, params=params)

    def post_json(self, url: str, body: Optional[Dict[str, Any]] = None,
                  params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST a JSON body and decode the JSON answer."""
        return self._json_call("POST", url, params=params, json_body=body or {})

    def list(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        GET a files listing.
        Returns:
            The decoded body with "files" and, when more pages exist, "nextPageToken".
        """
        return self.get_json(url, params)

    def copy(self, url: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a copy request; returns the new file's metadata."""
        return self.post_json(url, body)

    def delete(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """DELETE a resource. Drive answers 204 with an empty body, which yields None."""
        return self._json_call("DELETE", url, allow_empty=True, params=params)

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, raise_for_status: bool = True) -> bytes:
        """
        GET raw file content.

        Args:
            url: Resolved files.get URL.
            params: Query parameters, defaults to alt=media, acknowledgeAbuse=false.
            raise_for_status: When False, the body is returned even for an error
                status (the error JSON comes back as bytes).
        Returns:
            The response body as bytes.
        """
        if params is None:
            params = {"alt": "media", "acknowledgeAbuse": False}
        response = self._send("GET", url, params=params)
        if raise_for_status:
            self._raise_for_status(response)
        return response.content

    def upload(self, url: str, data: bytes, params: Optional[Dict[str, Any]] = None,
               mime_type: Optional[str] = None) -> Dict[str, Any]:
        """
        POST raw bytes as a simple media upload.
        Returns:
            The created file's metadata.
        """
        if params is None:
            params = {"uploadType": "media"}
        headers = {"Content-Type": mime_type} if mime_type else None
        return self._json_call("POST", url, params=params, data=data, headers=headers)

    def move(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """PATCH with addParents/removeParents query parameters and no body."""
        return self._json_call("PATCH", url, params=params)

    def update_metadata(self, url: str, body: Dict[str, Any],
                        params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """PATCH a JSON metadata body."""
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        return self._json_call("PATCH", url, params=params, json_body=body, headers=headers)
