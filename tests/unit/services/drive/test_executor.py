import pytest
from unittest.mock import Mock, patch

import requests
from google.auth import exceptions as google_auth_exceptions

from src.google_drive_client.auth.token_store import TokenStore
from src.google_drive_client.exceptions import (
    DriveApiError, GoogleDriveClientError, InvalidCredentialsError, ResponseDecodeError,
    TransportError, UnauthenticatedError
)
from src.google_drive_client.services.drive.executor import RequestExecutor, error_message_from_response

URL = "https://www.googleapis.com/drive/v3/files"


@pytest.mark.unit
@pytest.mark.drive
class TestRequestExecutor:
    """Test cases for RequestExecutor."""

    @pytest.fixture(autouse=True)
    def _responses(self, response_factory):
        self.response = response_factory

    @pytest.fixture
    def executor(self, token_store, session_factory):
        return RequestExecutor(token_store, session_factory)

    def test_list_sends_get_with_params(self, executor, mock_session, sample_file_list):
        mock_session.request.return_value = self.response(200, sample_file_list)

        result = executor.list(URL, {"q": "trashed = false", "pageSize": 10})

        assert result == sample_file_list
        mock_session.request.assert_called_once_with(
            "GET", URL, params={"q": "trashed = false", "pageSize": 10}
        )

    def test_boolean_params_are_lowercase(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, content=b"data")
        executor.get(URL + "/x")
        _, kwargs = mock_session.request.call_args
        assert kwargs["params"] == {"alt": "media", "acknowledgeAbuse": "false"}

    def test_copy_posts_json(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, {"id": "new"})
        assert executor.copy(URL + "/x/copy", {"name": "n"}) == {"id": "new"}
        mock_session.request.assert_called_once_with("POST", URL + "/x/copy", json={"name": "n"})

    def test_delete_empty_body_returns_none(self, executor, mock_session):
        mock_session.request.return_value = self.response(204, reason="No Content")
        assert executor.delete(URL + "/x") is None
        mock_session.request.assert_called_once_with("DELETE", URL + "/x")

    def test_upload_sends_bytes_with_content_type(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, {"id": "up"})
        result = executor.upload(URL, b"hello", mime_type="text/plain")
        assert result == {"id": "up"}
        mock_session.request.assert_called_once_with(
            "POST", URL, params={"uploadType": "media"}, data=b"hello",
            headers={"Content-Type": "text/plain"}
        )

    def test_move_sends_patch_without_body(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, {"id": "x"})
        executor.move(URL + "/x", {"addParents": "a", "removeParents": "b"})
        mock_session.request.assert_called_once_with(
            "PATCH", URL + "/x", params={"addParents": "a", "removeParents": "b"}
        )

    def test_update_metadata_sends_json_body(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, {"id": "x", "starred": True})
        executor.update_metadata(URL + "/x", {"starred": True})
        mock_session.request.assert_called_once_with(
            "PATCH", URL + "/x", json={"starred": True},
            headers={"Content-Type": "application/json"}
        )

    @pytest.mark.parametrize("call", [
        lambda e: e.list(URL, {}),
        lambda e: e.copy(URL, {}),
        lambda e: e.delete(URL),
        lambda e: e.upload(URL, b"x"),
        lambda e: e.move(URL, {"addParents": "a"}),
        lambda e: e.update_metadata(URL, {"starred": True}),
        lambda e: e.get(URL),
    ])
    def test_error_status_raises_server_message(self, executor, mock_session, not_found_error, call):
        mock_session.request.return_value = self.response(404, not_found_error, reason="Not Found")

        with pytest.raises(DriveApiError) as exc_info:
            call(executor)

        assert str(exc_info.value) == "Not Found"
        assert exc_info.value.status_code == 404
        assert exc_info.value.errors[0]["reason"] == "notFound"

    def test_download_without_status_check_returns_error_body(self, executor, mock_session):
        mock_session.request.return_value = self.response(403, content=b'{"error": {"message": "no"}}')
        assert executor.get(URL, raise_for_status=False) == b'{"error": {"message": "no"}}'

    def test_non_json_error_body_gets_generic_message(self, executor, mock_session):
        mock_session.request.return_value = self.response(502, content=b"<html>bad gateway</html>",
                                                          reason="Bad Gateway")
        with pytest.raises(DriveApiError, match="HTTP 502: Bad Gateway"):
            executor.list(URL)

    def test_malformed_success_body_raises_decode_error(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, content=b"not json")
        with pytest.raises(ResponseDecodeError) as exc_info:
            executor.list(URL)
        assert not isinstance(exc_info.value, DriveApiError)
        assert exc_info.value.status_code == 200

    def test_transport_failure(self, executor, mock_session):
        mock_session.request.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(TransportError, match="connection refused"):
            executor.list(URL)

    @pytest.mark.parametrize("call", [
        lambda e: e.list(URL),
        lambda e: e.copy(URL + "/x/copy", {"name": "n"}),
        lambda e: e.get_json(URL + "/x"),
        lambda e: e.upload(URL, b"data"),
        lambda e: e.move(URL + "/x", {"addParents": "p"}),
        lambda e: e.update_metadata(URL + "/x", {"name": "n"}),
    ])
    def test_empty_success_body_raises_decode_error(self, executor, mock_session, call):
        mock_session.request.return_value = self.response(200, content=b"")
        with pytest.raises(ResponseDecodeError, match="body was empty") as exc_info:
            call(executor)
        assert exc_info.value.status_code == 200

    def test_delete_empty_200_body_returns_none(self, executor, mock_session):
        mock_session.request.return_value = self.response(200, content=b"")
        assert executor.delete(URL + "/x") is None

    def test_refresh_failure_raises_invalid_credentials(self, executor, mock_session):
        mock_session.request.side_effect = google_auth_exceptions.RefreshError("invalid_grant: Token has been revoked")
        with pytest.raises(InvalidCredentialsError, match="Token has been revoked") as exc_info:
            executor.list(URL)
        assert isinstance(exc_info.value, GoogleDriveClientError)
        assert isinstance(exc_info.value.__cause__, google_auth_exceptions.RefreshError)

    def test_google_auth_transport_failure(self, executor, mock_session):
        mock_session.request.side_effect = google_auth_exceptions.TransportError("token endpoint unreachable")
        with pytest.raises(TransportError, match="token endpoint unreachable"):
            executor.list(URL)

    def test_no_token_fails_before_network(self, session_factory, mock_session):
        executor = RequestExecutor(TokenStore(), session_factory)

        with pytest.raises(UnauthenticatedError):
            executor.list(URL)

        session_factory.assert_not_called()
        mock_session.request.assert_not_called()

    def test_session_reused_for_same_credential(self, executor, session_factory, mock_session):
        mock_session.request.return_value = self.response(200, {"files": []})
        executor.list(URL)
        executor.list(URL)
        session_factory.assert_called_once()

    def test_session_rebuilt_after_new_credential(self, token_store, session_factory, mock_session):
        executor = RequestExecutor(token_store, session_factory)
        mock_session.request.return_value = self.response(200, {"files": []})
        executor.list(URL)

        new_credentials = Mock()
        token_store.set_token(new_credentials)
        executor.list(URL)

        assert session_factory.call_count == 2
        session_factory.assert_called_with(new_credentials)

    def test_timeout_forwarded(self, token_store, session_factory, mock_session):
        executor = RequestExecutor(token_store, session_factory, timeout=5.0)
        mock_session.request.return_value = self.response(200, {})
        executor.list(URL)
        assert mock_session.request.call_args.kwargs["timeout"] == 5.0

    @patch('src.google_drive_client.services.drive.executor.AuthorizedSession')
    def test_default_session_is_authorized_session(self, mock_authorized_session, token_store, mock_credentials):
        mock_authorized_session.return_value.request.return_value = self.response(200, {"files": []})
        executor = RequestExecutor(token_store)
        executor.list(URL)
        mock_authorized_session.assert_called_once_with(mock_credentials)


@pytest.mark.unit
@pytest.mark.drive
class TestErrorMessage:
    """Test cases for error_message_from_response."""

    @pytest.fixture(autouse=True)
    def _responses(self, response_factory):
        self.response = response_factory

    def test_drive_error(self, not_found_error):
        assert error_message_from_response(self.response(404, not_found_error)) == "Not Found"

    def test_oauth_error(self):
        body = {"error": "invalid_grant", "error_description": "Token has been expired or revoked."}
        assert error_message_from_response(self.response(400, body)) == "Token has been expired or revoked."

    def test_unexpected_json(self):
        response = self.response(500, ["oops"], reason="Internal Server Error")
        assert error_message_from_response(response) == "HTTP 500: Internal Server Error"
