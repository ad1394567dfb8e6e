import pytest
from unittest.mock import Mock, patch

from src.google_drive_client.config import DriveConfig
from src.google_drive_client.exceptions import InvalidCredentialsError, UnauthenticatedError
from src.google_drive_client.services.drive.api_service import DriveApiService
from src.google_drive_client.user_client import UserClient


@pytest.mark.unit
class TestUserClient:
    """Test cases for the user-centric client."""

    def test_client_with_credentials(self, mock_credentials):
        user = UserClient(mock_credentials)
        assert user.is_authenticated is True
        assert isinstance(user.drive, DriveApiService)

    def test_client_without_credentials(self, session_factory, mock_session):
        user = UserClient(session_factory=session_factory)
        assert user.is_authenticated is False
        with pytest.raises(UnauthenticatedError):
            user.drive.list_files()
        mock_session.request.assert_not_called()

    def test_set_credentials_after_construction(self, mock_credentials, session_factory, mock_session,
                                                response_factory):
        mock_session.request.return_value = response_factory(200, {"files": []})
        user = UserClient(session_factory=session_factory)

        user.set_credentials(mock_credentials)
        user.drive.list_files()

        session_factory.assert_called_once_with(mock_credentials)

    def test_users_do_not_share_credentials(self, mock_credentials):
        user_1 = UserClient(mock_credentials)
        user_2 = UserClient()
        assert user_1.token_store is not user_2.token_store
        assert not user_2.is_authenticated

    @patch('src.google_drive_client.user_client.authorize')
    def test_authorize(self, mock_authorize, mock_credentials):
        mock_authorize.return_value = mock_credentials
        config = DriveConfig(client_id="cfg_id", client_secret="cfg_secret")

        user = UserClient.authorize(config=config)

        mock_authorize.assert_called_once_with("cfg_id", "cfg_secret", config.scopes, port=0)
        assert user.token_store.get_token() is mock_credentials

    def test_authorize_without_client(self):
        with pytest.raises(InvalidCredentialsError, match="No OAuth client configured"):
            UserClient.authorize(config=DriveConfig())

    @patch('src.google_drive_client.user_client.get_credentials_from_file')
    def test_from_file(self, mock_from_file, mock_credentials):
        mock_from_file.return_value = mock_credentials
        config = DriveConfig(token_path="my_token.json", credentials_path="my_creds.json")

        user = UserClient.from_file(config=config)

        mock_from_file.assert_called_once_with("my_creds.json", "my_token.json", config.scopes)
        assert user.config is config

    @patch('src.google_drive_client.user_client.get_credentials_from_info')
    def test_from_credentials_info(self, mock_from_info, mock_credentials):
        mock_from_info.return_value = (mock_credentials, {"token": "t"})
        user = UserClient.from_credentials_info({"installed": {}}, {"token": "t"})
        assert user.token_store.get_token() is mock_credentials
