import json
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

import requests
from google.oauth2.credentials import Credentials

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def make_response(status_code=200, json_body=None, content=None, reason="OK"):
    """Build a real requests.Response with the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json; charset=UTF-8"
    else:
        response._content = content if content is not None else b""
    return response


@pytest.fixture
def response_factory():
    """Factory fixture for fake HTTP responses."""
    return make_response


@pytest.fixture
def mock_credentials():
    """Create mock OAuth2 credentials."""
    creds = Mock(spec=Credentials)
    creds.valid = True
    creds.expired = False
    creds.token = "mock_token"
    creds.refresh_token = "mock_refresh_token"
    return creds


@pytest.fixture
def mock_session():
    """Mock authorized HTTP session; tests set mock_session.request.return_value."""
    session = Mock(spec=requests.Session)
    session.request.return_value = make_response(200, {})
    return session


@pytest.fixture
def session_factory(mock_session):
    """Session factory that always hands out mock_session."""
    return Mock(return_value=mock_session)


@pytest.fixture
def token_store(mock_credentials):
    from src.google_drive_client.auth.token_store import TokenStore
    return TokenStore(mock_credentials)


@pytest.fixture
def drive_service(token_store, session_factory):
    """DriveApiService wired to the mock session."""
    from src.google_drive_client.services.drive.api_service import DriveApiService
    return DriveApiService(token_store, session_factory=session_factory)


@pytest.fixture
def sample_drive_file():
    """Sample Drive API file resource."""
    return {
        "kind": "drive#file",
        "id": "file_123",
        "name": "report.pdf",
        "mimeType": "application/pdf",
        "size": "2048",
        "createdTime": "2025-01-15T09:00:00.000Z",
        "modifiedTime": "2025-01-16T10:30:00.000Z",
        "parents": ["folder_abc"],
        "webViewLink": "https://drive.google.com/file/d/file_123/view",
        "starred": False,
        "trashed": False,
        "md5Checksum": "d41d8cd98f00b204e9800998ecf8427e"
    }


@pytest.fixture
def sample_drive_folder():
    """Sample Drive API folder resource."""
    return {
        "kind": "drive#file",
        "id": "folder_abc",
        "name": "Reports",
        "mimeType": "application/vnd.google-apps.folder",
        "parents": ["root_folder"]
    }


@pytest.fixture
def sample_file_list(sample_drive_file, sample_drive_folder):
    """Sample files.list response with a next page."""
    return {
        "kind": "drive#fileList",
        "nextPageToken": "page_2_token",
        "incompleteSearch": False,
        "files": [sample_drive_file, sample_drive_folder]
    }


@pytest.fixture
def not_found_error():
    """Drive API error body for a missing file."""
    return {
        "error": {
            "code": 404,
            "message": "Not Found",
            "errors": [{"domain": "global", "reason": "notFound", "message": "Not Found"}]
        }
    }
