import pytest

from src.google_drive_client.config import DEFAULT_ENDPOINTS, DriveConfig
from src.google_drive_client.exceptions import ConfigurationError
from src.google_drive_client.services.drive.endpoints import EndpointResolver


@pytest.mark.unit
@pytest.mark.drive
class TestEndpointResolver:
    """Test cases for EndpointResolver."""

    @pytest.fixture
    def resolver(self):
        return EndpointResolver(DEFAULT_ENDPOINTS)

    def test_template_without_placeholder_is_unchanged(self, resolver):
        """Test that a template with no placeholder is returned as-is."""
        assert resolver.resolve("about") == "https://www.googleapis.com/drive/v3/about"
        assert resolver.resolve("files.list") == DEFAULT_ENDPOINTS["files.list"]

    def test_file_id_substitution(self, resolver):
        """Test substituting {fileId}."""
        url = resolver.resolve("files.get", file_id="X")
        assert url == "https://www.googleapis.com/drive/v3/files/X"

    def test_copy_endpoint(self, resolver):
        url = resolver.resolve("files.copy", file_id="abc123")
        assert url == "https://www.googleapis.com/drive/v3/files/abc123/copy"

    def test_permission_id_substitutes_both(self, resolver):
        """Test that permission endpoints fill in both placeholders."""
        url = resolver.resolve("permissions.get", file_id="F1", permission_id="P1")
        assert url == "https://www.googleapis.com/drive/v3/files/F1/permissions/P1"

    def test_missing_file_id_raises(self, resolver):
        with pytest.raises(ConfigurationError, match="requires a file_id"):
            resolver.resolve("files.get")

    def test_missing_permission_id_raises(self, resolver):
        with pytest.raises(ConfigurationError, match="requires a permission_id"):
            resolver.resolve("permissions.delete", file_id="F1")

    def test_unknown_endpoint_raises(self, resolver):
        with pytest.raises(ConfigurationError, match="Unknown endpoint: files.nope"):
            resolver.resolve("files.nope")

    def test_reserved_characters_are_percent_encoded(self, resolver):
        """Test that IDs cannot inject extra path segments or query strings."""
        url = resolver.resolve("files.get", file_id="a/b?c=d")
        assert url == "https://www.googleapis.com/drive/v3/files/a%2Fb%3Fc%3Dd"

    def test_plain_drive_ids_are_not_altered(self, resolver):
        file_id = "1A2b3C-_xyz"
        assert resolver.resolve("files.delete", file_id=file_id).endswith("/files/1A2b3C-_xyz")

    def test_overridden_endpoint(self):
        """Test resolving against a configuration with an overridden endpoint."""
        config = DriveConfig().with_endpoint("files.get", "http://localhost:8080/files/{fileId}")
        resolver = EndpointResolver(config.endpoints)
        assert resolver.resolve("files.get", file_id="X") == "http://localhost:8080/files/X"
        # Other endpoints keep their defaults
        assert resolver.resolve("about") == DEFAULT_ENDPOINTS["about"]

    def test_defaults_used_when_no_table_given(self):
        assert EndpointResolver().resolve("about") == DEFAULT_ENDPOINTS["about"]
