import mimetypes
import os
from typing import Optional, List, Any, Dict, Union, Callable
import logging

import requests
from google.oauth2.credentials import Credentials

from ...auth.token_store import TokenStore
from ...config import DriveConfig
from ...exceptions import ValidationError
from ...utils.log_sanitizer import sanitize_for_logging
from .constants import DEFAULT_UPLOAD_MIME_TYPE, MATCH_EXACT, VALID_PERMISSION_TYPES, VALID_PERMISSION_ROLES
from .endpoints import EndpointResolver
from .executor import RequestExecutor
from .query_builder import build_filter, DriveQueryBuilder
from .types import DriveFile, DriveFileList, Permission
from . import utils

logger = logging.getLogger(__name__)


class DriveApiService:
    """
    Service layer for Google Drive API operations.

    Each method resolves its endpoint, builds the query string or body from
    the arguments that were given, and performs a single HTTP request.
    Pagination is not followed automatically: pass the returned
    next_page_token back as page_token.
    """

    def __init__(
            self,
            token_store: TokenStore,
            config: Optional[DriveConfig] = None,
            session_factory: Optional[Callable[[Credentials], requests.Session]] = None
    ):
        """
        Initialize Drive service.

        Args:
            token_store: Store holding the credential for this service
            config: Endpoint table and transport settings
            session_factory: Builds the authorized HTTP session for a credential
        """
        self._config = config or DriveConfig()
        self._token_store = token_store
        self._resolver = EndpointResolver(self._config.endpoints)
        self._executor = RequestExecutor(token_store, session_factory, timeout=self._config.timeout)

    def query(self) -> DriveQueryBuilder:
        """
        Create a new DriveQueryBuilder for building file queries with a fluent API.

        Example:
            page = (user.drive.query()
                .in_folder("0XXXXXXXX")
                .name_contains("invoice")
                .execute())
        """
        return DriveQueryBuilder(self)

    # Listing
    def list_files(
            self,
            q: Optional[str] = None,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
            order_by: Optional[str] = None,
            spaces: Optional[str] = None,
            corpus: Optional[str] = None,
            fields: Optional[str] = None,
            include_items_from_all_drives: Optional[bool] = None,
            supports_all_drives: Optional[bool] = None
    ) -> DriveFileList:
        """
        Lists files and folders, giving full access to the files.list endpoint.

        Args:
            q: A query for filtering the file results.
            page_size: The maximum number of files to return per page (1-1000).
            page_token: The nextPageToken of a previous response.
            order_by: Comma-separated sort keys, e.g. "folder,modifiedTime desc,name".
            spaces: Comma-separated spaces to query: "drive", "appDataFolder".
            corpus: The source of files to list: "user" or "domain".
            fields: Partial response selector, e.g. "nextPageToken,files(id,name,parents)".
            include_items_from_all_drives: Include shared drive items.
            supports_all_drives: Whether the caller supports shared drives.

        Returns:
            A DriveFileList with the files on this page and the next page token.
        """
        params = utils.build_list_params(
            q=q, page_size=page_size, page_token=page_token, order_by=order_by,
            spaces=spaces, corpus=corpus, fields=fields,
            include_items_from_all_drives=include_items_from_all_drives,
            supports_all_drives=supports_all_drives,
        )

        sanitized = sanitize_for_logging(query=q, page_size=page_size)
        logger.info("Listing files with query=%s, page_size=%s", sanitized['query'], sanitized['page_size'])

        url = self._resolver.resolve("files.list")
        result = utils.from_google_file_list(self._executor.list(url, params))

        logger.info("Found %d files (more pages: %s)", len(result.files), result.has_next_page)
        return result

    def list_files_in_folder(
            self,
            folder_id: str,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
            order_by: Optional[str] = None,
            spaces: Optional[str] = None,
            corpus: Optional[str] = None
    ) -> DriveFileList:
        """
        Lists the files (not folders) directly inside a folder, skipping trashed items.

        Args:
            folder_id: ID of the Drive folder, or "all" for every folder.
            page_size: The maximum number of files to return per page.
            page_token: The nextPageToken of a previous response.
            order_by: Comma-separated sort keys.
            spaces: Comma-separated spaces to query.
            corpus: The source of files to list.

        Returns:
            A DriveFileList.
        """
        utils.validate_id(folder_id, "folder_id")
        q = build_filter(folder_id, want_folders=False)
        return self.list_files(q, page_size, page_token, order_by, spaces, corpus)

    def list_folders_in_folder(
            self,
            folder_id: str,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
            order_by: Optional[str] = None,
            spaces: Optional[str] = None,
            corpus: Optional[str] = None
    ) -> DriveFileList:
        """
        Lists the folders directly inside a folder, skipping trashed items.

        Args:
            folder_id: ID of the Drive folder, or "all" for every folder.
            page_size: The maximum number of folders to return per page.
            page_token: The nextPageToken of a previous response.
            order_by: Comma-separated sort keys.
            spaces: Comma-separated spaces to query.
            corpus: The source of files to list.

        Returns:
            A DriveFileList containing only folders.
        """
        utils.validate_id(folder_id, "folder_id")
        q = build_filter(folder_id, want_folders=True)
        return self.list_files(q, page_size, page_token, order_by, spaces, corpus)

    def find_file_by_name(
            self,
            name: str,
            folder_id: Optional[str] = None,
            match_mode: str = MATCH_EXACT,
            want_folders: Optional[bool] = False,
            page_size: Optional[int] = None,
            page_token: Optional[str] = None,
            escape_quotes: bool = True
    ) -> DriveFileList:
        """
        Finds files by name.

        Args:
            name: The name (or name fragment) to look for.
            folder_id: Restrict the search to one folder; None or "all" searches everywhere.
            match_mode: "exact", "contains" or "not_equal".
            want_folders: False for files, True for folders, None for both.
            page_size: The maximum number of results per page.
            page_token: The nextPageToken of a previous response.
            escape_quotes: Escape quotes in name and folder_id. False keeps the
                legacy verbatim interpolation.

        Returns:
            A DriveFileList with the matches.
        """
        if name is None:
            raise ValidationError("name is required")
        q = build_filter(folder_id, name, match_mode, want_folders, escape_quotes=escape_quotes)
        return self.list_files(q, page_size=page_size, page_token=page_token)

    # File operations
    def get_file_metadata(self, file_id: str, fields: Optional[str] = None) -> DriveFile:
        """
        Retrieves the metadata of a file.

        Args:
            file_id: The ID of the file.
            fields: Partial response selector, e.g. "id,name,parents,size".

        Returns:
            A DriveFile.
        """
        utils.validate_id(file_id, "file_id")
        logger.info("Retrieving metadata for file: %s", sanitize_for_logging(file_id=file_id)['file_id'])

        url = self._resolver.resolve("files.get", file_id=file_id)
        return utils.from_google_file(self._executor.get_json(url, utils.build_params(fields=fields)))

    def copy_file(self, file_id: str, name: Optional[str] = None, folder_id: Optional[str] = None) -> DriveFile:
        """
        Copies a file.

        Args:
            file_id: The ID of the file to copy.
            name: Name of the copy. Drive uses "Copy of <name>" when omitted.
            folder_id: Folder that receives the copy. Defaults to the original's parent.

        Returns:
            A DriveFile describing the new copy.
        """
        utils.validate_id(file_id, "file_id")
        sanitized = sanitize_for_logging(file_id=file_id, folder_id=folder_id)
        logger.info("Copying file %s to folder %s", sanitized['file_id'], sanitized['folder_id'])

        url = self._resolver.resolve("files.copy", file_id=file_id)
        result = self._executor.copy(url, utils.build_copy_body(name, folder_id))

        logger.info("File copied successfully")
        return utils.from_google_file(result)

    def delete_file(self, file_id: str) -> bool:
        """
        Permanently deletes a file, skipping the trash.

        Args:
            file_id: The ID of the file to delete.

        Returns:
            True if the operation was successful.
        """
        utils.validate_id(file_id, "file_id")
        logger.info("Deleting file: %s", sanitize_for_logging(file_id=file_id)['file_id'])

        url = self._resolver.resolve("files.delete", file_id=file_id)
        self._executor.delete(url)

        logger.info("File deleted successfully")
        return True

    def get_file(self, file_id: str, acknowledge_abuse: bool = False, raise_for_status: bool = True) -> bytes:
        """
        Downloads the content of a file.

        Args:
            file_id: The ID of the file.
            acknowledge_abuse: Download a file flagged as abusive anyway.
            raise_for_status: Raise DriveApiError on an error status. With False
                the raw body is returned whatever the status.

        Returns:
            The file content as bytes.
        """
        utils.validate_id(file_id, "file_id")
        logger.info("Downloading file: %s", sanitize_for_logging(file_id=file_id)['file_id'])

        url = self._resolver.resolve("files.get", file_id=file_id)
        params = {"alt": "media", "acknowledgeAbuse": acknowledge_abuse}
        content = self._executor.get(url, params, raise_for_status=raise_for_status)

        logger.info("Downloaded %d bytes", len(content))
        return content

    def download_file(self, file_id: str, dest_path: str, acknowledge_abuse: bool = False) -> str:
        """
        Downloads a file and writes it to dest_path.

        Returns:
            The path written to.
        """
        content = self.get_file(file_id, acknowledge_abuse=acknowledge_abuse)
        directory = os.path.dirname(dest_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(dest_path, "wb") as fh:
            fh.write(content)
        return dest_path

    def upload_file(self, data: bytes, mime_type: Optional[str] = None) -> DriveFile:
        """
        Uploads file content as a new file (simple media upload).

        The new file is created in My Drive with a default name; use
        update_file_metadata and move_file to name and place it.

        Args:
            data: The file content.
            mime_type: Content type of data, defaults to application/octet-stream.

        Returns:
            A DriveFile describing the created file.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ValidationError("data must be bytes")
        mime_type = mime_type or DEFAULT_UPLOAD_MIME_TYPE
        logger.info("Uploading %d bytes as %s", len(data), mime_type)

        url = self._resolver.resolve("upload.files.create")
        result = self._executor.upload(url, bytes(data), {"uploadType": "media"}, mime_type)

        logger.info("File uploaded successfully")
        return utils.from_google_file(result)

    def upload_file_from_path(self, path: str, mime_type: Optional[str] = None) -> DriveFile:
        """
        Uploads a local file, guessing its content type from the extension.

        Args:
            path: Local file path.
            mime_type: Content type override.

        Returns:
            A DriveFile describing the created file.
        """
        if not os.path.isfile(path):
            raise ValidationError(f"File not found: {path}")
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as fh:
            data = fh.read()
        return self.upload_file(data, mime_type)

    def move_file(
            self,
            file_id: str,
            add_parents: Optional[Union[str, List[str]]] = None,
            remove_parents: Optional[Union[str, List[str]]] = None
    ) -> DriveFile:
        """
        Moves a file by adding and/or removing parent folders.

        Args:
            file_id: The ID of the file to move.
            add_parents: Folder ID(s) to add as parents.
            remove_parents: Folder ID(s) to remove from the parents.

        Returns:
            The updated DriveFile.
        """
        utils.validate_id(file_id, "file_id")
        params = utils.build_move_params(add_parents, remove_parents)
        if not params:
            raise ValidationError("At least one of add_parents or remove_parents is required")

        logger.info("Moving file: %s", sanitize_for_logging(file_id=file_id)['file_id'])
        url = self._resolver.resolve("files.update", file_id=file_id)
        result = self._executor.move(url, params)

        logger.info("File moved successfully")
        return utils.from_google_file(result)

    def update_file_metadata(
            self,
            file_id: str,
            name: Optional[str] = None,
            description: Optional[str] = None,
            starred: Optional[bool] = None,
            trashed: Optional[bool] = None,
            mime_type: Optional[str] = None
    ) -> DriveFile:
        """
        Updates the metadata of a file. Only the fields that are given are sent.

        Args:
            file_id: The ID of the file.
            name: New name.
            description: New description.
            starred: Star or unstar the file.
            trashed: Move the file to or out of the trash.
            mime_type: New MIME type.

        Returns:
            The updated DriveFile.
        """
        utils.validate_id(file_id, "file_id")
        body = utils.build_metadata_body(name, description, starred, trashed, mime_type)
        if not body:
            raise ValidationError("No metadata fields to update")

        logger.info("Updating fields %s of file %s", sorted(body), sanitize_for_logging(file_id=file_id)['file_id'])
        url = self._resolver.resolve("files.update", file_id=file_id)
        result = self._executor.update_metadata(url, body)

        logger.info("File metadata updated successfully")
        return utils.from_google_file(result)

    def generate_ids(self, count: int = 10, space: Optional[str] = None) -> List[str]:
        """
        Generates file IDs that can be used in later create or copy requests.

        Args:
            count: Number of IDs to generate (1-1000).
            space: "drive" or "appDataFolder".

        Returns:
            The generated IDs.
        """
        utils.validate_page_size(count)
        url = self._resolver.resolve("files.generateIds")
        result = self._executor.get_json(url, utils.build_params(count=count, space=space))
        return result.get("ids", [])

    # About
    def get_about(self, fields: str = "user,storageQuota") -> Dict[str, Any]:
        """
        Gets information about the user and their Drive.

        Args:
            fields: Fields to return. The about endpoint requires a selector.

        Returns:
            The about resource as a dictionary.
        """
        url = self._resolver.resolve("about")
        return self._executor.get_json(url, {"fields": fields})

    # Permissions
    def list_permissions(self, file_id: str) -> List[Permission]:
        """
        Lists the permissions of a file or folder.

        Args:
            file_id: The ID of the file or folder.

        Returns:
            A list of Permission objects.
        """
        utils.validate_id(file_id, "file_id")
        logger.info("Listing permissions of file: %s", sanitize_for_logging(file_id=file_id)['file_id'])

        url = self._resolver.resolve("permissions.list", file_id=file_id)
        result = self._executor.get_json(url)
        return [utils.from_google_permission(p) for p in result.get("permissions", [])]

    def get_permission(self, file_id: str, permission_id: str) -> Permission:
        """
        Gets a permission by ID.

        Returns:
            A Permission.
        """
        utils.validate_id(file_id, "file_id")
        utils.validate_id(permission_id, "permission_id")

        url = self._resolver.resolve("permissions.get", file_id=file_id, permission_id=permission_id)
        return utils.from_google_permission(self._executor.get_json(url))

    def create_permission(
            self,
            file_id: str,
            role: str,
            type: str,
            email_address: Optional[str] = None,
            domain: Optional[str] = None,
            send_notification_email: Optional[bool] = None
    ) -> Permission:
        """
        Shares a file or folder.

        Args:
            file_id: The ID of the file or folder.
            role: "reader", "commenter", "writer", ...
            type: "user", "group", "domain" or "anyone".
            email_address: Grantee address for user and group permissions.
            domain: Grantee domain for domain permissions.
            send_notification_email: Whether Drive emails the grantee.

        Returns:
            The created Permission.
        """
        utils.validate_id(file_id, "file_id")
        if role not in VALID_PERMISSION_ROLES:
            raise ValidationError(f"Invalid role: {role}. Must be one of: {', '.join(VALID_PERMISSION_ROLES)}")
        if type not in VALID_PERMISSION_TYPES:
            raise ValidationError(f"Invalid type: {type}. Must be one of: {', '.join(VALID_PERMISSION_TYPES)}")
        if type in ("user", "group") and not email_address:
            raise ValidationError(f"email_address is required for {type} permissions")
        if type == "domain" and not domain:
            raise ValidationError("domain is required for domain permissions")

        sanitized = sanitize_for_logging(file_id=file_id, email_address=email_address)
        logger.info("Granting %s to %s on file %s", role, sanitized['email_address'] or type, sanitized['file_id'])

        url = self._resolver.resolve("permissions.create", file_id=file_id)
        body = utils.build_params(role=role, type=type, emailAddress=email_address, domain=domain)
        params = utils.build_params(sendNotificationEmail=send_notification_email)
        result = self._executor.post_json(url, body, params=params or None)
        return utils.from_google_permission(result)

    def delete_permission(self, file_id: str, permission_id: str) -> bool:
        """
        Removes a permission.

        Returns:
            True if the operation was successful.
        """
        utils.validate_id(file_id, "file_id")
        utils.validate_id(permission_id, "permission_id")

        url = self._resolver.resolve("permissions.delete", file_id=file_id, permission_id=permission_id)
        self._executor.delete(url)
        logger.info("Permission deleted successfully")
        return True
