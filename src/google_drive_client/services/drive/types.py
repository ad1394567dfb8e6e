from datetime import datetime
from typing import Optional, List
from dataclasses import dataclass, field

from .constants import FOLDER_MIME_TYPE, GOOGLE_DOCS_MIME_TYPE, GOOGLE_SHEETS_MIME_TYPE, \
    GOOGLE_SLIDES_MIME_TYPE


@dataclass
class Permission:
    """
    Represents a permission for a Drive file or folder.
    Args:
        permission_id: The unique identifier for this permission.
        type: The type of permission (user, group, domain, anyone).
        role: The role of the permission (reader, writer, commenter, owner).
        email_address: The email address for user/group permissions.
        domain: The domain name for domain permissions.
        display_name: Display name of the person/group.
        deleted: Whether this permission has been deleted.
    """
    permission_id: Optional[str] = None
    type: Optional[str] = None
    role: Optional[str] = None
    email_address: Optional[str] = None
    domain: Optional[str] = None
    display_name: Optional[str] = None
    deleted: bool = False

    def to_dict(self) -> dict:
        """
        Converts the Permission instance to a dictionary representation.
        Returns:
            A dictionary containing the permission data.
        """
        result = {}
        if self.permission_id:
            result["id"] = self.permission_id
        if self.type:
            result["type"] = self.type
        if self.role:
            result["role"] = self.role
        if self.email_address:
            result["emailAddress"] = self.email_address
        if self.domain:
            result["domain"] = self.domain
        if self.display_name:
            result["displayName"] = self.display_name
        if self.deleted:
            result["deleted"] = self.deleted
        return result

    def __str__(self):
        if self.email_address:
            return f"{self.display_name or self.email_address} ({self.role})"
        elif self.domain:
            return f"Domain: {self.domain} ({self.role})"
        else:
            return f"{self.type} ({self.role})"


@dataclass
class DriveFile:
    """
    Represents a file in Google Drive.
    Args:
        file_id: The unique identifier for the file.
        name: The name of the file.
        mime_type: The MIME type of the file.
        size: The size of the file in bytes (None for folders and Google Workspace files).
        created_time: When the file was created.
        modified_time: When the file was last modified.
        parents: List of parent folder IDs.
        web_view_link: Link to view the file in Drive web interface.
        description: Description of the file.
        starred: Whether the file is starred.
        trashed: Whether the file is in the trash.
        md5_checksum: MD5 checksum of the file content.
    """
    file_id: Optional[str] = None
    name: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    parents: List[str] = field(default_factory=list)
    web_view_link: Optional[str] = None
    description: Optional[str] = None
    starred: bool = False
    trashed: bool = False
    md5_checksum: Optional[str] = None

    def is_folder(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE

    def is_google_doc(self) -> bool:
        """
        Check if this file is a Google Workspace document.
        Returns:
            True if the file is a Google Workspace document.
        """
        google_mime_types = [
            GOOGLE_DOCS_MIME_TYPE,
            GOOGLE_SHEETS_MIME_TYPE,
            GOOGLE_SLIDES_MIME_TYPE,
            "application/vnd.google-apps.drawing",
            "application/vnd.google-apps.form",
        ]
        return self.mime_type in google_mime_types

    def human_readable_size(self) -> str:
        """
        Get human-readable file size.
        Returns:
            Size in human-readable format (e.g., "1.2 MB").
        """
        if self.size is None:
            return "Unknown"

        if self.size == 0:
            return "0 B"

        size = self.size
        units = ["B", "KB", "MB", "GB", "TB"]
        unit_index = 0

        while size >= 1024 and unit_index < len(units) - 1:
            size /= 1024
            unit_index += 1

        return f"{size:.1f} {units[unit_index]}"

    def get_parent_folder_id(self) -> Optional[str]:
        return self.parents[0] if self.parents else None

    def is_in_folder(self, folder_id: str) -> bool:
        return folder_id in self.parents

    def to_dict(self) -> dict:
        """
        Converts the DriveFile instance to a dictionary representation.
        Returns:
            A dictionary containing the file data.
        """
        result = {}
        if self.file_id:
            result["id"] = self.file_id
        if self.name:
            result["name"] = self.name
        if self.mime_type:
            result["mimeType"] = self.mime_type
        if self.size is not None:
            result["size"] = str(self.size)
        if self.created_time:
            result["createdTime"] = self.created_time.isoformat()
        if self.modified_time:
            result["modifiedTime"] = self.modified_time.isoformat()
        if self.parents:
            result["parents"] = self.parents
        if self.web_view_link:
            result["webViewLink"] = self.web_view_link
        if self.description:
            result["description"] = self.description
        if self.md5_checksum:
            result["md5Checksum"] = self.md5_checksum

        result.update({
            "starred": self.starred,
            "trashed": self.trashed,
        })

        return result

    def __str__(self):
        size_str = f"({self.human_readable_size()})"
        return f"{self.name} {size_str}"

    def __repr__(self):
        return f"DriveFile(id={self.file_id!r}, name={self.name!r}, mime_type={self.mime_type!r})"


@dataclass
class DriveFileList:
    """
    One page of a files.list response.
    Args:
        files: Files and folders on this page.
        next_page_token: Token for the next page, None on the last page.
        incomplete_search: Whether the search skipped some corpora.
    """
    files: List[DriveFile] = field(default_factory=list)
    next_page_token: Optional[str] = None
    incomplete_search: bool = False

    @property
    def has_next_page(self) -> bool:
        return self.next_page_token is not None

    def folders(self) -> List[DriveFile]:
        return [f for f in self.files if f.is_folder()]

    def __len__(self):
        return len(self.files)

    def __iter__(self):
        return iter(self.files)
