from typing import Optional, Dict, Any, List, Union
import logging

from .types import DriveFile, DriveFileList, Permission
from .constants import MIN_PAGE_SIZE, MAX_PAGE_SIZE
from ...exceptions import ValidationError
from ...utils.datetime import parse_rfc3339

logger = logging.getLogger(__name__)


def build_params(**kwargs) -> Dict[str, Any]:
    """
    Build a query-string or JSON body mapping from keyword arguments.

    Arguments that are None are left out entirely. False, 0 and empty
    strings are real values and are kept.

    Returns:
        Mapping of the present arguments.
    """
    return {key: value for key, value in kwargs.items() if value is not None}


def join_ids(ids: Optional[Union[str, List[str]]]) -> Optional[str]:
    """Join one or more IDs into the comma-separated form Drive expects."""
    if ids is None:
        return None
    if isinstance(ids, str):
        return ids
    return ",".join(ids)


def validate_page_size(page_size: Optional[int]) -> None:
    """Validates the page size of a listing request."""
    if page_size is not None and (page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE):
        raise ValidationError(f"page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")


def validate_id(value: Optional[str], field_name: str) -> None:
    """Validates that an ID argument is a non-empty string."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a non-empty string")


def from_google_file(file_data: Dict[str, Any]) -> DriveFile:
    """
    Create a DriveFile from a Drive API file resource.

    Args:
        file_data: File resource as returned by the API.

    Returns:
        DriveFile instance.
    """
    size = file_data.get("size")
    try:
        size = int(size) if size is not None else None
    except (TypeError, ValueError):
        logger.warning("Invalid file size: %s", size)
        size = None

    return DriveFile(
        file_id=file_data.get("id"),
        name=file_data.get("name"),
        mime_type=file_data.get("mimeType"),
        size=size,
        created_time=parse_rfc3339(file_data.get("createdTime")),
        modified_time=parse_rfc3339(file_data.get("modifiedTime")),
        parents=list(file_data.get("parents", [])),
        web_view_link=file_data.get("webViewLink"),
        description=file_data.get("description"),
        starred=bool(file_data.get("starred", False)),
        trashed=bool(file_data.get("trashed", False)),
        md5_checksum=file_data.get("md5Checksum"),
    )


def from_google_file_list(list_data: Dict[str, Any]) -> DriveFileList:
    """Create a DriveFileList from a files.list response."""
    return DriveFileList(
        files=[from_google_file(f) for f in list_data.get("files", [])],
        next_page_token=list_data.get("nextPageToken"),
        incomplete_search=bool(list_data.get("incompleteSearch", False)),
    )


def from_google_permission(permission_data: Dict[str, Any]) -> Permission:
    """Create a Permission from a Drive API permission resource."""
    return Permission(
        permission_id=permission_data.get("id"),
        type=permission_data.get("type"),
        role=permission_data.get("role"),
        email_address=permission_data.get("emailAddress"),
        domain=permission_data.get("domain"),
        display_name=permission_data.get("displayName"),
        deleted=bool(permission_data.get("deleted", False)),
    )


def build_list_params(
        q: Optional[str] = None,
        page_size: Optional[int] = None,
        page_token: Optional[str] = None,
        order_by: Optional[str] = None,
        spaces: Optional[str] = None,
        corpus: Optional[str] = None,
        fields: Optional[str] = None,
        include_items_from_all_drives: Optional[bool] = None,
        supports_all_drives: Optional[bool] = None
) -> Dict[str, Any]:
    """Query parameters for files.list, leaving out every argument that is None."""
    validate_page_size(page_size)
    return build_params(
        q=q,
        pageSize=page_size,
        pageToken=page_token,
        orderBy=order_by,
        spaces=spaces,
        corpus=corpus,
        fields=fields,
        includeItemsFromAllDrives=include_items_from_all_drives,
        supportsAllDrives=supports_all_drives,
    )


def build_copy_body(name: Optional[str] = None, folder_id: Optional[str] = None) -> Dict[str, Any]:
    """JSON body for files.copy: the new name and, when given, the single target folder."""
    return build_params(
        name=name,
        parents=[folder_id] if folder_id else None,
    )


def build_metadata_body(
        name: Optional[str] = None,
        description: Optional[str] = None,
        starred: Optional[bool] = None,
        trashed: Optional[bool] = None,
        mime_type: Optional[str] = None
) -> Dict[str, Any]:
    """JSON body for a files.update metadata change."""
    return build_params(
        name=name,
        description=description,
        starred=starred,
        trashed=trashed,
        mimeType=mime_type,
    )


def build_move_params(
        add_parents: Optional[Union[str, List[str]]] = None,
        remove_parents: Optional[Union[str, List[str]]] = None
) -> Dict[str, Any]:
    """Query parameters for a files.update move."""
    return build_params(
        addParents=join_ids(add_parents) or None,
        removeParents=join_ids(remove_parents) or None,
    )
