from typing import Optional, List, TYPE_CHECKING
import logging

from .constants import (
    FOLDER_MIME_TYPE, ALL_FOLDERS, MATCH_EXACT, MATCH_CONTAINS, MATCH_NOT_EQUAL,
    VALID_MATCH_MODES, MIN_PAGE_SIZE, MAX_PAGE_SIZE
)
from ...exceptions import ValidationError

if TYPE_CHECKING:
    from .api_service import DriveApiService
    from .types import DriveFileList, DriveFile

logger = logging.getLogger(__name__)


def escape_query_value(value: str) -> str:
    """
    Escape a value for use inside a single-quoted Drive query string.
    Args:
        value: Raw value
    Returns:
        The value with backslashes and single quotes backslash-escaped
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _quote(value: str, escape_quotes: bool) -> str:
    if escape_quotes:
        value = escape_query_value(value)
    return f"'{value}'"


def mime_type_clause(want_folders: Optional[bool]) -> Optional[str]:
    """Clause selecting folders (True), non-folders (False) or nothing (None)."""
    if want_folders is None:
        return None
    operator = "=" if want_folders else "!="
    return f"mimeType {operator} '{FOLDER_MIME_TYPE}'"


def name_clause(value: str, match_mode: Optional[str] = None, escape_quotes: bool = True) -> str:
    """
    Build the name-matching clause of a Drive query.
    Args:
        value: Name (or name fragment) to match
        match_mode: One of "exact", "contains" or "not_equal" (default "exact")
        escape_quotes: Escape quotes inside value
    Returns:
        The clause string
    """
    match_mode = match_mode or MATCH_EXACT
    quoted = _quote(value, escape_quotes)
    if match_mode == MATCH_EXACT:
        return f"name = {quoted}"
    if match_mode == MATCH_CONTAINS:
        return f"name contains {quoted}"
    if match_mode == MATCH_NOT_EQUAL:
        return f"not name contains {quoted}"
    raise ValidationError(f"Invalid match mode: {match_mode}. Must be one of: {', '.join(VALID_MATCH_MODES)}")


def build_filter(
        parent_id: Optional[str] = None,
        name: Optional[str] = None,
        match_mode: Optional[str] = None,
        want_folders: Optional[bool] = None,
        escape_quotes: bool = True
) -> str:
    """
    Compose a Drive search expression for the listing operations.

    Example:
        build_filter("F1", "report", "exact", want_folders=False) ->
        "'F1' in parents and mimeType != 'application/vnd.google-apps.folder'
        and trashed = false and name = 'report'"

    Args:
        parent_id: Folder to list, or None / "all" for every folder
        name: Optional name filter
        match_mode: How name is matched: "exact", "contains" or "not_equal"
        want_folders: True for folders only, False for files only, None for both
        escape_quotes: Escape quotes in interpolated values. Pass False for the
            legacy verbatim behavior, where a value containing ' breaks the query.
    Returns:
        The query string
    """
    clauses = []

    if parent_id is not None and parent_id != ALL_FOLDERS:
        clauses.append(f"{_quote(parent_id, escape_quotes)} in parents")

    mime_clause = mime_type_clause(want_folders)
    if mime_clause:
        clauses.append(mime_clause)

    clauses.append("trashed = false")

    if name is not None:
        clauses.append(name_clause(name, match_mode, escape_quotes))

    return " and ".join(clauses)


class DriveQueryBuilder:
    """
    Builder pattern for constructing Google Drive file queries with a fluent API.

    Example usage:
        page = (user.drive.query()
            .in_folder("0XXXXXXXX")
            .files_only()
            .name_contains("report")
            .limit(50)
            .execute())
    """

    def __init__(self, api_service: "DriveApiService"):
        self._api_service = api_service
        self._parent_clause: Optional[str] = None
        self._want_folders: Optional[bool] = None
        self._name_clauses: List[str] = []
        self._include_trashed: bool = False
        self._escape_quotes: bool = True
        self._page_size: Optional[int] = None
        self._page_token: Optional[str] = None
        self._order_by: Optional[str] = None
        self._spaces: Optional[str] = None
        self._corpus: Optional[str] = None

    def in_folder(self, folder_id: str) -> "DriveQueryBuilder":
        """
        Restrict results to direct children of a folder.
        Args:
            folder_id: Parent folder ID, or "all" to clear the restriction
        Returns:
            Self for method chaining
        """
        if folder_id is None or folder_id == ALL_FOLDERS:
            self._parent_clause = None
        else:
            self._parent_clause = f"{_quote(folder_id, self._escape_quotes)} in parents"
        return self

    def folders_only(self) -> "DriveQueryBuilder":
        self._want_folders = True
        return self

    def files_only(self) -> "DriveQueryBuilder":
        self._want_folders = False
        return self

    def name_equals(self, name: str) -> "DriveQueryBuilder":
        self._name_clauses.append(name_clause(name, MATCH_EXACT, self._escape_quotes))
        return self

    def name_contains(self, fragment: str) -> "DriveQueryBuilder":
        self._name_clauses.append(name_clause(fragment, MATCH_CONTAINS, self._escape_quotes))
        return self

    def name_not_contains(self, fragment: str) -> "DriveQueryBuilder":
        self._name_clauses.append(name_clause(fragment, MATCH_NOT_EQUAL, self._escape_quotes))
        return self

    def include_trashed(self, include: bool = True) -> "DriveQueryBuilder":
        """
        Include or exclude trashed items in results.
        Args:
            include: Whether trashed items are returned
        Returns:
            Self for method chaining
        """
        self._include_trashed = include
        return self

    def raw_values(self) -> "DriveQueryBuilder":
        """
        Stop escaping quotes in folder and name values added after this call.
        Returns:
            Self for method chaining
        """
        self._escape_quotes = False
        return self

    def limit(self, count: int) -> "DriveQueryBuilder":
        """
        Set the maximum number of files per page.
        Args:
            count: Page size (1-1000)
        Returns:
            Self for method chaining
        """
        if count < MIN_PAGE_SIZE or count > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}")
        self._page_size = count
        return self

    def page_token(self, token: str) -> "DriveQueryBuilder":
        self._page_token = token
        return self

    def order_by(self, *keys: str) -> "DriveQueryBuilder":
        """
        Set sort keys, e.g. order_by("folder", "modifiedTime desc", "name").
        Returns:
            Self for method chaining
        """
        self._order_by = ",".join(keys)
        return self

    def in_spaces(self, *spaces: str) -> "DriveQueryBuilder":
        self._spaces = ",".join(spaces)
        return self

    def in_corpus(self, corpus: str) -> "DriveQueryBuilder":
        self._corpus = corpus
        return self

    def build(self) -> str:
        """
        Build the query string without executing it.
        Returns:
            The Drive search expression
        """
        clauses = []
        if self._parent_clause:
            clauses.append(self._parent_clause)
        mime_clause = mime_type_clause(self._want_folders)
        if mime_clause:
            clauses.append(mime_clause)
        if not self._include_trashed:
            clauses.append("trashed = false")
        clauses.extend(self._name_clauses)
        return " and ".join(clauses)

    def execute(self) -> "DriveFileList":
        """
        Execute the query and return one page of results.
        Returns:
            DriveFileList with the matching files and the next page token
        """
        logger.info("Executing drive query with builder")
        result = self._api_service.list_files(
            q=self.build() or None,
            page_size=self._page_size,
            page_token=self._page_token,
            order_by=self._order_by,
            spaces=self._spaces,
            corpus=self._corpus,
        )
        logger.info("Builder query returned %d files", len(result.files))
        return result

    def first(self) -> Optional["DriveFile"]:
        """
        Execute the query and return only the first matching file.
        Returns:
            First DriveFile or None if no matches
        """
        result = self.limit(1).execute()
        return result.files[0] if result.files else None

    def exists(self) -> bool:
        return self.first() is not None
