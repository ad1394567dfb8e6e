# MIME types
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
GOOGLE_DOCS_MIME_TYPE = "application/vnd.google-apps.document"
GOOGLE_SHEETS_MIME_TYPE = "application/vnd.google-apps.spreadsheet"
GOOGLE_SLIDES_MIME_TYPE = "application/vnd.google-apps.presentation"
DEFAULT_UPLOAD_MIME_TYPE = "application/octet-stream"

# Listing
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 1000
ALL_FOLDERS = "all"

# Query composition
MATCH_EXACT = "exact"
MATCH_CONTAINS = "contains"
MATCH_NOT_EQUAL = "not_equal"
VALID_MATCH_MODES = [MATCH_EXACT, MATCH_CONTAINS, MATCH_NOT_EQUAL]

# Permissions
VALID_PERMISSION_TYPES = ["user", "group", "domain", "anyone"]
VALID_PERMISSION_ROLES = ["owner", "organizer", "fileOrganizer", "writer", "commenter", "reader"]
