"""
Log sanitization utilities to keep file names, queries and IDs out of logs.
"""

import re


def sanitize_query(query: str, max_length: int = 30) -> str:
    """
    Sanitize a Drive search query for logging by removing potential PII.

    Args:
        query: Search query to sanitize
        max_length: Maximum length to show

    Returns:
        Sanitized query representation
    """
    if not query:
        return "[empty-query]"

    # Replace email addresses in query
    sanitized = re.sub(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b',
                       '[EMAIL]', query)

    # Hide quoted file names
    sanitized = re.sub(r"name (=|contains) '(?:[^'\\]|\\.)*'", r"name \1 '[NAME]'", sanitized)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."

    return f"'{sanitized}' ({len(query)} chars)"


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename for logging.

    Args:
        filename: Filename to sanitize

    Returns:
        Sanitized filename representation
    """
    if not filename:
        return "[no-filename]"

    # Show only extension and length for privacy
    parts = filename.split('.')
    if len(parts) > 1:
        extension = parts[-1].lower()
        return f"[file.{extension}] ({len(filename)} chars)"
    else:
        return f"[file] ({len(filename)} chars)"


def sanitize_file_id(file_id: str) -> str:
    """
    Sanitize a Drive file ID for logging.

    Args:
        file_id: File, folder or permission ID

    Returns:
        Sanitized ID representation
    """
    if not file_id:
        return "[no-id]"

    # Show only first 6 and last 4 characters
    if len(file_id) <= 10:
        return f"[id: {file_id}]"
    else:
        return f"[id: {file_id[:6]}...{file_id[-4:]}]"


def sanitize_email(email: str) -> str:
    """
    Sanitize email address for logging by showing only domain and length.

    Example:
        "user@example.com" -> "***@example.com (16 chars)"
    """
    if not email or '@' not in email:
        return "[invalid-email]"

    _, domain = email.split('@', 1)
    return f"***@{domain} ({len(email)} chars)"


def sanitize_for_logging(**kwargs) -> dict:
    """
    Sanitize multiple fields for logging in one call.

    Args:
        **kwargs: Fields to sanitize (query, name, file_id, email_address, etc.)

    Returns:
        Dictionary with sanitized values
    """
    sanitized = {}

    for key, value in kwargs.items():
        if key in ('query', 'q'):
            sanitized[key] = sanitize_query(value) if value else None
        elif key in ('name', 'filename'):
            sanitized[key] = sanitize_filename(value) if value else None
        elif key in ('file_id', 'folder_id', 'permission_id', 'parent_id'):
            sanitized[key] = sanitize_file_id(value) if value else None
        elif key == 'email_address':
            sanitized[key] = sanitize_email(value) if value else None
        else:
            # For other fields, just include as-is (non-PII data)
            sanitized[key] = value

    return sanitized
