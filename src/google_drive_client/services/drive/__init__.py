"""Google Drive API service."""

from .api_service import DriveApiService
from .endpoints import EndpointResolver
from .executor import RequestExecutor
from .types import DriveFile, DriveFileList, Permission
from .query_builder import DriveQueryBuilder, build_filter

__all__ = [
    # Service layer
    "DriveApiService",
    "EndpointResolver",
    "RequestExecutor",

    # Data types
    "DriveFile",
    "DriveFileList",
    "Permission",

    # Query builder
    "DriveQueryBuilder",
    "build_filter",
]
