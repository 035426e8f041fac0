"""Services for pumproom module."""
from .api_client import HTTPAPIClient
from .archiver import ArchiveBuilder, temporary_archive
from .config_validator import ConfigValidator
from .folder_validator import FolderValidator
from .formatter import format_pumproom_response
from .uploader import UploadService

__all__ = [
    "HTTPAPIClient",
    "ArchiveBuilder",
    "temporary_archive",
    "ConfigValidator",
    "FolderValidator",
    "format_pumproom_response",
    "UploadService",
]
