"""
PumpRoom publisher - validate, archive and upload a content repository.

Pipeline (each stage short-circuits the rest on failure):
- FolderValidator: no top-level folders differing only by case
- ConfigValidator: .inzhenerka.yml exists and passes the remote schema
- ArchiveBuilder: ZIP of the tree minus ignored path fragments
- UploadService: multipart upload and response summary

Usage:
    from pumproom import PublishOrchestrator, PublishConfig, IgnoreList

    config = PublishConfig(
        root_dir=Path("."),
        work_dir=Path("."),
        realm="my-realm",
        repo_name="my-repo",
        api_key=os.environ["PUMPROOM_API_KEY"],
        ignore=IgnoreList.from_input("node_modules, dist"),
    )
    async with PublishOrchestrator(config) as publisher:
        result = await publisher.run()
    if not result.success:
        print(result.message)
"""
from .exceptions import (
    PublishError,
    ValidationFailure,
    TransportFailure,
    UploadError,
    UnknownFailure,
)
from .models import IgnoreList, PublishConfig, PumpRoomResponse, UploadMetadata
from .orchestrator import PublishOrchestrator, PipelineState, PublishResult
from .services import format_pumproom_response

__version__ = "0.1.0"
__all__ = [
    # Main
    "PublishOrchestrator",
    "PipelineState",
    "PublishResult",
    # Models
    "IgnoreList",
    "PublishConfig",
    "PumpRoomResponse",
    "UploadMetadata",
    # Errors
    "PublishError",
    "ValidationFailure",
    "TransportFailure",
    "UploadError",
    "UnknownFailure",
    # Formatting
    "format_pumproom_response",
]
