"""Orchestrator data models."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models import PumpRoomResponse


class PipelineState(Enum):
    """Publish pipeline states, in execution order."""
    INIT = "init"
    FOLDER_VALIDATION = "folder_validation"
    CONFIG_VALIDATION = "config_validation"
    ARCHIVING = "archiving"
    UPLOADING = "uploading"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


# States that run an operation, in order
STAGES = (
    PipelineState.FOLDER_VALIDATION,
    PipelineState.CONFIG_VALIDATION,
    PipelineState.ARCHIVING,
    PipelineState.UPLOADING,
    PipelineState.CLEANUP,
)


@dataclass
class PublishResult:
    """Result of one publish run."""
    success: bool
    state: PipelineState
    message: str
    failed_stage: Optional[PipelineState] = None
    response: Optional[PumpRoomResponse] = None

    @classmethod
    def ok(cls, message: str, response: Optional[PumpRoomResponse] = None) -> "PublishResult":
        return cls(success=True, state=PipelineState.DONE, message=message, response=response)

    @classmethod
    def fail(cls, stage: PipelineState, message: str) -> "PublishResult":
        return cls(
            success=False,
            state=PipelineState.FAILED,
            message=message,
            failed_stage=stage,
        )
