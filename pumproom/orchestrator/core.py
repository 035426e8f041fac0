"""Core orchestrator - runs the publish pipeline."""
import asyncio
import logging
from typing import Callable, Optional

from ..exceptions import PublishError
from ..models import PublishConfig, PumpRoomResponse
from ..protocols import IAPIClient
from ..services.api_client import HTTPAPIClient
from ..services.archiver import ArchiveBuilder, temporary_archive
from ..services.config_validator import ConfigValidator
from ..services.folder_validator import FolderValidator
from ..services.uploader import UploadService
from ..utils.events import FAILED, FINISH, STAGE_COMPLETE, STAGE_START, EventEmitter, StageEvent

from .models import STAGES, PipelineState, PublishResult

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "✅ Repository successfully published to PumpRoom"
UNKNOWN_ERROR = "An unknown error occurred"


class PublishOrchestrator:
    """
    Validates, archives and uploads a repository using injected services.

    Linear state machine: each stage must finish before the next starts and
    any exception moves the run to FAILED. This is the only place failures
    are caught; ``run`` never raises for pipeline errors.

    Usage:
        async with PublishOrchestrator(config) as publisher:
            publisher.on(STAGE_START, lambda event: print(event.stage))
            result = await publisher.run()
    """

    def __init__(
        self,
        config: PublishConfig,
        api_client: Optional[IAPIClient] = None,
        folder_validator: Optional[FolderValidator] = None,
        config_validator: Optional[ConfigValidator] = None,
        archiver: Optional[ArchiveBuilder] = None,
        uploader: Optional[UploadService] = None,
    ):
        """
        Initialize orchestrator with dependencies.

        Args:
            config: Publish configuration
            api_client: HTTP client; an HTTPAPIClient is opened when omitted
            folder_validator: Folder name validator
            config_validator: Configuration validator
            archiver: Archive builder
            uploader: Upload service
        """
        self._config = config
        self._external_client = api_client
        self._owned_client: Optional[HTTPAPIClient] = None
        self._api_client = api_client

        self._folder_validator = folder_validator
        self._config_validator = config_validator
        self._archiver = archiver
        self._uploader = uploader

        self._events = EventEmitter()
        self._state = PipelineState.INIT

    async def __aenter__(self):
        """Open the HTTP client and build missing services."""
        if self._external_client is None:
            self._owned_client = HTTPAPIClient(timeout=self._config.schema_timeout)
            await self._owned_client.__aenter__()
            self._api_client = self._owned_client

        if self._folder_validator is None:
            self._folder_validator = FolderValidator()
        if self._config_validator is None:
            self._config_validator = ConfigValidator(
                self._api_client,
                self._config.resolved_schema_url,
                timeout=self._config.schema_timeout,
            )
        if self._archiver is None:
            self._archiver = ArchiveBuilder(self._config.ignore)
        if self._uploader is None:
            self._uploader = UploadService(
                self._api_client,
                self._config.api_url,
                timeout=self._config.upload_timeout,
            )
        return self

    async def __aexit__(self, *args):
        """Cleanup resources."""
        if self._owned_client:
            await self._owned_client.__aexit__(*args)
            self._owned_client = None

    @property
    def state(self) -> PipelineState:
        return self._state

    def on(self, event_name: str, callback: Callable) -> None:
        """Subscribe to pipeline events (stage_start, stage_complete, failed, finish)."""
        self._events.on(event_name, callback)

    async def _enter(self, state: PipelineState) -> StageEvent:
        self._state = state
        event = StageEvent(stage=state.value, index=STAGES.index(state) + 1, total=len(STAGES))
        await self._events.emit(STAGE_START, event)
        return event

    async def _complete(self, event: StageEvent) -> None:
        await self._events.emit(STAGE_COMPLETE, event)

    @staticmethod
    def failure_message(exc: BaseException) -> str:
        if isinstance(exc, (PublishError, OSError)):
            return str(exc)
        return UNKNOWN_ERROR

    async def run(self) -> PublishResult:
        """
        Execute the whole pipeline once.

        Returns:
            PublishResult - success with the server summary, or the single
            failure message of the stage that broke
        """
        if self._folder_validator is None:
            raise RuntimeError("PublishOrchestrator not initialized. Use 'async with' context.")
        config = self._config
        logger.debug("Root directory: %s", config.root_dir)
        logger.debug("Ignore list: %s", config.ignore)

        response: Optional[PumpRoomResponse] = None
        try:
            event = await self._enter(PipelineState.FOLDER_VALIDATION)
            self._folder_validator.validate(config.root_dir)
            await self._complete(event)

            event = await self._enter(PipelineState.CONFIG_VALIDATION)
            await self._config_validator.validate(config.root_dir)
            await self._complete(event)

            with temporary_archive(config.archive_path) as archive_path:
                event = await self._enter(PipelineState.ARCHIVING)
                await asyncio.to_thread(self._archiver.build, config.root_dir, archive_path)
                await self._complete(event)

                event = await self._enter(PipelineState.UPLOADING)
                response = await self._uploader.upload(archive_path, config.metadata)
                await self._complete(event)

                event = await self._enter(PipelineState.CLEANUP)
            await self._complete(event)
        except Exception as exc:
            failed_stage = self._state
            message = self.failure_message(exc)
            self._state = PipelineState.FAILED
            logger.error("%s", message)
            logger.debug("Stage %s failed", failed_stage.value, exc_info=True)
            result = PublishResult.fail(failed_stage, message)
            await self._events.emit(FAILED, result)
            await self._events.emit(FINISH, result)
            return result

        self._state = PipelineState.DONE
        logger.info(SUCCESS_MESSAGE)
        result = PublishResult.ok(SUCCESS_MESSAGE, response)
        await self._events.emit(FINISH, result)
        return result
