"""
Upload Service - Single Responsibility: send the archive to the ingestion endpoint.
"""
import json
import logging
from pathlib import Path
from typing import Mapping

from ..exceptions import TransportFailure, UploadError
from ..models import UPLOAD_PATH, UPLOAD_TIMEOUT, PumpRoomResponse, UploadMetadata
from ..protocols import IAPIClient
from .formatter import format_pumproom_response

logger = logging.getLogger(__name__)


class UploadService:
    """Posts a repository archive with its metadata and parses the result."""

    ARCHIVE_FIELD = "archive"

    def __init__(
        self,
        api_client: IAPIClient,
        api_url: str,
        timeout: float = UPLOAD_TIMEOUT,
    ):
        self._api = api_client
        self._upload_url = api_url.rstrip("/") + UPLOAD_PATH
        self._timeout = timeout

    async def upload(self, archive_path: Path, metadata: UploadMetadata) -> PumpRoomResponse:
        """
        Upload archive and return the parsed server summary.

        Args:
            archive_path: ZIP archive on disk
            metadata: Realm, repository name and API key

        Returns:
            PumpRoomResponse from the 200 answer

        Raises:
            UploadError: non-200 answer, or the server rejected the request
            TransportFailure: no response at all (network failure)
        """
        logger.info("Uploading archive to PumpRoom...")
        try:
            response = await self._api.post_file(
                self._upload_url,
                data=metadata.form_fields(),
                file_field=self.ARCHIVE_FIELD,
                file_path=Path(archive_path),
                headers=metadata.headers,
                timeout=self._timeout,
            )
        except TransportFailure as exc:
            if not exc.has_response:
                raise
            logger.error("❌ API request failed: %s", exc)
            logger.error("Status code: %s", exc.response.status_code)
            logger.error("Response: %s", json.dumps(exc.response.body, ensure_ascii=False))
            raise UploadError(f"Unable to upload archive: {exc}") from exc

        logger.info("Response status: %s", response.status_code)
        if response.status_code != 200:
            raise UploadError(f"Unable to upload archive, code: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UploadError(f"Unable to parse upload response: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise UploadError(
                f"Unable to parse upload response: expected a JSON object, got {type(payload).__name__}"
            )

        result = PumpRoomResponse.from_dict(payload)
        logger.info("%s", format_pumproom_response(result))
        return result
