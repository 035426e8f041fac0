"""Tests for UploadService and response formatting."""
import logging
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

from pumproom.exceptions import ApiErrorResponse, TransportFailure, UploadError
from pumproom.models import PumpRoomResponse, UploadMetadata
from pumproom.services.formatter import format_pumproom_response, format_timestamp
from pumproom.services.uploader import UploadService

API_URL = "https://api.example.com/"


@pytest.fixture
def metadata():
    return UploadMetadata(realm="test-realm", repo_name="test-repo", api_key="test-api-key")


@pytest.fixture
def api_client(api_response):
    client = Mock()
    client.post_file = AsyncMock(
        return_value=Mock(status_code=200, json=Mock(return_value=api_response))
    )
    return client


class TestUploadService:
    @pytest.mark.asyncio
    async def test_upload_success(self, api_client, metadata, caplog):
        caplog.set_level(logging.INFO)
        service = UploadService(api_client, API_URL, timeout=600)

        result = await service.upload(Path("repo-archive.zip"), metadata)

        assert isinstance(result, PumpRoomResponse)
        assert result.tasks_current == 33
        api_client.post_file.assert_awaited_once_with(
            "https://api.example.com/repo/upload_tasks",
            data={
                "realm": "test-realm",
                "repo_name": "test-repo",
                "force_update": "false",
                "retain_deleted": "false",
            },
            file_field="archive",
            file_path=Path("repo-archive.zip"),
            headers={"X-API-KEY": "test-api-key"},
            timeout=600,
        )
        assert any("PumpRoom Repository Update Summary" in m for m in caplog.messages)
        assert not any("test-api-key" in m for m in caplog.messages)

    @pytest.mark.asyncio
    async def test_non_200_status(self, api_client, metadata):
        api_client.post_file.return_value = Mock(status_code=204)
        service = UploadService(api_client, API_URL)

        with pytest.raises(UploadError, match="Unable to upload archive, code: 204"):
            await service.upload(Path("repo-archive.zip"), metadata)

    @pytest.mark.asyncio
    async def test_rejected_with_response_logs_and_wraps(self, api_client, metadata, caplog):
        failure = TransportFailure(
            "API error 400 on POST https://api.example.com/repo/upload_tasks",
            response=ApiErrorResponse(400, {"error": "Bad Request"}),
        )
        api_client.post_file.side_effect = failure
        service = UploadService(api_client, API_URL)

        with pytest.raises(UploadError, match="Unable to upload archive: API error 400") as exc_info:
            await service.upload(Path("repo-archive.zip"), metadata)

        assert exc_info.value.__cause__ is failure
        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert "Status code: 400" in errors
        assert 'Response: {"error": "Bad Request"}' in errors

    @pytest.mark.asyncio
    async def test_network_error_propagates_unchanged(self, api_client, metadata):
        failure = TransportFailure("Connection refused")
        api_client.post_file.side_effect = failure
        service = UploadService(api_client, API_URL)

        with pytest.raises(TransportFailure) as exc_info:
            await service.upload(Path("repo-archive.zip"), metadata)

        assert exc_info.value is failure

    @pytest.mark.asyncio
    async def test_invalid_json(self, api_client, metadata):
        api_client.post_file.return_value = Mock(
            status_code=200, json=Mock(side_effect=ValueError("Expecting value"))
        )
        service = UploadService(api_client, API_URL)

        with pytest.raises(UploadError, match="Unable to parse upload response"):
            await service.upload(Path("repo-archive.zip"), metadata)

    @pytest.mark.asyncio
    async def test_non_object_json(self, api_client, metadata):
        api_client.post_file.return_value = Mock(status_code=200, json=Mock(return_value=[1, 2]))
        service = UploadService(api_client, API_URL)

        with pytest.raises(UploadError, match="expected a JSON object, got list"):
            await service.upload(Path("repo-archive.zip"), metadata)


class TestFormatPumpRoomResponse:
    def test_current_cached_shape(self, api_response):
        formatted = format_pumproom_response(api_response)

        assert "PumpRoom Repository Update Summary" in formatted
        assert "Repository Updated: Yes" in formatted
        assert "Tasks Summary" in formatted
        assert "Current: 33" in formatted
        assert "Updated: 33" in formatted
        assert "Created: 0" in formatted
        assert "Deleted: 1" in formatted
        assert "Cached: 33" in formatted
        assert "Synchronized with CMS: 2" in formatted

    def test_uploaded_retained_shape(self):
        formatted = format_pumproom_response(
            {
                "pushed_at": "2025-01-15T10:00:00",
                "tasks_uploaded": 12,
                "tasks_created": 2,
                "tasks_updated": 3,
                "tasks_deleted": 0,
                "tasks_retained": 7,
            }
        )

        lines = formatted.splitlines()
        assert lines[0] == "📊 PumpRoom Repository Update Summary:"
        assert lines[1] == "━" * 40
        assert lines[2].startswith("🕒 Pushed At: ")
        assert lines[3] == ""
        assert lines[4] == "📋 Tasks Summary:"
        assert lines[5:10] == [
            "  • Uploaded: 12",
            "  • Created: 2",
            "  • Updated: 3",
            "  • Deleted: 0",
            "  • Retained: 7",
        ]
        assert lines[-1] == "━" * 40
        assert "Repository Updated" not in formatted
        assert "Synchronized with CMS" not in formatted

    def test_repository_not_updated(self, api_response):
        formatted = format_pumproom_response({**api_response, "repo_updated": False})
        assert "Repository Updated: No" in formatted

    def test_pure(self, api_response):
        snapshot = dict(api_response)

        first = format_pumproom_response(api_response)
        second = format_pumproom_response(PumpRoomResponse.from_dict(api_response))

        assert first == second
        assert api_response == snapshot

    def test_timestamp(self):
        assert format_timestamp("not-a-date") == "not-a-date"
        assert format_timestamp(None) == "-"
        assert "2025" in format_timestamp("2025-07-30T21:26:10.875969")
