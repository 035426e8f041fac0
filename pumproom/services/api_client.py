"""HTTP adapter for PumpRoom API operations."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..exceptions import ApiErrorResponse, TransportFailure

logger = logging.getLogger(__name__)


class HTTPAPIClient:
    """
    HTTP client adapter for API calls.

    Implements IAPIClient protocol. Responses with status >= 400 and
    httpx transport errors are raised as ``TransportFailure``; anything
    below 400 is returned to the caller untouched.
    """

    def __init__(
        self,
        timeout: float = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport, follow_redirects=True
        )
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("HTTPAPIClient not initialized. Use 'async with' context.")
        return self._client

    @staticmethod
    def _error_detail(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def _check(self, response: httpx.Response, url: str) -> httpx.Response:
        if response.status_code >= 400:
            detail = self._error_detail(response)
            raise TransportFailure(
                f"API error {response.status_code} on POST {url}",
                response=ApiErrorResponse(response.status_code, detail),
            )
        return response

    async def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        client = self._require_client()
        try:
            response = await client.post(
                url,
                json=payload,
                timeout=timeout if timeout is not None else self._timeout,
            )
        except httpx.HTTPError as exc:
            raise TransportFailure(str(exc) or exc.__class__.__name__) from exc
        return self._check(response, url)

    async def post_file(
        self,
        url: str,
        data: Dict[str, str],
        file_field: str,
        file_path: Path,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        client = self._require_client()
        file_path = Path(file_path)
        logger.debug("POST %s with %s (%d bytes)", url, file_path.name, file_path.stat().st_size)
        try:
            with open(file_path, "rb") as handle:
                response = await client.post(
                    url,
                    data=data,
                    files={file_field: (file_path.name, handle, "application/zip")},
                    headers=headers,
                    timeout=timeout if timeout is not None else self._timeout,
                )
        except httpx.HTTPError as exc:
            raise TransportFailure(str(exc) or exc.__class__.__name__) from exc
        return self._check(response, url)
