"""
Protocols (Interfaces) for Dependency Inversion.

Validators and the uploader depend on these, not on httpx directly.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class IAPIClient(Protocol):
    """Interface for remote API calls."""

    async def post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        timeout: Optional[float] = None,
    ) -> Any:
        """POST a JSON body; returns a response with ``status_code`` and ``json()``."""
        ...

    async def post_file(
        self,
        url: str,
        data: Dict[str, str],
        file_field: str,
        file_path: Path,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """POST a multipart body with one file streamed from disk."""
        ...
