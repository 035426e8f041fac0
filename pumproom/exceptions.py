"""
Error taxonomy for the publish pipeline.

Stages raise, the orchestrator catches. Nothing here is retried.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional


class PublishError(RuntimeError):
    """Base class for every failure the pipeline reports."""


class ValidationFailure(PublishError):
    """Repository content is not publishable."""


class DuplicateFoldersError(ValidationFailure):
    """Two or more top-level folders differ only by case."""

    def __init__(self, duplicates: Dict[str, List[str]]):
        self.duplicates = duplicates
        lines = [
            f"{key} (variants: {', '.join(variants)})"
            for key, variants in duplicates.items()
        ]
        super().__init__("❌ Folder duplicates found:\n" + "\n".join(lines))


class ConfigNotFoundError(ValidationFailure):
    """The repository configuration file is missing."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"❌ {path.name} file not found at {path}")


class InvalidConfigError(ValidationFailure):
    """The schema endpoint rejected the configuration."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"❌ Configuration is invalid. Status code: {status_code}")


@dataclass(frozen=True)
class ApiErrorResponse:
    """Server answer attached to a transport failure."""
    status_code: int
    body: Any = None


class TransportFailure(PublishError):
    """
    Network or HTTP level failure.

    ``response`` is set when the server answered (status >= 400) and is
    ``None`` for pure network errors (DNS, refused connection, timeout).
    """

    def __init__(self, message: str, response: Optional[ApiErrorResponse] = None):
        super().__init__(message)
        self.response = response

    @property
    def has_response(self) -> bool:
        return self.response is not None


class UploadError(PublishError):
    """Archive upload was not accepted."""


class UnknownFailure(PublishError):
    """A foreign exception type escaped a stage."""
