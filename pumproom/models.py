"""
Models for pumproom module.

Immutable dataclasses, one per entity of a publish run.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


DEFAULT_API_URL = "https://pumproom-api.inzhenerka-cloud.com"
SCHEMA_PATH = "/inzhenerka_schema"
UPLOAD_PATH = "/repo/upload_tasks"
CONFIG_FILENAME = ".inzhenerka.yml"
ARCHIVE_FILENAME = "repo-archive.zip"

SCHEMA_TIMEOUT = 60.0
UPLOAD_TIMEOUT = 600.0  # large archives, slow server-side indexing


@dataclass(frozen=True)
class IgnoreList:
    """
    Substring fragments excluded from the archive.

    A path is ignored when its full path string contains any fragment,
    so ``dist`` also matches ``redistribute``.
    """
    fragments: Tuple[str, ...] = (".git", ".github")

    DEFAULTS = (".git", ".github")

    @classmethod
    def from_input(cls, raw: Optional[str]) -> "IgnoreList":
        """Build from a comma-separated input, keeping the fixed defaults first."""
        extra = []
        if raw:
            extra = [item.strip() for item in raw.split(",")]
        return cls.with_extra(extra)

    @classmethod
    def with_extra(cls, extra: Iterable[str]) -> "IgnoreList":
        fragments = list(cls.DEFAULTS)
        fragments.extend(item for item in extra if item)
        return cls(tuple(fragments))

    def matches(self, path) -> bool:
        text = str(path)
        return any(fragment in text for fragment in self.fragments)

    def __str__(self) -> str:
        return ", ".join(self.fragments)


@dataclass(frozen=True)
class ArchiveEntry:
    """A regular file and the path it is stored under inside the archive."""
    source: Path
    relative: Path

    @property
    def arcname(self) -> str:
        return self.relative.as_posix()


@dataclass(frozen=True)
class UploadMetadata:
    """Form fields sent with the archive."""
    realm: str
    repo_name: str
    api_key: str = field(repr=False)
    force_update: bool = False
    retain_deleted: bool = False

    def form_fields(self) -> Dict[str, str]:
        return {
            "realm": self.realm,
            "repo_name": self.repo_name,
            "force_update": str(self.force_update).lower(),
            "retain_deleted": str(self.retain_deleted).lower(),
        }

    @property
    def headers(self) -> Dict[str, str]:
        return {"X-API-KEY": self.api_key}


@dataclass(frozen=True)
class PumpRoomResponse:
    """
    Result record of the ingestion endpoint.

    Two response shapes exist: ``tasks_uploaded``/``tasks_retained`` and
    ``tasks_current``/``tasks_cached`` (with ``repo_updated`` and
    ``tasks_synchronized_with_cms``). Absent fields stay ``None``.
    """
    pushed_at: Optional[str] = None
    repo_updated: Optional[bool] = None
    tasks_uploaded: Optional[int] = None
    tasks_current: Optional[int] = None
    tasks_created: Optional[int] = None
    tasks_updated: Optional[int] = None
    tasks_deleted: Optional[int] = None
    tasks_retained: Optional[int] = None
    tasks_cached: Optional[int] = None
    tasks_synchronized_with_cms: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _FIELDS = (
        "pushed_at",
        "repo_updated",
        "tasks_uploaded",
        "tasks_current",
        "tasks_created",
        "tasks_updated",
        "tasks_deleted",
        "tasks_retained",
        "tasks_cached",
        "tasks_synchronized_with_cms",
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PumpRoomResponse":
        known = {key: data[key] for key in cls._FIELDS if key in data}
        extra = {key: value for key, value in data.items() if key not in cls._FIELDS}
        return cls(**known, extra=extra)


@dataclass(frozen=True)
class PublishConfig:
    """Immutable configuration for one publish run."""
    root_dir: Path
    work_dir: Path
    realm: str
    repo_name: str
    api_key: str = field(repr=False)
    ignore: IgnoreList = field(default_factory=IgnoreList)
    api_url: str = DEFAULT_API_URL
    schema_url: Optional[str] = None
    schema_timeout: float = SCHEMA_TIMEOUT
    upload_timeout: float = UPLOAD_TIMEOUT

    @property
    def archive_path(self) -> Path:
        return self.work_dir / ARCHIVE_FILENAME

    @property
    def resolved_schema_url(self) -> str:
        return self.schema_url or self.api_url.rstrip("/") + SCHEMA_PATH

    @property
    def metadata(self) -> UploadMetadata:
        return UploadMetadata(
            realm=self.realm,
            repo_name=self.repo_name,
            api_key=self.api_key,
        )
