"""Human-readable rendering of ingestion responses."""
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from ..models import PumpRoomResponse

RULE = "━" * 40

# (label, field) in display order; absent fields are skipped
TASK_LINES = (
    ("Uploaded", "tasks_uploaded"),
    ("Current", "tasks_current"),
    ("Created", "tasks_created"),
    ("Updated", "tasks_updated"),
    ("Deleted", "tasks_deleted"),
    ("Retained", "tasks_retained"),
    ("Cached", "tasks_cached"),
    ("Synchronized with CMS", "tasks_synchronized_with_cms"),
)


def format_timestamp(value: Optional[str]) -> str:
    """ISO-8601 to the locale's date/time representation; unparseable input is returned as-is."""
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value).strftime("%c")
    except ValueError:
        return value


def format_pumproom_response(response: Union[PumpRoomResponse, Mapping[str, Any]]) -> str:
    """
    Render the update summary.

    Pure function: the same response always yields the same text.
    """
    if not isinstance(response, PumpRoomResponse):
        response = PumpRoomResponse.from_dict(response)

    lines: List[str] = ["📊 PumpRoom Repository Update Summary:", RULE]

    if response.repo_updated is not None:
        lines.append(f"🔄 Repository Updated: {'Yes' if response.repo_updated else 'No'}")
    lines.append(f"🕒 Pushed At: {format_timestamp(response.pushed_at)}")

    lines.append("")
    lines.append("📋 Tasks Summary:")
    for label, name in TASK_LINES:
        value = getattr(response, name)
        if value is not None:
            lines.append(f"  • {label}: {value}")
    lines.append(RULE)

    return "\n".join(lines)
