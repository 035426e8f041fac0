from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
import asyncio
import logging
logger = logging.getLogger(__name__)

STAGE_START = "stage_start"
STAGE_COMPLETE = "stage_complete"
FAILED = "failed"
FINISH = "finish"


@dataclass
class StageEvent:
    """Progress information for a single pipeline stage."""
    stage: str
    index: int
    total: int
    message: Optional[str] = None


class EventEmitter:
    """Simple event emitter for pipeline events."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}
        self._lock = asyncio.Lock()

    def on(self, event_name: str, callback: Callable):
        """Subscribe to an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        if callback not in self._listeners[event_name]:
            self._listeners[event_name].append(callback)

    async def emit(self, event_name: str, *args, **kwargs):
        """Emit an event to all listeners. Listener errors are logged, never raised."""
        if event_name not in self._listeners:
            return

        async with self._lock:
            for callback in self._listeners[event_name][:]:
                try:
                    if asyncio.iscoroutinefunction(callback):
                        await callback(*args, **kwargs)
                    else:
                        callback(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Error in event listener for {event_name}: {e}")
