"""
Event system for translation run observability.

Listeners subscribe to run, section and batch lifecycle events without the
orchestrator knowing who is listening.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List
import time

from flow_translate.utils.unified_logger import LogType, warning


class EventType(Enum):
    """Translation run event types."""

    # Run-level events
    TRANSLATION_STARTED = "translation_started"
    TRANSLATION_COMPLETED = "translation_completed"
    TRANSLATION_FAILED = "translation_failed"

    # Section-level events
    SECTION_STARTED = "section_started"
    SECTION_COMPLETED = "section_completed"
    SECTION_FAILED = "section_failed"
    SECTION_SKIPPED = "section_skipped"

    # Batch-level events
    BATCH_TRANSLATED = "batch_translated"
    BATCH_FAILED = "batch_failed"

    # Original text kept in place of a translation
    FALLBACK_USED = "fallback_used"


@dataclass
class Event:
    """Translation run event.

    Attributes:
        type: Event type
        data: Event-specific data dictionary
        timestamp: Unix timestamp when event occurred
        source: Optional source identifier (e.g., "orchestrator")
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"


class EventBus:
    """Central event bus for a translation run."""

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}
        self._history: List[Event] = []
        self._record_history = False

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            callback: Function to call when event occurs (receives Event object)
        """
        self._listeners.setdefault(event_type, []).append(callback)

    def subscribe_multiple(
        self,
        event_types: List[EventType],
        callback: Callable[[Event], None]
    ) -> None:
        for event_type in event_types:
            self.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callable) -> None:
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        A failing listener is logged and skipped; it never reaches the
        publisher.
        """
        if self._record_history:
            self._history.append(event)

        for listener in list(self._listeners.get(event.type, [])):
            try:
                listener(event)
            except Exception as e:
                warning(f"Event listener failed: {e}", LogType.GENERAL, {'event': event.type.value})

    def enable_history(self) -> None:
        self._record_history = True

    def disable_history(self) -> None:
        self._record_history = False

    def get_history(self) -> List[Event]:
        """Recorded events in chronological order."""
        return self._history.copy()

    def clear_history(self) -> None:
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> List[Event]:
        return [e for e in self._history if e.type == event_type]


# === Convenience Event Builders ===

def create_section_event(
    event_type: EventType,
    index: int,
    total: int,
    href: str,
    **extra: Any
) -> Event:
    """Create a section lifecycle event.

    Args:
        event_type: One of the SECTION_* event types
        index: Zero-based spine index
        total: Number of spine sections
        href: Section href
        **extra: Additional data (e.g. error, code)

    Returns:
        Event object
    """
    data = {
        "index": index,
        "total": total,
        "href": href,
    }
    data.update(extra)
    return Event(type=event_type, data=data, source="orchestrator")


def create_batch_event(
    section_href: str,
    batch_index: int,
    total_batches: int,
    units: int,
    chars: int,
    success: bool = True,
    error: str = ""
) -> Event:
    """Create a batch translated/failed event."""
    data = {
        "section": section_href,
        "batch_index": batch_index,
        "total_batches": total_batches,
        "units": units,
        "chars": chars,
    }
    if not success:
        data["error"] = error
    return Event(
        type=EventType.BATCH_TRANSLATED if success else EventType.BATCH_FAILED,
        data=data,
        source="batcher"
    )


def create_fallback_event(section_href: str, batch_index: int, units: int, reason: str) -> Event:
    """Create fallback usage event.

    Args:
        section_href: Section the batch belongs to
        batch_index: Batch that kept its original text
        units: Number of units left untranslated
        reason: Reason for fallback

    Returns:
        Event object
    """
    return Event(
        type=EventType.FALLBACK_USED,
        data={
            "section": section_href,
            "batch_index": batch_index,
            "units": units,
            "reason": reason
        },
        source="batcher"
    )
