"""
Session Event Log

Records what happened during a demonstration session (keys generated,
messages encrypted, hashes computed, ...) so the CLI and tests can replay
or inspect the history.

Features:
- Typed events with compact JSON records
- Callbacks notified on every new event
- Filtering by type and recency
- JSON export/import

The log lives in memory only. Events never carry private exponents, primes
or plaintext messages; only sizes, algorithm names and timings.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


log = logging.getLogger(__name__)

EVENT_VERSION = "1.0"


class EventType(Enum):
    """Types of demonstration events."""

    # RSA tool
    KEYS_GENERATED = "keys_generated"
    MESSAGE_ENCRYPTED = "message_encrypted"
    MESSAGE_DECRYPTED = "message_decrypted"

    # Hash visualizer
    HASHES_COMPUTED = "hashes_computed"
    AVALANCHE_TEST = "avalanche_test"
    BIRTHDAY_ANALYSIS = "birthday_analysis"

    OPERATION_FAILED = "operation_failed"


@dataclass
class DemoEvent:
    """A single entry in the session history."""
    event_type: EventType
    timestamp: float
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> str:
        """Serialize as compact JSON."""
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'), ensure_ascii=False)

    @classmethod
    def from_record(cls, record: str) -> 'DemoEvent':
        data = json.loads(record)
        return cls(
            event_type=EventType(data['type']),
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] {self.event_type.value}"


class EventLog:
    """In-memory, append-only history of demonstration events."""

    def __init__(self, max_events: Optional[int] = None):
        """
        Args:
            max_events: Keep only the newest N events (None = unbounded)
        """
        self._events: List[DemoEvent] = []
        self._max_events = max_events
        self._callbacks: List[Callable[[DemoEvent], None]] = []

    def record(self, event_type: EventType, **details: Any) -> DemoEvent:
        """Append an event and notify callbacks."""
        event = DemoEvent(event_type=event_type, timestamp=time.time(),
                          details=details)
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[:len(self._events) - self._max_events]

        log.debug("event %s %s", event_type.value, details)
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                # listener errors are logged, never raised
                log.exception("event callback %r failed", callback)
        return event

    def record_failure(self, operation: str, error: Exception) -> DemoEvent:
        return self.record(EventType.OPERATION_FAILED,
                           operation=operation, error=str(error))

    def add_callback(self, callback: Callable[[DemoEvent], None]) -> None:
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[DemoEvent], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def __len__(self) -> int:
        return len(self._events)

    def get_all_events(self) -> List[DemoEvent]:
        return list(self._events)

    def get_events_by_type(self, event_type: EventType) -> List[DemoEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[DemoEvent]:
        if count <= 0:
            return []
        return self._events[-count:]

    def clear(self) -> None:
        self._events.clear()

    def export_log(self) -> str:
        """Export the history as a JSON array of event records."""
        return json.dumps([json.loads(e.to_record()) for e in self._events],
                          ensure_ascii=False)

    @classmethod
    def import_log(cls, json_str: str) -> 'EventLog':
        """Rebuild a log from export_log() output."""
        event_log = cls()
        for item in json.loads(json_str):
            event_log._events.append(DemoEvent.from_record(json.dumps(item)))
        return event_log
