"""Event sinks and the emitter the store uses to publish change events."""

import logging
from pathlib import Path
from typing import Any, Callable, Protocol

from screenflow.models.flow_event import FlowAction, FlowEvent
from screenflow.utils.identifiers import generate_event_id, utc_timestamp

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Anything that can take change events from a store."""

    def append(self, event: FlowEvent) -> None: ...


class ListSink:
    """Keeps change events in memory, in emission order.

    Handy for tests and for undo stacks built on top of the store.
    """

    def __init__(self) -> None:
        self.events: list[FlowEvent] = []

    def append(self, event: FlowEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        """Forget every recorded change."""
        self.events.clear()


class FileSink:
    """Change log on disk: one JSON-encoded event per line.

    The parent directory is created up front and the file is reopened
    for every event.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: FlowEvent) -> None:
        with self.path.open("a", encoding="utf-8") as log:
            log.write(f"{event.model_dump_json()}\n")


class CallbackSink:
    """Forwards events to a plain callable (store subscribers)."""

    def __init__(self, listener: Callable[[FlowEvent], Any]) -> None:
        self.listener = listener

    def append(self, event: FlowEvent) -> None:
        self.listener(event)


class EventEmitter:
    """Builds sequenced events and fans them out to every attached sink.

    A failing sink is logged and skipped; the remaining sinks still
    receive the event.
    """

    def __init__(self, sinks: list[EventSink] | None = None) -> None:
        self.sinks: list[EventSink] = list(sinks or [])
        self._sequence = 0

    def _next_sequence(self) -> int:
        """Sequence numbers start at 0 and grow by one per event."""
        seq = self._sequence
        self._sequence += 1
        return seq

    def add_sink(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        """Detach a sink. Detaching twice is a no-op."""
        if sink in self.sinks:
            self.sinks.remove(sink)

    def emit(self, action: FlowAction, payload: dict | None = None) -> FlowEvent:
        """Stamp a new event and hand it to each sink in attach order."""
        event = FlowEvent(
            event_id=generate_event_id(),
            sequence=self._next_sequence(),
            timestamp=utc_timestamp(),
            action=action,
            payload=payload or {},
        )
        # copy so a listener may unsubscribe while being notified
        for sink in list(self.sinks):
            try:
                sink.append(event)
            except Exception:
                logger.exception("event sink %r failed on %s", sink, action.value)
        return event
