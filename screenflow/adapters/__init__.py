"""Adapters for publishing store changes to listeners and files."""

from screenflow.adapters.event_api import (
    CallbackSink,
    EventEmitter,
    EventSink,
    FileSink,
    ListSink,
)

__all__ = [
    "EventSink",
    "ListSink",
    "FileSink",
    "CallbackSink",
    "EventEmitter",
]
