"""
Change events emitted by the store after each committed mutation.

Subscribers and sinks receive one event per mutation; no-ops emit nothing.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class FlowAction(str, Enum):
    """The mutation that produced an event."""

    screen_added = "screen_added"
    screen_deleted = "screen_deleted"
    screen_duplicated = "screen_duplicated"
    screen_updated = "screen_updated"
    component_added = "component_added"
    component_deleted = "component_deleted"
    component_updated = "component_updated"
    component_moved = "component_moved"
    component_reordered = "component_reordered"
    edge_connected = "edge_connected"
    nodes_changed = "nodes_changed"
    edges_changed = "edges_changed"
    tool_selected = "tool_selected"
    selection_changed = "selection_changed"
    dark_mode_toggled = "dark_mode_toggled"
    viewport_changed = "viewport_changed"
    flow_cleared = "flow_cleared"
    flow_imported = "flow_imported"


class FlowEvent(BaseModel):
    """A record of one committed mutation."""

    model_config = {"extra": "forbid"}

    event_id: str
    sequence: int  # monotonic within one store
    timestamp: str
    action: FlowAction
    payload: dict[str, Any]
