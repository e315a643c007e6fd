"""screenflow - in-memory model and mutation engine for application flow editors."""

from screenflow.models.flow import (
    Component,
    ComponentKind,
    ExportFormat,
    FlowDocument,
    FlowEdge,
    FlowNode,
    FlowState,
    Position,
    ScreenData,
    ScreenKind,
    Size,
    ToolType,
    Viewport,
)
from screenflow.models.flow_event import FlowAction, FlowEvent
from screenflow.catalog import component_defaults, screen_defaults
from screenflow.config import FlowSettings, configure_logging, get_settings
from screenflow.serializer import FlowImportError
from screenflow.store import FlowStore, component_selection_key

__all__ = [
    # Graph entities
    "Component",
    "ComponentKind",
    "FlowEdge",
    "FlowNode",
    "Position",
    "ScreenData",
    "ScreenKind",
    "Size",
    # State and documents
    "ExportFormat",
    "FlowDocument",
    "FlowState",
    "ToolType",
    "Viewport",
    # Change events
    "FlowAction",
    "FlowEvent",
    # Catalog
    "component_defaults",
    "screen_defaults",
    # Configuration
    "FlowSettings",
    "configure_logging",
    "get_settings",
    # High-level API
    "FlowImportError",
    "FlowStore",
    "component_selection_key",
]
