"""Core data models for screenflow."""

from screenflow.models.flow import (
    Component,
    ComponentKind,
    ExportFormat,
    FlowDocument,
    FlowEdge,
    FlowMetadata,
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
from screenflow.models.node_changes import (
    EdgeChange,
    EdgeRemoveChange,
    EdgeSelectChange,
    NodeChange,
    NodePositionChange,
    NodeRemoveChange,
    NodeSelectChange,
)

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
    # Store and document state
    "ExportFormat",
    "FlowDocument",
    "FlowMetadata",
    "FlowState",
    "ToolType",
    "Viewport",
    # Change events
    "FlowAction",
    "FlowEvent",
    # Bulk deltas
    "EdgeChange",
    "EdgeRemoveChange",
    "EdgeSelectChange",
    "NodeChange",
    "NodePositionChange",
    "NodeRemoveChange",
    "NodeSelectChange",
]
