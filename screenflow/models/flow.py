"""Data models for the flow graph: screens, their components, and edges.

For the data models, we choose pydantic. Field names are snake_case in
Python; the exchanged document keeps the editor's camelCase keys through
aliases (``screenSize``, ``createdAt``, ``sourceHandle``).
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from screenflow.utils.identifiers import generate_component_id


class ScreenKind(str, Enum):
    """The closed set of screen categories."""

    login = "login-screen"
    dashboard = "dashboard-screen"
    form = "form-screen"
    list = "list-screen"
    detail = "detail-screen"
    settings = "settings-screen"


class ComponentKind(str, Enum):
    """The closed set of component categories placed inside screens."""

    # ui elements
    button = "button"
    input = "input"
    text = "text"
    textarea = "textarea"
    select = "select"
    checkbox = "checkbox"
    radio = "radio"
    image = "image"
    card = "card"
    modal = "modal"
    table = "table"
    list = "list"
    # logic elements
    api_call = "api-call"
    logic = "logic"
    database = "database"


class ToolType(str, Enum):
    """Interaction mode of the canvas."""

    select = "select"
    pan = "pan"
    connect = "connect"


class ExportFormat(str, Enum):
    """Formats produced by ``FlowStore.export``."""

    json = "json"
    documentation = "documentation"
    mermaid = "mermaid"


class _FlowModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class Position(_FlowModel):
    """A point in canvas coordinates."""

    x: float
    y: float


class Size(_FlowModel):
    """Screen dimensions. Height is derived from the component count."""

    width: float = 400
    height: float = 300


class Viewport(_FlowModel):
    """Pan and zoom of the canvas."""

    x: float = 0
    y: float = 0
    zoom: float = 0.8


class Component(_FlowModel):
    """A UI or logic element owned by exactly one screen.

    The id is assigned once at creation and survives reorders and
    deletions of its siblings. ``position`` is stored for a future
    free-form layout; the list layout does not read it.
    """

    id: str = Field(default_factory=generate_component_id)
    category: ComponentKind
    label: str
    name: str | None = None  # user override of label
    description: str | None = None
    visual_tag: str | None = Field(default=None, alias="visualTag")
    properties: dict[str, Any] = Field(default_factory=dict)
    position: Position = Field(default_factory=lambda: Position(x=0, y=0))

    @property
    def display_name(self) -> str:
        return self.name or self.label


class ScreenData(_FlowModel):
    """Editable payload of a screen node."""

    label: str
    description: str | None = None
    category: ScreenKind
    visual_tag: str | None = Field(default=None, alias="visualTag")
    components: list[Component] = Field(default_factory=list)
    screen_size: Size = Field(default_factory=Size, alias="screenSize")


class FlowNode(_FlowModel):
    """A screen placed on the canvas."""

    id: str
    type: ScreenKind
    position: Position
    data: ScreenData
    selected: bool = False


class FlowEdge(_FlowModel):
    """A directed navigation edge between two screens."""

    id: str
    source: str
    target: str
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")
    animated: bool | None = None
    style: dict[str, Any] | None = None
    selected: bool = False


class FlowState(_FlowModel):
    """Everything the store owns at one point in time."""

    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)
    viewport: Viewport = Field(default_factory=Viewport)
    selected_tool: ToolType = ToolType.select
    selected_node_id: str | None = None
    selected_screen_id: str | None = None  # screen whose components are being edited
    is_dark_mode: bool = True


class FlowMetadata(_FlowModel):
    """Document metadata written on export."""

    version: str
    created_at: str = Field(alias="createdAt")


class FlowDocument(_FlowModel):
    """The exchanged document: a flat snapshot of nodes, edges and viewport."""

    nodes: list[FlowNode]
    edges: list[FlowEdge]
    viewport: Viewport | None = None
    metadata: FlowMetadata | None = None
