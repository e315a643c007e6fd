"""Bulk deltas sent by the canvas layer (drag-move, multi-select, marquee-delete).

A batch is a list of changes, each tagged by ``type``. The store applies a
whole batch as one commit.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from screenflow.models.flow import Position


class NodePositionChange(BaseModel):
    """A node was dragged. ``position`` is None when only the drag state changed."""

    type: Literal["position"] = "position"
    id: str
    position: Position | None = None
    dragging: bool = False


class NodeSelectChange(BaseModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class NodeRemoveChange(BaseModel):
    type: Literal["remove"] = "remove"
    id: str


class EdgeSelectChange(BaseModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class EdgeRemoveChange(BaseModel):
    type: Literal["remove"] = "remove"
    id: str


NodeChange = Annotated[
    Union[NodePositionChange, NodeSelectChange, NodeRemoveChange],
    Field(discriminator="type"),
]

EdgeChange = Annotated[
    Union[EdgeSelectChange, EdgeRemoveChange],
    Field(discriminator="type"),
]

node_changes_adapter = TypeAdapter(list[NodeChange])
edge_changes_adapter = TypeAdapter(list[EdgeChange])
