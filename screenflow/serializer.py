"""Conversion between store state and the exchanged JSON document.

Import validation is structural: it checks that nodes and edges carry the
fields needed to place them on the canvas, and that they convert into the
typed models. Component ``properties`` are free-form unless ``strict`` is
requested, in which case each component must carry its kind's default keys.
"""

import json
from typing import Any

from pydantic import ValidationError

from screenflow.catalog import COMPONENT_CATALOG
from screenflow.models.flow import (
    FlowDocument,
    FlowEdge,
    FlowMetadata,
    FlowNode,
    Viewport,
)
from screenflow.utils.identifiers import utc_timestamp

FLOW_DOCUMENT_VERSION = "1.0"


def default_import_viewport() -> Viewport:
    """Viewport used when an imported document has none."""
    return Viewport(x=0, y=0, zoom=1)


class FlowImportError(Exception):
    """Raised when a document cannot be imported."""
    pass


def dump_flow(
    nodes: list[FlowNode],
    edges: list[FlowEdge],
    viewport: Viewport,
    indent: int | None = 2,
) -> str:
    """Serialize a flow snapshot into the versioned JSON document."""
    document = FlowDocument(
        nodes=nodes,
        edges=edges,
        viewport=viewport,
        metadata=FlowMetadata(version=FLOW_DOCUMENT_VERSION, created_at=utc_timestamp()),
    )
    return document.model_dump_json(by_alias=True, exclude_none=True, indent=indent or None)


def validate_flow(flow: Any) -> bool:
    """Check the minimal shape of a parsed document.

    ``nodes`` and ``edges`` must be lists; every node needs a truthy
    ``id``, ``type`` and ``data``, every edge a truthy ``id``, ``source``
    and ``target``.
    """
    if not isinstance(flow, dict):
        return False
    nodes = flow.get("nodes")
    edges = flow.get("edges")
    if not isinstance(nodes, list) or not isinstance(edges, list):
        return False

    for node in nodes:
        if not isinstance(node, dict):
            return False
        if not node.get("id") or not node.get("type") or not node.get("data"):
            return False

    for edge in edges:
        if not isinstance(edge, dict):
            return False
        if not edge.get("id") or not edge.get("source") or not edge.get("target"):
            return False

    return True


def check_component_properties(document: FlowDocument) -> list[str]:
    """List components whose properties lack their kind's default keys."""
    problems = []
    for node in document.nodes:
        for component in node.data.components:
            expected = COMPONENT_CATALOG[component.category].initial_properties
            missing = sorted(set(expected) - set(component.properties))
            if missing:
                problems.append(
                    f"{node.id}/{component.id} ({component.category.value}) "
                    f"missing properties: {', '.join(missing)}"
                )
    return problems


def load_flow(text: str, strict: bool = False) -> FlowDocument:
    """Parse and validate a document.

    The returned document always has a viewport.

    Raises:
        FlowImportError: if the text is not JSON, fails the structural
            check, does not convert into the models, or (when ``strict``)
            has components with incomplete properties.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise FlowImportError(f"document is not valid JSON: {e}") from e

    if not validate_flow(data):
        raise FlowImportError("document is missing required node or edge fields")

    try:
        document = FlowDocument.model_validate(data)
    except ValidationError as e:
        raise FlowImportError(f"document does not match the flow model: {e}") from e

    if strict:
        problems = check_component_properties(document)
        if problems:
            raise FlowImportError("; ".join(problems))

    if document.viewport is None:
        document.viewport = default_import_viewport()
    return document
