"""The flow store: single owner of screens, edges, viewport and selection.

Every mutation builds the next ``FlowState`` aside and swaps it in with one
assignment, then publishes a ``FlowEvent``. Readers get deep copies, so the
methods here are the only way to change a flow.

Mutations never raise. Ids that do not resolve are no-ops and invalid input
is logged and ignored; ``import_flow`` reports failure through its return
value.

Usage:
    from screenflow import FlowStore

    store = FlowStore()
    screen_id = store.add_screen("login-screen", {"x": 100, "y": 100})
    store.add_component_to_screen(screen_id, "button", {"x": 0, "y": 0})
    text = store.export_flow()
"""

import copy
import json
import logging
from typing import Any, Callable

from pydantic import ValidationError

from screenflow.adapters.event_api import CallbackSink, EventEmitter, EventSink
from screenflow.analysis.documentation import build_flow_documentation
from screenflow.analysis.mermaid import to_mermaid
from screenflow.catalog import component_defaults, screen_defaults
from screenflow.config import FlowSettings, get_settings
from screenflow.models.flow import (
    Component,
    ComponentKind,
    ExportFormat,
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
from screenflow.models.node_changes import (
    EdgeRemoveChange,
    EdgeSelectChange,
    NodePositionChange,
    NodeRemoveChange,
    NodeSelectChange,
    edge_changes_adapter,
    node_changes_adapter,
)
from screenflow.serializer import FlowImportError, dump_flow, load_flow
from screenflow.utils.geometry import snap_to_grid
from screenflow.utils.identifiers import (
    generate_component_id,
    generate_edge_id,
    generate_screen_id,
)

logger = logging.getLogger(__name__)

MIN_SCREEN_HEIGHT = 300
SCREEN_BASE_HEIGHT = 200
COMPONENT_ROW_HEIGHT = 40
DUPLICATE_OFFSET = 50
COMPONENT_KEY_SEPARATOR = "/"
DEFAULT_EDGE_STYLE = {"strokeWidth": 2}

SCREEN_EDITABLE_FIELDS = frozenset({"label", "description", "visual_tag", "screen_size"})
COMPONENT_EDITABLE_FIELDS = frozenset({"label", "name", "description", "properties", "visual_tag"})


def screen_height_for(component_count: int) -> int:
    """Height that fits one row per component, never below the minimum."""
    return max(MIN_SCREEN_HEIGHT, SCREEN_BASE_HEIGHT + COMPONENT_ROW_HEIGHT * component_count)


def component_selection_key(screen_id: str, component_id: str) -> str:
    """Selection id naming a component inside a screen."""
    return f"{screen_id}{COMPONENT_KEY_SEPARATOR}{component_id}"


def _names_screen(selection: str | None, screen_id: str) -> bool:
    """True if a selection id names the screen or one of its components."""
    if selection is None:
        return False
    return selection == screen_id or selection.startswith(screen_id + COMPONENT_KEY_SEPARATOR)


def _coerce_position(position: Position | dict) -> Position | None:
    try:
        return Position.model_validate(position).model_copy()
    except ValidationError:
        logger.warning("ignoring invalid position %r", position)
        return None


class FlowStore:
    """Owns one flow and exposes its mutation API.

    Args:
        settings: runtime settings; read from the environment when omitted.
        sinks: event sinks receiving every change event.
    """

    def __init__(
        self,
        settings: FlowSettings | None = None,
        sinks: list[EventSink] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._state = FlowState()
        self._emitter = EventEmitter(sinks)

    # ------------------------------------------------------------------
    # read access

    @property
    def state(self) -> FlowState:
        """A deep copy of the whole state."""
        return self._state.model_copy(deep=True)

    @property
    def nodes(self) -> list[FlowNode]:
        return [node.model_copy(deep=True) for node in self._state.nodes]

    @property
    def edges(self) -> list[FlowEdge]:
        return [edge.model_copy(deep=True) for edge in self._state.edges]

    @property
    def viewport(self) -> Viewport:
        return self._state.viewport.model_copy()

    @property
    def selected_tool(self) -> ToolType:
        return self._state.selected_tool

    @property
    def selected_node_id(self) -> str | None:
        return self._state.selected_node_id

    @property
    def selected_screen_id(self) -> str | None:
        return self._state.selected_screen_id

    @property
    def is_dark_mode(self) -> bool:
        return self._state.is_dark_mode

    def get_screen(self, screen_id: str) -> FlowNode | None:
        index = self._screen_index(screen_id)
        if index is None:
            return None
        return self._state.nodes[index].model_copy(deep=True)

    def get_component(self, screen_id: str, component_id: str) -> Component | None:
        index = self._screen_index(screen_id)
        if index is None:
            return None
        for component in self._state.nodes[index].data.components:
            if component.id == component_id:
                return component.model_copy(deep=True)
        return None

    # ------------------------------------------------------------------
    # subscriptions

    def subscribe(self, listener: Callable[[FlowEvent], Any]) -> Callable[[], None]:
        """Call ``listener`` after every committed mutation.

        Returns a function that removes the subscription.
        """
        sink = CallbackSink(listener)
        self._emitter.add_sink(sink)

        def unsubscribe() -> None:
            self._emitter.remove_sink(sink)

        return unsubscribe

    def add_sink(self, sink: EventSink) -> None:
        self._emitter.add_sink(sink)

    # ------------------------------------------------------------------
    # internals

    def _commit(self, action: FlowAction, payload: dict | None = None, **updates: Any) -> None:
        """Swap in the next state and publish the change."""
        self._state = self._state.model_copy(update=updates)
        logger.debug("%s %s", action.value, payload or {})
        self._emitter.emit(action, payload)

    def _screen_index(self, screen_id: str) -> int | None:
        for index, node in enumerate(self._state.nodes):
            if node.id == screen_id:
                return index
        return None

    def _replace_node(self, index: int, node: FlowNode) -> list[FlowNode]:
        nodes = list(self._state.nodes)
        nodes[index] = node
        return nodes

    def _with_components(self, node: FlowNode, components: list[Component], resize: bool) -> FlowNode:
        data_updates: dict[str, Any] = {"components": components}
        if resize:
            data_updates["screen_size"] = node.data.screen_size.model_copy(
                update={"height": screen_height_for(len(components))}
            )
        return node.model_copy(update={"data": node.data.model_copy(update=data_updates)})

    def _component_index(self, node: FlowNode, component_id: str) -> int | None:
        for index, component in enumerate(node.data.components):
            if component.id == component_id:
                return index
        return None

    # ------------------------------------------------------------------
    # screen operations

    def add_screen(self, kind: ScreenKind | str, position: Position | dict) -> str | None:
        """Append a new, empty screen of ``kind`` and select it.

        Returns the new screen id, or None if the kind or position is invalid.
        """
        try:
            kind = ScreenKind(kind)
        except ValueError:
            logger.warning("unknown screen kind %r", kind)
            return None
        position = _coerce_position(position)
        if position is None:
            return None

        template = screen_defaults(kind)
        screen = FlowNode(
            id=generate_screen_id(),
            type=kind,
            position=snap_to_grid(position, self.settings.snap_grid),
            data=ScreenData(
                label=template.label,
                description=template.description,
                category=kind,
                visual_tag=template.visual_tag,
                components=[],
                screen_size=Size(width=400, height=300),
            ),
        )
        self._commit(
            FlowAction.screen_added,
            {"screen_id": screen.id, "kind": kind.value},
            nodes=[*self._state.nodes, screen],
            selected_node_id=screen.id,
        )
        return screen.id

    def delete_screen(self, screen_id: str) -> None:
        """Remove a screen, every edge touching it, and any selection naming it."""
        if self._screen_index(screen_id) is None:
            return
        state = self._state
        nodes = [node for node in state.nodes if node.id != screen_id]
        edges = [edge for edge in state.edges if edge.source != screen_id and edge.target != screen_id]
        self._commit(
            FlowAction.screen_deleted,
            {"screen_id": screen_id, "edges_removed": len(state.edges) - len(edges)},
            nodes=nodes,
            edges=edges,
            selected_node_id=None if _names_screen(state.selected_node_id, screen_id) else state.selected_node_id,
            selected_screen_id=None if state.selected_screen_id == screen_id else state.selected_screen_id,
        )

    def duplicate_screen(self, screen_id: str) -> str | None:
        """Copy a screen next to the original and select the copy.

        The copy owns its own components (with fresh ids); editing either
        screen never affects the other.
        """
        index = self._screen_index(screen_id)
        if index is None:
            return None
        original = self._state.nodes[index]
        cloned = original.model_copy(deep=True)
        components = [
            component.model_copy(update={"id": generate_component_id()})
            for component in cloned.data.components
        ]
        duplicate = cloned.model_copy(
            update={
                "id": generate_screen_id(),
                "position": Position(
                    x=original.position.x + DUPLICATE_OFFSET,
                    y=original.position.y + DUPLICATE_OFFSET,
                ),
                "data": cloned.data.model_copy(update={"components": components}),
                "selected": False,
            }
        )
        self._commit(
            FlowAction.screen_duplicated,
            {"screen_id": duplicate.id, "source_id": screen_id},
            nodes=[*self._state.nodes, duplicate],
            selected_node_id=duplicate.id,
        )
        return duplicate.id

    def update_screen_data(self, screen_id: str, **changes: Any) -> None:
        """Merge editable fields into a screen's data.

        Accepts ``label``, ``description``, ``visual_tag`` and ``screen_size``;
        a partial ``screen_size`` dict is merged into the current size. Only
        the width is taken from it: the height always follows the component
        count.
        """
        index = self._screen_index(screen_id)
        if index is None:
            return
        unknown = set(changes) - SCREEN_EDITABLE_FIELDS
        if unknown:
            logger.warning("ignoring non-editable screen fields: %s", ", ".join(sorted(unknown)))
        changes = {key: copy.deepcopy(value) for key, value in changes.items() if key in SCREEN_EDITABLE_FIELDS}
        if not changes:
            return

        fields = sorted(changes)
        node = self._state.nodes[index]
        merged = node.data.model_dump()
        size = changes.pop("screen_size", None)
        if size is not None:
            if isinstance(size, Size):
                size = size.model_dump()
            merged["screen_size"] = {**merged["screen_size"], **size} if isinstance(size, dict) else size
        merged.update(changes)
        try:
            data = ScreenData.model_validate(merged)
        except ValidationError as e:
            logger.warning("rejected update for screen %s: %s", screen_id, e)
            return
        height = screen_height_for(len(data.components))
        if data.screen_size.height != height:
            data = data.model_copy(update={"screen_size": data.screen_size.model_copy(update={"height": height})})

        self._commit(
            FlowAction.screen_updated,
            {"screen_id": screen_id, "fields": fields},
            nodes=self._replace_node(index, node.model_copy(update={"data": data})),
        )

    # ------------------------------------------------------------------
    # component operations

    def add_component_to_screen(
        self,
        screen_id: str,
        kind: ComponentKind | str,
        position: Position | dict,
    ) -> str | None:
        """Append a catalog-built component and grow the screen to fit it.

        Returns the new component id, or None if nothing was added.
        """
        index = self._screen_index(screen_id)
        if index is None:
            return None
        try:
            kind = ComponentKind(kind)
        except ValueError:
            logger.warning("unknown component kind %r", kind)
            return None
        position = _coerce_position(position)
        if position is None:
            return None

        template = component_defaults(kind)
        component = Component(
            category=kind,
            label=template.label,
            description=template.description,
            visual_tag=template.visual_tag,
            properties=template.initial_properties,
            position=position,
        )
        node = self._state.nodes[index]
        updated = self._with_components(node, [*node.data.components, component], resize=True)
        self._commit(
            FlowAction.component_added,
            {"screen_id": screen_id, "component_id": component.id, "kind": kind.value},
            nodes=self._replace_node(index, updated),
        )
        return component.id

    def delete_component_from_screen(self, screen_id: str, component_id: str) -> None:
        """Remove a component and shrink the screen accordingly."""
        index = self._screen_index(screen_id)
        if index is None:
            return
        node = self._state.nodes[index]
        if self._component_index(node, component_id) is None:
            return
        components = [c for c in node.data.components if c.id != component_id]
        selected = self._state.selected_node_id
        if selected == component_selection_key(screen_id, component_id):
            selected = None
        self._commit(
            FlowAction.component_deleted,
            {"screen_id": screen_id, "component_id": component_id},
            nodes=self._replace_node(index, self._with_components(node, components, resize=True)),
            selected_node_id=selected,
        )

    def update_component_in_screen(self, screen_id: str, component_id: str, **changes: Any) -> None:
        """Merge ``label``, ``name``, ``description``, ``properties`` or ``visual_tag``.

        ``properties`` replaces the whole map.
        """
        index = self._screen_index(screen_id)
        if index is None:
            return
        node = self._state.nodes[index]
        component_index = self._component_index(node, component_id)
        if component_index is None:
            return
        unknown = set(changes) - COMPONENT_EDITABLE_FIELDS
        if unknown:
            logger.warning("ignoring non-editable component fields: %s", ", ".join(sorted(unknown)))
        changes = {key: copy.deepcopy(value) for key, value in changes.items() if key in COMPONENT_EDITABLE_FIELDS}
        if not changes:
            return

        merged = node.data.components[component_index].model_dump()
        merged.update(changes)
        try:
            component = Component.model_validate(merged)
        except ValidationError as e:
            logger.warning("rejected update for component %s/%s: %s", screen_id, component_id, e)
            return

        components = list(node.data.components)
        components[component_index] = component
        self._commit(
            FlowAction.component_updated,
            {"screen_id": screen_id, "component_id": component_id, "fields": sorted(changes)},
            nodes=self._replace_node(index, self._with_components(node, components, resize=False)),
        )

    def move_component_in_screen(
        self,
        screen_id: str,
        component_id: str,
        position: Position | dict,
    ) -> None:
        """Overwrite a component's stored position. Order and height are unchanged."""
        index = self._screen_index(screen_id)
        if index is None:
            return
        node = self._state.nodes[index]
        component_index = self._component_index(node, component_id)
        if component_index is None:
            return
        position = _coerce_position(position)
        if position is None:
            return

        components = list(node.data.components)
        components[component_index] = components[component_index].model_copy(update={"position": position})
        self._commit(
            FlowAction.component_moved,
            {"screen_id": screen_id, "component_id": component_id},
            nodes=self._replace_node(index, self._with_components(node, components, resize=False)),
        )

    def reorder_component_in_screen(self, screen_id: str, from_index: int, to_index: int) -> None:
        """Move the component at ``from_index`` to ``to_index``.

        Equal or out-of-range indices leave the state untouched.
        """
        if from_index == to_index:
            return
        index = self._screen_index(screen_id)
        if index is None:
            return
        node = self._state.nodes[index]
        components = list(node.data.components)
        count = len(components)
        if not (0 <= from_index < count and 0 <= to_index < count):
            return

        moved = components.pop(from_index)
        components.insert(to_index, moved)
        self._commit(
            FlowAction.component_reordered,
            {"screen_id": screen_id, "from_index": from_index, "to_index": to_index},
            nodes=self._replace_node(index, self._with_components(node, components, resize=False)),
        )

    def move_component_up(self, screen_id: str, component_index: int) -> None:
        if component_index > 0:
            self.reorder_component_in_screen(screen_id, component_index, component_index - 1)

    def move_component_down(self, screen_id: str, component_index: int) -> None:
        index = self._screen_index(screen_id)
        if index is None:
            return
        if 0 <= component_index < len(self._state.nodes[index].data.components) - 1:
            self.reorder_component_in_screen(screen_id, component_index, component_index + 1)

    # ------------------------------------------------------------------
    # graph-level operations

    def connect(
        self,
        source: str,
        target: str,
        *,
        source_handle: str | None = None,
        target_handle: str | None = None,
        animated: bool = True,
        style: dict | None = None,
    ) -> str | None:
        """Add a navigation edge between two existing screens.

        Parallel edges and self-loops are accepted.
        """
        if self._screen_index(source) is None or self._screen_index(target) is None:
            logger.warning("cannot connect %s -> %s: unknown screen", source, target)
            return None
        edge = FlowEdge(
            id=generate_edge_id(),
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
            animated=animated,
            style=copy.deepcopy(style if style is not None else DEFAULT_EDGE_STYLE),
        )
        self._commit(
            FlowAction.edge_connected,
            {"edge_id": edge.id, "source": source, "target": target},
            edges=[*self._state.edges, edge],
        )
        return edge.id

    def apply_node_changes(self, changes: list) -> bool:
        """Apply a batch of node deltas from the canvas in one commit.

        Removed nodes take their edges and any selection naming them with
        them. Returns False, without changing anything, if the batch is
        malformed.
        """
        try:
            parsed = node_changes_adapter.validate_python(changes)
        except ValidationError as e:
            logger.warning("rejected node change batch: %s", e)
            return False
        if not parsed:
            return True

        nodes = list(self._state.nodes)
        removed: set[str] = set()
        for change in parsed:
            at = next((i for i, n in enumerate(nodes) if n.id == change.id), None)
            if at is None:
                continue
            if isinstance(change, NodePositionChange):
                if change.position is not None:
                    nodes[at] = nodes[at].model_copy(update={"position": change.position})
            elif isinstance(change, NodeSelectChange):
                nodes[at] = nodes[at].model_copy(update={"selected": change.selected})
            elif isinstance(change, NodeRemoveChange):
                removed.add(change.id)
                del nodes[at]

        state = self._state
        edges = state.edges
        selected_node_id = state.selected_node_id
        selected_screen_id = state.selected_screen_id
        if removed:
            edges = [e for e in edges if e.source not in removed and e.target not in removed]
            if any(_names_screen(selected_node_id, screen_id) for screen_id in removed):
                selected_node_id = None
            if selected_screen_id in removed:
                selected_screen_id = None

        self._commit(
            FlowAction.nodes_changed,
            {"changes": len(parsed), "removed": sorted(removed)},
            nodes=nodes,
            edges=edges,
            selected_node_id=selected_node_id,
            selected_screen_id=selected_screen_id,
        )
        return True

    def apply_edge_changes(self, changes: list) -> bool:
        """Apply a batch of edge deltas (select, remove) in one commit."""
        try:
            parsed = edge_changes_adapter.validate_python(changes)
        except ValidationError as e:
            logger.warning("rejected edge change batch: %s", e)
            return False
        if not parsed:
            return True

        edges = list(self._state.edges)
        for change in parsed:
            at = next((i for i, e in enumerate(edges) if e.id == change.id), None)
            if at is None:
                continue
            if isinstance(change, EdgeSelectChange):
                edges[at] = edges[at].model_copy(update={"selected": change.selected})
            elif isinstance(change, EdgeRemoveChange):
                del edges[at]

        self._commit(FlowAction.edges_changed, {"changes": len(parsed)}, edges=edges)
        return True

    def set_selected_tool(self, tool: ToolType | str) -> None:
        try:
            tool = ToolType(tool)
        except ValueError:
            logger.warning("unknown tool %r", tool)
            return
        if tool == self._state.selected_tool:
            return
        self._commit(FlowAction.tool_selected, {"tool": tool.value}, selected_tool=tool)

    def set_selected_node_id(self, node_id: str | None) -> None:
        if node_id == self._state.selected_node_id:
            return
        self._commit(FlowAction.selection_changed, {"selected_node_id": node_id}, selected_node_id=node_id)

    def set_selected_screen_id(self, screen_id: str | None) -> None:
        if screen_id == self._state.selected_screen_id:
            return
        self._commit(
            FlowAction.selection_changed,
            {"selected_screen_id": screen_id},
            selected_screen_id=screen_id,
        )

    def toggle_dark_mode(self) -> None:
        is_dark_mode = not self._state.is_dark_mode
        self._commit(FlowAction.dark_mode_toggled, {"is_dark_mode": is_dark_mode}, is_dark_mode=is_dark_mode)

    def set_viewport(self, viewport: Viewport | dict) -> None:
        try:
            viewport = Viewport.model_validate(viewport).model_copy()
        except ValidationError as e:
            logger.warning("rejected viewport %r: %s", viewport, e)
            return
        self._set_viewport(viewport)

    def reset_viewport(self) -> None:
        self._set_viewport(Viewport())

    def _set_viewport(self, viewport: Viewport) -> None:
        if viewport == self._state.viewport:
            return
        self._commit(FlowAction.viewport_changed, viewport.model_dump(), viewport=viewport)

    def clear_flow(self) -> None:
        """Drop every screen and edge, clear selection, reset the viewport."""
        self._commit(
            FlowAction.flow_cleared,
            nodes=[],
            edges=[],
            selected_node_id=None,
            selected_screen_id=None,
            viewport=Viewport(),
        )

    # ------------------------------------------------------------------
    # import / export

    def export_flow(self) -> str:
        """Serialize nodes, edges and viewport into the JSON document."""
        state = self._state
        return dump_flow(state.nodes, state.edges, state.viewport, indent=self.settings.export_indent)

    def import_flow(self, flow_data: str, strict: bool = False) -> bool:
        """Replace the flow with a JSON document.

        Returns False and leaves the store untouched if the document does
        not parse or fails validation.
        """
        try:
            document = load_flow(flow_data, strict=strict)
        except FlowImportError as e:
            logger.warning("flow import failed: %s", e)
            return False

        self._commit(
            FlowAction.flow_imported,
            {"nodes": len(document.nodes), "edges": len(document.edges)},
            nodes=document.nodes,
            edges=document.edges,
            viewport=document.viewport,
            selected_node_id=None,
            selected_screen_id=None,
        )
        return True

    def export(self, fmt: ExportFormat | str = ExportFormat.json) -> str:
        """Export the flow as the JSON document, documentation JSON, or Mermaid.

        Raises:
            ValueError: if ``fmt`` is not an export format.
        """
        fmt = ExportFormat(fmt)
        state = self._state
        if fmt is ExportFormat.documentation:
            documentation = build_flow_documentation(state.nodes, state.edges)
            return json.dumps(documentation.to_dict(), indent=self.settings.export_indent or None)
        if fmt is ExportFormat.mermaid:
            return to_mermaid(state.nodes, state.edges)
        return self.export_flow()

    def __repr__(self) -> str:
        state = self._state
        return f"FlowStore(screens={len(state.nodes)}, edges={len(state.edges)})"
