"""Documentation generated from a flow.

``build_flow_documentation`` describes the whole flow: its screens, their
components and connections, the navigation order, and the technical
requirements implied by the components used. ``screen_documentation``
covers a single screen and includes a prompt for generating it.
"""

from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any

from screenflow.catalog import LOGIC_COMPONENT_KINDS
from screenflow.models.flow import ComponentKind, FlowEdge, FlowNode


@dataclass
class ComponentDoc:
    id: str
    type: str
    label: str
    description: str
    properties: dict[str, Any]
    position: dict[str, float]


@dataclass
class ScreenConnections:
    """Ids of the screens linking into and out of a screen."""

    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)


@dataclass
class ScreenDoc:
    id: str
    type: str
    label: str
    description: str
    components: list[ComponentDoc]
    connections: ScreenConnections


@dataclass
class FlowSteps:
    description: str
    steps: list[str]


@dataclass
class TechnicalRequirements:
    frontend: list[str] = field(default_factory=list)
    backend: list[str] = field(default_factory=list)
    database: list[str] = field(default_factory=list)
    apis: list[str] = field(default_factory=list)


@dataclass
class FlowDocumentation:
    """Structured description of a flow, ready to be dumped as JSON."""

    title: str
    description: str
    screens: list[ScreenDoc]
    flow: FlowSteps
    technical_requirements: TechnicalRequirements
    implementation_notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def _navigation_order(nodes: list[FlowNode], edges: list[FlowEdge]) -> list[FlowNode]:
    """Screens in breadth-first order from the entry screens.

    Entry screens are those without incoming edges; screens only reachable
    through cycles, or not reachable at all, follow in canvas order.
    """
    by_id = {node.id: node for node in nodes}
    outgoing: dict[str, list[str]] = {node.id: [] for node in nodes}
    has_incoming: set[str] = set()
    for edge in edges:
        if edge.source in by_id and edge.target in by_id:
            outgoing[edge.source].append(edge.target)
            if edge.source != edge.target:
                has_incoming.add(edge.target)

    ordered: list[FlowNode] = []
    seen: set[str] = set()
    roots = [node.id for node in nodes if node.id not in has_incoming]
    for start in roots + [node.id for node in nodes]:
        if start in seen:
            continue
        queue = deque([start])
        seen.add(start)
        while queue:
            current = queue.popleft()
            ordered.append(by_id[current])
            for target in outgoing[current]:
                if target not in seen:
                    seen.add(target)
                    queue.append(target)
    return ordered


def _describe_steps(ordered: list[FlowNode], edges: list[FlowEdge]) -> list[str]:
    labels = {node.id: node.data.label for node in ordered}
    steps = []
    for number, node in enumerate(ordered, start=1):
        targets = []
        for edge in edges:
            if edge.source == node.id and edge.target in labels and labels[edge.target] not in targets:
                targets.append(labels[edge.target])
        step = f"{number}. {node.data.label}"
        if targets:
            step += f" -> {', '.join(targets)}"
        steps.append(step)
    return steps


def _technical_requirements(nodes: list[FlowNode]) -> TechnicalRequirements:
    requirements = TechnicalRequirements()

    def add(bucket: list[str], item: str) -> None:
        if item not in bucket:
            bucket.append(item)

    for node in nodes:
        add(requirements.frontend, f"{node.data.label} screen ({node.type.value})")
        for component in node.data.components:
            props = component.properties
            if component.category is ComponentKind.api_call:
                method = props.get("method", "GET")
                endpoint = props.get("endpoint", "")
                add(requirements.apis, f"{method} {endpoint}".strip())
                add(requirements.backend, f"{component.display_name}: handler for {method} {endpoint}".strip())
            elif component.category is ComponentKind.database:
                operation = props.get("operation", "")
                table = props.get("table", "")
                add(requirements.database, f"{operation} on {table}" if table else operation)
            elif component.category is ComponentKind.logic:
                add(requirements.backend, f"{component.display_name}: {props.get('operation', 'logic')}")
            else:
                add(requirements.frontend, f"{component.category.value} component")
    return requirements


def build_flow_documentation(
    nodes: list[FlowNode],
    edges: list[FlowEdge],
    title: str = "Application Flow",
    description: str | None = None,
) -> FlowDocumentation:
    """Describe a flow as screens, navigation steps and requirements."""
    screen_ids = {node.id for node in nodes}
    connections = {node.id: ScreenConnections() for node in nodes}
    for edge in edges:
        if edge.source in screen_ids and edge.target in screen_ids:
            connections[edge.source].outputs.append(edge.target)
            connections[edge.target].inputs.append(edge.source)

    screens = [
        ScreenDoc(
            id=node.id,
            type=node.type.value,
            label=node.data.label,
            description=node.data.description or "",
            components=[
                ComponentDoc(
                    id=component.id,
                    type=component.category.value,
                    label=component.display_name,
                    description=component.description or "",
                    properties=dict(component.properties),
                    position=component.position.model_dump(),
                )
                for component in node.data.components
            ],
            connections=connections[node.id],
        )
        for node in nodes
    ]

    ordered = _navigation_order(nodes, edges)
    notes = []
    logic_count = sum(
        1
        for node in nodes
        for component in node.data.components
        if component.category in LOGIC_COMPONENT_KINDS
    )
    if logic_count:
        notes.append(f"{logic_count} logic component(s) need server-side implementation")
    orphans = [node.data.label for node in nodes if not connections[node.id].inputs and not connections[node.id].outputs]
    if len(nodes) > 1 and orphans:
        notes.append(f"Screens without navigation: {', '.join(orphans)}")

    return FlowDocumentation(
        title=title,
        description=description or f"Flow with {len(nodes)} screen(s) and {len(edges)} connection(s)",
        screens=screens,
        flow=FlowSteps(
            description="Screens in navigation order, starting from entry screens",
            steps=_describe_steps(ordered, edges),
        ),
        technical_requirements=_technical_requirements(nodes),
        implementation_notes=notes,
    )


def screen_llm_prompt(node: FlowNode) -> str:
    """Prompt asking for an implementation of one screen."""
    data = node.data
    size = data.screen_size
    kinds = ", ".join(component.category.value for component in data.components)
    return f"""Create a {node.type.value} with the following specifications:

Screen: {data.label}
Description: {data.description or 'No description provided'}

Type: {node.type.value}

Screen Details:
- Size: {size.width:g}x{size.height:g}
- Components: {len(data.components)} components inside
- Component Types: {kinds}

Requirements:
1. Follow modern web development best practices
2. Ensure accessibility compliance (WCAG 2.1)
3. Include proper error handling
4. Write unit tests for core functionality
5. Add comprehensive documentation

Please provide:
1. Complete screen implementation
2. Screen layout with all components
3. Type definitions
4. Unit tests
5. Usage examples
6. Documentation"""


def screen_documentation(node: FlowNode) -> dict:
    """Implementation notes and a generation prompt for one screen."""
    data = node.data
    summary = {
        "type": node.type.value,
        "label": data.label,
        "description": data.description or "",
    }
    return {
        "screen": {
            "type": node.type.value,
            "label": data.label,
            "description": data.description,
            "components": [c.model_dump(by_alias=True, exclude_none=True, mode="json") for c in data.components],
            "screenSize": data.screen_size.model_dump(),
        },
        "implementation": {
            "frontend": {**summary, "notes": "Screen-based frontend implementation with components"},
            "backend": {**summary, "notes": "Backend API endpoints and data flow"},
            "database": {**summary, "notes": "Database schema and relationships"},
        },
        "llm_prompt": screen_llm_prompt(node),
    }
