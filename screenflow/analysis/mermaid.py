"""Mermaid flowchart export."""

import re

from screenflow.models.flow import FlowEdge, FlowNode
from screenflow.utils.geometry import format_node_label

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")


def _mermaid_ids(nodes: list[FlowNode]) -> dict[str, str]:
    """Map screen ids to distinct Mermaid-safe identifiers.

    Unsafe characters become ``_``; when two screens collapse to the same
    identifier the later one gets a ``_2``, ``_3``... suffix.
    """
    aliases: dict[str, str] = {}
    taken: set[str] = set()
    for node in nodes:
        if node.id in aliases:
            continue
        base = _UNSAFE_ID_CHARS.sub("_", node.id) or "screen"
        alias, suffix = base, 2
        while alias in taken:
            alias = f"{base}_{suffix}"
            suffix += 1
        aliases[node.id] = alias
        taken.add(alias)
    return aliases


def _mermaid_label(text: str) -> str:
    return format_node_label(text, max_length=30).replace('"', "#quot;")


def to_mermaid(nodes: list[FlowNode], edges: list[FlowEdge]) -> str:
    """Render screens and navigation edges as a top-down Mermaid flowchart.

    Edges whose endpoints are not in ``nodes`` are skipped.
    """
    lines = ["flowchart TD"]
    aliases = _mermaid_ids(nodes)
    for node in nodes:
        count = len(node.data.components)
        label = _mermaid_label(node.data.label)
        lines.append(f'    {aliases[node.id]}["{label}<br/>{count} component(s)"]')
    for edge in edges:
        if edge.source not in aliases or edge.target not in aliases:
            continue
        arrow = "-.->" if edge.animated else "-->"
        lines.append(f"    {aliases[edge.source]} {arrow} {aliases[edge.target]}")
    return "\n".join(lines) + "\n"
