"""Documentation and diagram exports for flows."""

from screenflow.analysis.documentation import (
    ComponentDoc,
    FlowDocumentation,
    FlowSteps,
    ScreenConnections,
    ScreenDoc,
    TechnicalRequirements,
    build_flow_documentation,
    screen_documentation,
    screen_llm_prompt,
)
from screenflow.analysis.mermaid import to_mermaid

__all__ = [
    # documentation exports
    "ComponentDoc",
    "FlowDocumentation",
    "FlowSteps",
    "ScreenConnections",
    "ScreenDoc",
    "TechnicalRequirements",
    "build_flow_documentation",
    "screen_documentation",
    "screen_llm_prompt",
    # diagrams
    "to_mermaid",
]
