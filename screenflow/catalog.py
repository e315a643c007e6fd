"""Static per-kind defaults for screens and components.

The catalog is consulted when the store creates a screen or component and
is never modified at runtime. ``component_defaults`` returns a fresh copy of
the initial properties on every call, so created components never share a
properties map.
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from screenflow.models.flow import ComponentKind, ScreenKind


@dataclass(frozen=True)
class ScreenTemplate:
    """Default label, description and visual tag for a screen kind."""

    label: str
    description: str
    visual_tag: str


@dataclass(frozen=True)
class ComponentTemplate:
    """Defaults for a component kind, including its initial properties."""

    label: str
    description: str
    visual_tag: str
    initial_properties: dict[str, Any] = field(default_factory=dict)
    is_logic: bool = False


SCREEN_CATALOG: dict[ScreenKind, ScreenTemplate] = {
    ScreenKind.login: ScreenTemplate(
        label="Login Screen",
        description="User authentication interface",
        visual_tag="from-indigo-500 to-purple-600",
    ),
    ScreenKind.dashboard: ScreenTemplate(
        label="Dashboard",
        description="Main application dashboard",
        visual_tag="from-blue-500 to-cyan-600",
    ),
    ScreenKind.form: ScreenTemplate(
        label="Form Screen",
        description="Data input and forms",
        visual_tag="from-green-500 to-emerald-600",
    ),
    ScreenKind.list: ScreenTemplate(
        label="List Screen",
        description="Data listing and tables",
        visual_tag="from-orange-500 to-red-600",
    ),
    ScreenKind.detail: ScreenTemplate(
        label="Detail Screen",
        description="Item details and information",
        visual_tag="from-violet-500 to-purple-600",
    ),
    ScreenKind.settings: ScreenTemplate(
        label="Settings Screen",
        description="Application configuration",
        visual_tag="from-gray-500 to-slate-600",
    ),
}


COMPONENT_CATALOG: dict[ComponentKind, ComponentTemplate] = {
    ComponentKind.button: ComponentTemplate(
        label="Button",
        description="Clickable button element",
        visual_tag="from-blue-400 to-blue-600",
        initial_properties={
            "text": "Click me",
            "variant": "primary",
            "size": "medium",
            "disabled": False,
        },
    ),
    ComponentKind.input: ComponentTemplate(
        label="Input",
        description="Text input field",
        visual_tag="from-green-400 to-green-600",
        initial_properties={
            "type": "text",
            "placeholder": "Enter value...",
            "required": False,
            "disabled": False,
        },
    ),
    ComponentKind.text: ComponentTemplate(
        label="Text",
        description="Static text element",
        visual_tag="from-gray-400 to-gray-600",
        initial_properties={
            "content": "Sample text",
            "fontSize": "14px",
            "fontWeight": "normal",
            "color": "#000000",
        },
    ),
    ComponentKind.textarea: ComponentTemplate(
        label="TextArea",
        description="Multi-line text input",
        visual_tag="from-green-400 to-emerald-600",
        initial_properties={
            "placeholder": "Enter text...",
            "rows": 3,
            "required": False,
            "disabled": False,
        },
    ),
    ComponentKind.select: ComponentTemplate(
        label="Select",
        description="Dropdown selection",
        visual_tag="from-purple-400 to-purple-600",
        initial_properties={
            "options": ["Option 1", "Option 2", "Option 3"],
            "defaultValue": "",
            "required": False,
            "disabled": False,
        },
    ),
    ComponentKind.checkbox: ComponentTemplate(
        label="Checkbox",
        description="Checkbox input",
        visual_tag="from-teal-400 to-teal-600",
        initial_properties={
            "label": "Checkbox label",
            "checked": False,
            "disabled": False,
        },
    ),
    ComponentKind.radio: ComponentTemplate(
        label="Radio",
        description="Radio button input",
        visual_tag="from-cyan-400 to-cyan-600",
        initial_properties={
            "name": "radioGroup",
            "value": "option1",
            "label": "Radio option",
            "disabled": False,
        },
    ),
    ComponentKind.image: ComponentTemplate(
        label="Image",
        description="Image display",
        visual_tag="from-pink-400 to-pink-600",
        initial_properties={
            "src": "/placeholder.jpg",
            "alt": "Image description",
            "width": 200,
            "height": 150,
        },
    ),
    ComponentKind.card: ComponentTemplate(
        label="Card",
        description="Card container",
        visual_tag="from-indigo-400 to-indigo-600",
        initial_properties={
            "title": "Card Title",
            "content": "Card content",
            "footer": "",
            "padding": "16px",
        },
    ),
    ComponentKind.modal: ComponentTemplate(
        label="Modal",
        description="Modal dialog",
        visual_tag="from-violet-400 to-violet-600",
        initial_properties={
            "title": "Modal Title",
            "content": "Modal content",
            "closable": True,
            "size": "medium",
        },
    ),
    ComponentKind.table: ComponentTemplate(
        label="Table",
        description="Data table",
        visual_tag="from-orange-400 to-orange-600",
        initial_properties={
            "columns": ["Column 1", "Column 2", "Column 3"],
            "data": [],
            "sortable": True,
            "pagination": False,
        },
    ),
    ComponentKind.list: ComponentTemplate(
        label="List",
        description="List of items",
        visual_tag="from-yellow-400 to-yellow-600",
        initial_properties={
            "items": ["Item 1", "Item 2", "Item 3"],
            "ordered": False,
            "selectable": False,
        },
    ),
    ComponentKind.api_call: ComponentTemplate(
        label="API Call",
        description="External API integration",
        visual_tag="from-purple-400 to-violet-400",
        initial_properties={
            "method": "GET",
            "endpoint": "/api/data",
            "headers": {},
            "body": "",
        },
        is_logic=True,
    ),
    ComponentKind.logic: ComponentTemplate(
        label="Logic",
        description="Business logic or computation",
        visual_tag="from-amber-400 to-orange-400",
        initial_properties={
            "operation": "filter",
            "condition": "",
            "transformation": "",
        },
        is_logic=True,
    ),
    ComponentKind.database: ComponentTemplate(
        label="Database",
        description="Data storage or retrieval",
        visual_tag="from-red-400 to-pink-400",
        initial_properties={
            "operation": "SELECT",
            "table": "users",
            "query": "",
            "fields": [],
        },
        is_logic=True,
    ),
}

SCREEN_KINDS: tuple[ScreenKind, ...] = tuple(SCREEN_CATALOG)
COMPONENT_KINDS: tuple[ComponentKind, ...] = tuple(COMPONENT_CATALOG)
LOGIC_COMPONENT_KINDS: frozenset[ComponentKind] = frozenset(
    kind for kind, template in COMPONENT_CATALOG.items() if template.is_logic
)


def screen_defaults(kind: ScreenKind | str) -> ScreenTemplate:
    """Look up the defaults for a screen kind.

    Raises:
        ValueError: if ``kind`` is not one of the screen kinds.
    """
    return SCREEN_CATALOG[ScreenKind(kind)]


def component_defaults(kind: ComponentKind | str) -> ComponentTemplate:
    """Look up the defaults for a component kind.

    The returned template carries its own copy of ``initial_properties``.

    Raises:
        ValueError: if ``kind`` is not one of the component kinds.
    """
    template = COMPONENT_CATALOG[ComponentKind(kind)]
    return ComponentTemplate(
        label=template.label,
        description=template.description,
        visual_tag=template.visual_tag,
        initial_properties=copy.deepcopy(template.initial_properties),
        is_logic=template.is_logic,
    )
