"""Tests for documentation and Mermaid exports."""

import json

import pytest

from screenflow.analysis.documentation import (
    build_flow_documentation,
    screen_documentation,
    screen_llm_prompt,
)
from screenflow.analysis.mermaid import to_mermaid
from screenflow.config import FlowSettings
from screenflow.models.flow import ExportFormat, FlowEdge, FlowNode
from screenflow.store import FlowStore


def _checkout_flow() -> tuple[FlowStore, dict[str, str]]:
    store = FlowStore(settings=FlowSettings())
    ids = {
        "login": store.add_screen("login-screen", {"x": 0, "y": 0}),
        "dashboard": store.add_screen("dashboard-screen", {"x": 500, "y": 0}),
        "orders": store.add_screen("list-screen", {"x": 1000, "y": 0}),
        "settings": store.add_screen("settings-screen", {"x": 0, "y": 500}),
    }
    store.add_component_to_screen(ids["login"], "input", {"x": 0, "y": 0})
    store.add_component_to_screen(ids["login"], "button", {"x": 0, "y": 0})
    api = store.add_component_to_screen(ids["login"], "api-call", {"x": 0, "y": 0})
    store.update_component_in_screen(
        ids["login"], api, name="Authenticate", properties={"method": "POST", "endpoint": "/api/login"}
    )
    store.add_component_to_screen(ids["orders"], "database", {"x": 0, "y": 0})
    store.connect(ids["login"], ids["dashboard"])
    store.connect(ids["dashboard"], ids["orders"])
    store.connect(ids["orders"], ids["dashboard"])
    return store, ids


class TestFlowDocumentation:
    """Test the whole-flow documentation."""

    def test_screens_and_connections(self):
        store, ids = _checkout_flow()
        doc = build_flow_documentation(store.nodes, store.edges, title="Checkout")

        assert doc.title == "Checkout"
        assert [s.id for s in doc.screens] == list(ids.values())
        dashboard = doc.screens[1]
        assert dashboard.connections.inputs == [ids["login"], ids["orders"]]
        assert dashboard.connections.outputs == [ids["orders"]]
        login = doc.screens[0]
        assert [c.type for c in login.components] == ["input", "button", "api-call"]
        assert login.components[2].label == "Authenticate"

    def test_steps_follow_navigation(self):
        store, _ = _checkout_flow()
        doc = build_flow_documentation(store.nodes, store.edges)

        assert doc.flow.steps == [
            "1. Login Screen -> Dashboard",
            "2. Dashboard -> List Screen",
            "3. List Screen -> Dashboard",
            "4. Settings Screen",
        ]

    def test_technical_requirements(self):
        store, _ = _checkout_flow()
        requirements = build_flow_documentation(store.nodes, store.edges).technical_requirements

        assert requirements.apis == ["POST /api/login"]
        assert requirements.database == ["SELECT on users"]
        assert "input component" in requirements.frontend
        assert any("Authenticate" in item for item in requirements.backend)

    def test_notes(self):
        store, _ = _checkout_flow()
        notes = build_flow_documentation(store.nodes, store.edges).implementation_notes
        assert "2 logic component(s) need server-side implementation" in notes
        assert "Screens without navigation: Settings Screen" in notes

    def test_empty_flow(self):
        doc = build_flow_documentation([], [])
        assert doc.screens == []
        assert doc.flow.steps == []
        assert doc.to_dict()["technical_requirements"] == {
            "frontend": [],
            "backend": [],
            "database": [],
            "apis": [],
        }


class TestScreenDocumentation:
    """Test single-screen documentation."""

    def test_screen_documentation(self):
        store, ids = _checkout_flow()
        doc = screen_documentation(store.get_screen(ids["login"]))

        assert doc["screen"]["type"] == "login-screen"
        assert doc["screen"]["screenSize"] == {"width": 400, "height": 320}
        assert len(doc["screen"]["components"]) == 3
        assert set(doc["implementation"]) == {"frontend", "backend", "database"}
        json.dumps(doc)

    def test_llm_prompt(self):
        store, ids = _checkout_flow()
        prompt = screen_llm_prompt(store.get_screen(ids["login"]))

        assert prompt.startswith("Create a login-screen")
        assert "Size: 400x320" in prompt
        assert "Component Types: input, button, api-call" in prompt


class TestMermaid:
    """Test the Mermaid flowchart."""

    def test_flowchart(self):
        store, ids = _checkout_flow()
        text = to_mermaid(store.nodes, store.edges)
        lines = text.splitlines()

        assert lines[0] == "flowchart TD"
        assert f'    {ids["login"]}["Login Screen<br/>3 component(s)"]' in lines
        assert f'    {ids["login"]} -.-> {ids["dashboard"]}' in lines

    def test_ids_and_labels_are_escaped(self):
        store = FlowStore(settings=FlowSettings())
        screen_id = store.add_screen("form-screen", {"x": 0, "y": 0})
        store.update_screen_data(screen_id, label='Say "hi"')
        text = store.export(ExportFormat.mermaid)
        assert "#quot;hi#quot;" in text

    def test_colliding_ids_stay_distinct(self):
        data = {"label": "Screen", "category": "form-screen"}
        nodes = [
            FlowNode(id=node_id, type="form-screen", position={"x": 0, "y": 0}, data=data)
            for node_id in ("a-b", "a_b", "a.b")
        ]
        edges = [
            FlowEdge(id="e1", source="a-b", target="a_b", animated=False),
            FlowEdge(id="e2", source="a.b", target="a-b", animated=True),
        ]

        lines = to_mermaid(nodes, edges).splitlines()

        declared = [line.split("[", 1)[0].strip() for line in lines[1:4]]
        assert declared == ["a_b", "a_b_2", "a_b_3"]
        assert lines[4:] == ["    a_b --> a_b_2", "    a_b_3 -.-> a_b"]


class TestStoreExport:
    """Test FlowStore.export formats."""

    def test_documentation_format(self):
        store, _ = _checkout_flow()
        doc = json.loads(store.export("documentation"))
        assert len(doc["screens"]) == 4

    def test_json_format_matches_export_flow(self):
        store, _ = _checkout_flow()
        exported = json.loads(store.export())
        assert exported["nodes"] == json.loads(store.export_flow())["nodes"]

    def test_unknown_format(self):
        store, _ = _checkout_flow()
        with pytest.raises(ValueError):
            store.export("pdf")
