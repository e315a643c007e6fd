"""Integration tests for the editing workflow."""

import json

from screenflow import FlowStore, FlowSettings, ScreenKind
from screenflow.adapters.event_api import EventEmitter, FileSink, ListSink
from screenflow.models.flow_event import FlowAction, FlowEvent


class TestEditingScenario:
    """Build a flow, reorder, export and import it again."""

    def test_end_to_end(self):
        store = FlowStore(settings=FlowSettings())

        screen_id = store.add_screen("login-screen", {"x": 100, "y": 100})
        screen = store.get_screen(screen_id)
        assert screen.data.components == []
        assert (screen.data.screen_size.width, screen.data.screen_size.height) == (400, 300)

        c0, c1, c2 = (
            store.add_component_to_screen(screen_id, "button", {"x": 0, "y": 0})
            for _ in range(3)
        )
        screen = store.get_screen(screen_id)
        assert len(screen.data.components) == 3
        assert screen.data.screen_size.height == 320

        store.reorder_component_in_screen(screen_id, 0, 2)
        assert [c.id for c in store.get_screen(screen_id).data.components] == [c1, c2, c0]

        nodes_before = [n.model_dump() for n in store.nodes]
        edges_before = [e.model_dump() for e in store.edges]
        exported = store.export_flow()

        assert store.import_flow(exported) is True
        assert [n.model_dump() for n in store.nodes] == nodes_before
        assert [e.model_dump() for e in store.edges] == edges_before

    def test_sinks_see_the_whole_session(self, tmp_path):
        memory = ListSink()
        file_sink = FileSink(tmp_path / "session.jsonl")
        store = FlowStore(settings=FlowSettings(), sinks=[memory, file_sink])

        login = store.add_screen(ScreenKind.login, {"x": 0, "y": 0})
        home = store.add_screen(ScreenKind.dashboard, {"x": 400, "y": 0})
        store.connect(login, home)
        store.delete_screen(home)

        actions = [event.action for event in memory.events]
        assert actions == [
            FlowAction.screen_added,
            FlowAction.screen_added,
            FlowAction.edge_connected,
            FlowAction.screen_deleted,
        ]
        assert memory.events[-1].payload == {"screen_id": home, "edges_removed": 1}

        logged = [
            FlowEvent.model_validate_json(line)
            for line in file_sink.path.read_text().splitlines()
        ]
        assert [event.event_id for event in logged] == [event.event_id for event in memory.events]


class TestEventEmitter:
    """Test the emitter on its own."""

    def test_sequence_and_payload(self):
        sink = ListSink()
        emitter = EventEmitter([sink])

        first = emitter.emit(FlowAction.flow_cleared)
        second = emitter.emit(FlowAction.tool_selected, {"tool": "pan"})

        assert (first.sequence, second.sequence) == (0, 1)
        assert first.payload == {}
        assert sink.events == [first, second]
        json.loads(second.model_dump_json())

    def test_remove_sink_twice(self):
        sink = ListSink()
        emitter = EventEmitter([sink])
        emitter.remove_sink(sink)
        emitter.remove_sink(sink)
        emitter.emit(FlowAction.flow_cleared)
        assert sink.events == []

    def test_list_sink_clear(self):
        sink = ListSink()
        EventEmitter([sink]).emit(FlowAction.flow_cleared)
        sink.clear()
        assert sink.events == []
