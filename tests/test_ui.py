"""Tests for walktime_planner UI components.

Tests: MapSurface, DrawToolStateMachine, DrawTool, ClickDetector,
parse_deckgl_event, MapRenderer, WalkTimeChart, build_context_message
Focus: Draw tool state transitions and the events they hand to the engine

Note: State machines are created without StreamlitUIListener, so
transitions never call st.rerun().
"""

from collections.abc import Callable

import pytest

from walktime_planner.constants import StyleConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.click_info import MapClickType, MarkerType
from walktime_planner.model.message import (
    DrawingContextMessage,
    EditingContextMessage,
    IdleContextMessage,
    RemovingContextMessage,
)
from walktime_planner.model.path_label import LabelKind, PathLabel
from walktime_planner.ui.bottom_chart import WalkTimeChart
from walktime_planner.ui.center_map import MapRenderer
from walktime_planner.ui.click_detector import ClickDetector
from walktime_planner.ui.click_handlers import get_click_handler, handle_idle_click
from walktime_planner.ui.context import ClickDeduplicationContext, DrawContext, MapContext, RemovalContext
from walktime_planner.ui.draw_tool import DrawTool
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.pydeck_click_handler import parse_deckgl_event
from walktime_planner.ui.right_panel import build_context_message
from walktime_planner.ui.state_machine import DrawToolStateMachine

A = LatLng(lat=33.6400, lng=-84.4300)
B = LatLng(lat=33.6410, lng=-84.4290)
C = LatLng(lat=33.6420, lng=-84.4300)
D = LatLng(lat=33.6405, lng=-84.4310)


@pytest.fixture
def tool(
    sm_and_ctx: tuple[DrawToolStateMachine, DrawContext], surface: MapSurface, engine: AnnotationEngine
) -> DrawTool:
    sm, _ = sm_and_ctx
    return DrawTool(sm=sm, surface=surface, engine=engine)


def _draw_path(tool: DrawTool, *vertices: LatLng) -> None:
    tool.begin(vertex=vertices[0])
    for vertex in vertices[1:]:
        tool.add_vertex(vertex=vertex)
    assert tool.finish()


# =============================================================================
# MAP SURFACE
# =============================================================================


class TestMapSurface:
    """MapSurface - in-memory layers and labels."""

    def test_layer_handles_are_unique(self, surface: MapSurface) -> None:
        first = surface.add_layer(vertices=[A, B], color="#3388ff")
        second = surface.add_layer(vertices=[A, B], color="#3388ff")
        assert first != second
        assert first.startswith("layer-")

    def test_remove_layer_is_idempotent(self, surface: MapSurface) -> None:
        handle = surface.add_layer(vertices=[A, B], color="#3388ff")
        surface.remove_layer(handle=handle)
        surface.remove_layer(handle=handle)
        assert surface.layers == {}

    def test_style_unknown_layer_ignored(self, surface: MapSurface) -> None:
        surface.style_layer(handle="layer-9", color="#000000")
        assert surface.layers == {}

    def test_set_layer_vertices(self, surface: MapSurface) -> None:
        handle = surface.add_layer(vertices=[A, B], color="#3388ff")
        assert surface.set_layer_vertices(handle=handle, vertices=[A, C]) is True
        assert surface.layer_vertices(handle) == [A, C]
        assert surface.set_layer_vertices(handle="layer-9", vertices=[A]) is False
        assert surface.layer_vertices("layer-9") is None

    def test_labels(self, surface: MapSurface) -> None:
        label = PathLabel(position=A, text="3m", kind=LabelKind.SEGMENT)
        handle = surface.place_label(label=label, color="#ff6b6b")
        assert surface.rendered_labels[handle].label == label

        surface.remove_label(handle)
        surface.remove_label(handle)
        assert surface.rendered_labels == {}


# =============================================================================
# STATE MACHINE
# =============================================================================


class TestDrawToolStateMachine:
    """DrawToolStateMachine - states, guards and hooks."""

    def test_starts_idle(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, ctx = sm_and_ctx
        assert sm.is_idle
        assert sm.get_state_name() == "Idle"
        assert ctx.state == "idle"

    def test_start_path_seeds_sketch(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, ctx = sm_and_ctx
        sm.start_path(vertex=A)
        assert sm.is_drawing
        assert ctx.sketch.vertices == [A]

    def test_start_path_while_drawing_discards_sketch(
        self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]
    ) -> None:
        sm, ctx = sm_and_ctx
        sm.start_path(vertex=A)
        sm.add_vertex(vertex=B)
        sm.start_path(vertex=C)
        assert ctx.sketch.vertices == [C]

    def test_finish_requires_two_vertices(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, ctx = sm_and_ctx
        sm.start_path(vertex=A)

        assert sm.try_transition("finish_path") is False
        assert sm.is_drawing

        sm.add_vertex(vertex=B)
        assert sm.try_transition("finish_path") is True
        assert sm.is_idle
        assert ctx.sketch.vertices == [], "Entering idle clears the sketch"

    def test_remove_last_vertex_leaves_drawing_when_empty(
        self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]
    ) -> None:
        sm, ctx = sm_and_ctx
        sm.start_path(vertex=A)
        sm.add_vertex(vertex=B)

        sm.remove_last_vertex()
        assert sm.is_drawing
        assert ctx.sketch.vertices == [A]

        sm.remove_last_vertex()
        assert sm.is_idle

    def test_invalid_transition_returns_false(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, _ = sm_and_ctx
        assert sm.try_transition("save_edits") is False
        assert sm.try_transition("add_vertex", vertex=A) is False
        assert sm.is_idle

    def test_modes_only_from_idle(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, _ = sm_and_ctx
        sm.start_path(vertex=A)
        assert sm.try_transition("start_removing") is False
        assert sm.is_drawing

    def test_state_change_clears_marker_dedup(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        """The same object may be clicked again after a state change."""
        sm, ctx = sm_and_ctx
        ctx.click_dedup.last_object_id = "path_layer-1_v0"
        sm.start_removing()
        assert ctx.click_dedup.last_object_id is None


# =============================================================================
# DRAW TOOL
# =============================================================================


class TestDrawToolDrawing:
    """DrawTool - sketching and finishing paths."""

    def test_finish_emits_path_finished(self, tool: DrawTool, surface: MapSurface, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B, C)

        assert tool.sm.is_idle
        path = engine.get_path("path-1")
        assert path.vertices == [A, B, C]
        handle = engine.registry.layer_for_path("path-1")
        assert surface.layers[handle].color == StyleConfig.PATH_COLORS[0]
        assert engine.undo_depth == 1

    def test_finish_refused_with_one_vertex(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        tool.begin(vertex=A)
        assert tool.finish() is False
        assert tool.sm.is_drawing
        assert engine.paths() == []

    def test_finish_when_idle_does_nothing(self, tool: DrawTool) -> None:
        assert tool.finish() is False

    def test_cancel_drawing(self, tool: DrawTool, surface: MapSurface) -> None:
        tool.begin(vertex=A)
        tool.add_vertex(vertex=B)
        assert tool.cancel_drawing()
        assert tool.sm.is_idle
        assert surface.layers == {}


class TestDrawToolEditing:
    """DrawTool - vertex editing and the PathEdited event."""

    def test_start_editing_requires_layers(self, tool: DrawTool) -> None:
        assert tool.start_editing() is False
        assert tool.sm.is_idle

    def test_move_and_save(self, tool: DrawTool, surface: MapSurface, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        handle = engine.registry.layer_for_path("path-1")
        assert tool.start_editing()

        assert tool.select_vertex(handle=handle, index=1)
        assert tool.move_selected_vertex(vertex=C)
        assert surface.layer_vertices(handle) == [A, C]
        assert engine.get_path("path-1").vertices == [A, B], "Engine unchanged until save"

        assert tool.save_edits() == 1
        assert tool.sm.is_idle
        assert engine.get_path("path-1").vertices == [A, C]
        assert engine.undo_depth == 1

    def test_save_without_changes_emits_nothing(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        received = []
        engine.subscribe(received.append)
        tool.start_editing()

        assert tool.save_edits() == 0
        assert received == []
        assert tool.sm.is_idle

    def test_cancel_restores_geometry(self, tool: DrawTool, surface: MapSurface, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        handle = engine.registry.layer_for_path("path-1")
        tool.start_editing()
        tool.select_vertex(handle=handle, index=0)
        tool.move_selected_vertex(vertex=D)

        assert tool.cancel_edits()
        assert surface.layer_vertices(handle) == [A, B]
        assert engine.get_path("path-1").vertices == [A, B]

    def test_delete_vertex_keeps_two(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B, C)
        handle = engine.registry.layer_for_path("path-1")
        tool.start_editing()

        tool.select_vertex(handle=handle, index=1)
        assert tool.delete_selected_vertex()
        tool.select_vertex(handle=handle, index=0)
        assert tool.delete_selected_vertex() is False

        tool.save_edits()
        assert engine.get_path("path-1").vertices == [A, C]

    def test_select_invalid_vertex(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        handle = engine.registry.layer_for_path("path-1")
        tool.start_editing()
        assert tool.select_vertex(handle=handle, index=5) is False
        assert tool.select_vertex(handle="layer-99", index=0) is False

    def test_move_without_selection(self, tool: DrawTool) -> None:
        _draw_path(tool, A, B)
        tool.start_editing()
        assert tool.move_selected_vertex(vertex=C) is False


class TestDrawToolRemoving:
    """DrawTool - removal mode and the PathRemoved event."""

    def test_remove_marked_paths(self, tool: DrawTool, surface: MapSurface, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        _draw_path(tool, C, D)
        first = engine.registry.layer_for_path("path-1")
        assert tool.start_removing()

        assert tool.toggle_removal(handle=first) is True
        assert tool.save_removal() == 1

        assert tool.sm.is_idle
        assert [p.id for p in engine.paths()] == ["path-2"]
        assert first not in surface.layers
        assert engine.undo_depth == 2, "Tool removal adds no undo entry"

    def test_toggle_twice_unmarks(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        handle = engine.registry.layer_for_path("path-1")
        tool.start_removing()
        tool.toggle_removal(handle=handle)
        assert tool.toggle_removal(handle=handle) is False
        assert tool.save_removal() == 0
        assert len(engine.paths()) == 1

    def test_toggle_unknown_layer(self, tool: DrawTool) -> None:
        _draw_path(tool, A, B)
        tool.start_removing()
        assert tool.toggle_removal(handle="layer-42") is False

    def test_cancel_removal_keeps_paths(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        _draw_path(tool, A, B)
        tool.start_removing()
        tool.toggle_removal(handle=engine.registry.layer_for_path("path-1"))
        assert tool.cancel_removal()
        assert len(engine.paths()) == 1
        assert tool.ctx.removal.marked == []


# =============================================================================
# CLICK DETECTION
# =============================================================================


class TestClickDetector:
    """ClickDetector - picked objects and coordinates to ClickInfo."""

    def test_terrain_click(self, dedup: ClickDeduplicationContext) -> None:
        click = ClickDetector(dedup=dedup).detect(clicked_object=None, clicked_coordinate=[-84.43, 33.64])
        assert click is not None
        assert click.click_type == MapClickType.TERRAIN
        assert click.location == LatLng(lat=33.64, lng=-84.43)

    def test_repeated_coordinate_ignored(self, dedup: ClickDeduplicationContext) -> None:
        detector = ClickDetector(dedup=dedup)
        assert detector.detect(clicked_object=None, clicked_coordinate=[1.0, 2.0]) is not None
        assert detector.detect(clicked_object=None, clicked_coordinate=[1.0, 2.0]) is None

    def test_no_data(self, dedup: ClickDeduplicationContext) -> None:
        assert ClickDetector(dedup=dedup).detect(clicked_object=None, clicked_coordinate=None) is None

    def test_path_click(self, dedup: ClickDeduplicationContext) -> None:
        click = ClickDetector(dedup=dedup).detect(
            clicked_object={"type": "path", "layer_handle": "layer-2"}, clicked_coordinate=[1.0, 2.0]
        )
        assert click.marker_type == MarkerType.PATH
        assert click.layer_handle == "layer-2"
        assert click.lat == 2.0

    def test_vertex_click(self, dedup: ClickDeduplicationContext) -> None:
        click = ClickDetector(dedup=dedup).detect(
            clicked_object={"type": "vertex", "layer_handle": "layer-2", "vertex_index": 3}, clicked_coordinate=None
        )
        assert click.marker_type == MarkerType.VERTEX
        assert click.vertex_index == 3

    def test_sketch_vertex_click(self, dedup: ClickDeduplicationContext) -> None:
        click = ClickDetector(dedup=dedup).detect(
            clicked_object={"type": "sketch_vertex", "vertex_index": 0}, clicked_coordinate=[1.0, 2.0]
        )
        assert click.marker_type == MarkerType.SKETCH_VERTEX

    def test_label_click_is_terrain(self, dedup: ClickDeduplicationContext) -> None:
        click = ClickDetector(dedup=dedup).detect(clicked_object={"type": "label"}, clicked_coordinate=[1.0, 2.0])
        assert click.is_terrain

    @pytest.mark.parametrize(
        "obj",
        [
            {"type": "vertex", "layer_handle": "layer-1"},
            {"type": "path"},
            {"type": "balloon"},
            {"name": "no type"},
        ],
    )
    def test_malformed_objects(self, dedup: ClickDeduplicationContext, obj: dict) -> None:
        assert ClickDetector(dedup=dedup).detect(clicked_object=obj, clicked_coordinate=[1.0, 2.0]) is None

    def test_same_object_after_map_reload(self, dedup: ClickDeduplicationContext) -> None:
        """A new map version makes the same marker clickable again."""
        obj = {"type": "path", "layer_handle": "layer-1"}
        assert ClickDetector(dedup=dedup, map_version=1).detect(clicked_object=obj, clicked_coordinate=None)
        assert ClickDetector(dedup=dedup, map_version=1).detect(clicked_object=obj, clicked_coordinate=None) is None
        assert ClickDetector(dedup=dedup, map_version=2).detect(clicked_object=obj, clicked_coordinate=None)

    def test_debounce(self) -> None:
        """Two clicks inside the debounce window: only the first counts."""
        dedup = ClickDeduplicationContext(debounce_seconds=60.0)
        detector = ClickDetector(dedup=dedup)
        assert detector.detect(clicked_object=None, clicked_coordinate=[1.0, 2.0]) is not None
        assert detector.detect(clicked_object=None, clicked_coordinate=[3.0, 4.0]) is None


class TestParseDeckglEvent:
    """parse_deckgl_event - st_deckgl event payloads."""

    def test_empty(self) -> None:
        result = parse_deckgl_event(event=None)
        assert result.clicked_object is None
        assert result.clicked_coordinate is None

    def test_map_click(self) -> None:
        result = parse_deckgl_event(event={"coordinate": [-84.43, 33.64], "eventType": "click"})
        assert result.clicked_coordinate == [-84.43, 33.64]
        assert not result.is_object_click

    def test_object_click_spreads_properties(self) -> None:
        result = parse_deckgl_event(
            event={"type": "path", "layer_handle": "layer-1", "coordinate": [1, 2], "eventType": "click"}
        )
        assert result.clicked_object == {"type": "path", "layer_handle": "layer-1"}
        assert result.clicked_coordinate == [1.0, 2.0]


class TestClickHandlers:
    """click_handlers - state dispatch table."""

    def test_every_state_has_a_handler(self, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        sm, _ = sm_and_ctx
        for state in sm.states:
            assert callable(get_click_handler(state_name=state.name))

    def test_unknown_state_raises(self) -> None:
        with pytest.raises(RuntimeError, match="No click handler"):
            get_click_handler(state_name="Flying")

    def test_idle_terrain_click_starts_sketch(self, tool: DrawTool) -> None:
        click = ClickDetector(dedup=ClickDeduplicationContext(debounce_seconds=0)).detect(
            clicked_object=None, clicked_coordinate=[A.lng, A.lat]
        )
        handle_idle_click(tool, click)
        assert tool.sm.is_drawing
        assert tool.ctx.sketch.vertices == [A]


# =============================================================================
# CONTEXT
# =============================================================================


class TestRemovalContext:
    """RemovalContext - removal marks."""

    def test_toggle_marks_and_unmarks(self) -> None:
        removal = RemovalContext()
        assert removal.toggle(handle="layer-1") is True
        assert removal.is_marked(handle="layer-1")
        assert removal.toggle(handle="layer-1") is False
        assert not removal.is_marked(handle="layer-1")


class TestMapContext:
    """MapContext - view state."""

    def test_jump_to_caps_zoom(self) -> None:
        map_ctx = MapContext()
        map_ctx.jump_to(lat=40.0, lon=-73.0, zoom=25)
        assert (map_ctx.lat, map_ctx.lon, map_ctx.zoom) == (40.0, -73.0, 20)

    def test_clear_resets_view(self) -> None:
        map_ctx = MapContext()
        map_ctx.set_center(lon=1.0, lat=2.0)
        map_ctx.clear()
        assert map_ctx == MapContext()


# =============================================================================
# RENDERING
# =============================================================================


class TestMapRenderer:
    """MapRenderer - pydeck layers."""

    def test_empty_map(self, surface: MapSurface, sm_and_ctx: tuple[DrawToolStateMachine, DrawContext]) -> None:
        _, ctx = sm_and_ctx
        deck = MapRenderer().render(surface=surface, ctx=ctx)
        assert deck.layers == []

    def test_paths_and_labels(self, tool: DrawTool, surface: MapSurface) -> None:
        _draw_path(tool, A, B, C)

        deck = MapRenderer().render(surface=surface, ctx=tool.ctx, layer_names={"layer-1": "Path 1"})

        assert [layer.id for layer in deck.layers] == ["paths", "labels_segment", "labels_total"]
        path_row = deck.layers[0].data[0]
        assert path_row["type"] == "path"
        assert path_row["layer_handle"] == "layer-1"
        assert path_row["name"] == "Path 1"
        assert path_row["path"][0] == A.lon_lat
        assert len(deck.layers[1].data) == 2
        assert deck.layers[2].data[0]["text"].startswith("Total: ")

    def test_highlight_and_removal_mark(self, tool: DrawTool, surface: MapSurface) -> None:
        _draw_path(tool, A, B)
        _draw_path(tool, C, D)
        tool.start_removing()
        tool.toggle_removal(handle="layer-1")

        deck = MapRenderer().render(surface=surface, ctx=tool.ctx, highlight_handle="layer-2")

        rows = {row["layer_handle"]: row for row in deck.layers[0].data}
        assert rows["layer-1"]["color"] == StyleConfig.REMOVAL_MARK_COLOR
        assert rows["layer-2"]["width"] == 2 * StyleConfig.PATH_WIDTH_PX

    def test_unmarked_path_keeps_its_color(self, tool: DrawTool, surface: MapSurface) -> None:
        _draw_path(tool, A, B)
        tool.start_removing()
        tool.toggle_removal(handle="layer-1")
        tool.toggle_removal(handle="layer-1")

        deck = MapRenderer().render(surface=surface, ctx=tool.ctx)

        alpha = int(StyleConfig.PATH_OPACITY * 255)
        expected = StyleConfig.hex_to_rgba(hex_color=StyleConfig.PATH_COLORS[0], alpha=alpha)
        assert deck.layers[0].data[0]["color"] == expected

    def test_vertex_handles_while_editing(self, tool: DrawTool, surface: MapSurface) -> None:
        _draw_path(tool, A, B)
        tool.start_editing()

        deck = MapRenderer().render(surface=surface, ctx=tool.ctx, show_vertex_handles=True)

        handles = [layer for layer in deck.layers if layer.id == "vertex_handles"][0]
        assert [row["vertex_index"] for row in handles.data] == [0, 1]
        assert all(row["type"] == "vertex" for row in handles.data)

    def test_sketch_layers(self, tool: DrawTool, surface: MapSurface) -> None:
        tool.begin(vertex=A)
        deck = MapRenderer().render(surface=surface, ctx=tool.ctx)
        assert [layer.id for layer in deck.layers] == ["sketch_vertices"]

        tool.add_vertex(vertex=B)
        deck = MapRenderer().render(surface=surface, ctx=tool.ctx)
        assert [layer.id for layer in deck.layers] == ["sketch_line", "sketch_vertices"]
        assert deck.layers[1].data[-1]["name"] == "Click to finish"

    def test_update_view(self) -> None:
        renderer = MapRenderer()
        renderer.update_view(lat=40.0, lon=-73.0, zoom=15)
        view = renderer.get_view_state()
        assert (view.latitude, view.longitude, view.zoom) == (40.0, -73.0, 15)


class TestWalkTimeChart:
    """WalkTimeChart - plotly figures."""

    def test_path_chart(self, engine: AnnotationEngine, north_path: Callable[..., list[LatLng]]) -> None:
        path = engine.registry.create(vertices=north_path(540.0, 900.0))

        fig = WalkTimeChart().render_path(path=path)

        bars, cumulative = fig.data
        assert list(bars.y) == pytest.approx([3.0, 5.0])
        assert list(cumulative.y) == pytest.approx([3.0, 8.0])
        assert fig.layout.title.text == "Path 1 · 8 min"

    def test_path_without_segments_rejected(self, engine: AnnotationEngine) -> None:
        path = engine.registry.create(vertices=[A])
        with pytest.raises(ValueError, match="no segments"):
            WalkTimeChart().render_path(path=path)

    def test_overview(self, engine: AnnotationEngine, north_path: Callable[..., list[LatLng]]) -> None:
        engine.registry.create(vertices=north_path(540.0))
        engine.registry.create(vertices=north_path(900.0))

        fig = WalkTimeChart().render_overview(rows=engine.path_rows())

        assert list(fig.data[0].x) == ["Path 1", "Path 2"]
        assert list(fig.data[0].y) == pytest.approx([3.0, 5.0])

    def test_overview_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="No paths"):
            WalkTimeChart().render_overview(rows=[])


class TestContextMessage:
    """build_context_message - one instruction per state."""

    def test_message_per_state(self, tool: DrawTool, engine: AnnotationEngine) -> None:
        assert isinstance(build_context_message(sm=tool.sm, ctx=tool.ctx, engine=engine), IdleContextMessage)

        tool.begin(vertex=A)
        drawing = build_context_message(sm=tool.sm, ctx=tool.ctx, engine=engine)
        assert isinstance(drawing, DrawingContextMessage)
        assert drawing.vertex_count == 1
        assert drawing.length_label == "0 ft · <1 min"

        tool.add_vertex(vertex=B)
        tool.finish()
        tool.start_editing()
        assert isinstance(build_context_message(sm=tool.sm, ctx=tool.ctx, engine=engine), EditingContextMessage)

        tool.cancel_edits()
        tool.start_removing()
        assert isinstance(build_context_message(sm=tool.sm, ctx=tool.ctx, engine=engine), RemovingContextMessage)
