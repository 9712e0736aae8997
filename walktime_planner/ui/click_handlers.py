"""Click handlers for the walk time planner.

Uses ClickDetector to detect clicks, then dispatches to state-specific handlers.

Design Principles:
- One handler per draw tool state (no if-else chains across states)
- Clicks that do nothing in the current state show an InvalidClickMessage
- STRICT: A state without a registered handler raises RuntimeError
"""

import logging
from collections.abc import Callable

import streamlit as st

from walktime_planner.model.click_info import ClickInfo, MarkerType
from walktime_planner.model.message import InvalidClickMessage, PathTooShortMessage
from walktime_planner.ui.actions import bump_map_version, get_draw_tool, highlight_path, reload_map
from walktime_planner.ui.click_detector import ClickDetector
from walktime_planner.ui.draw_tool import DrawTool

logger = logging.getLogger(__name__)

ClickHandler = Callable[[DrawTool, ClickInfo], None]


# =============================================================================
# CLICK DISPATCH
# =============================================================================


def get_click_handler(state_name: str) -> ClickHandler:
    """Get the appropriate click handler for the given state.

    Raises:
        RuntimeError: If state has no registered handler
    """
    handlers: dict[str, ClickHandler] = {
        "Idle": handle_idle_click,
        "Drawing": handle_drawing_click,
        "Editing": handle_editing_click,
        "Removing": handle_removing_click,
    }

    handler = handlers.get(state_name)
    if handler is None:
        raise RuntimeError(
            f"No click handler registered for state '{state_name}'. "
            f"Available states: {list(handlers.keys())}. "
            f"Add handler for new state."
        )
    return handler


def dispatch_click(click_info: ClickInfo) -> None:
    """Dispatch click to appropriate state handler."""
    tool = get_draw_tool()
    state_name = tool.sm.get_state_name()
    logger.info(f"[CLICK] {state_name}: {click_info.display_name}")
    # Fresh map component on the next run so the same event is not replayed
    bump_map_version()
    get_click_handler(state_name=state_name)(tool, click_info)


# =============================================================================
# STATE HANDLERS
# =============================================================================


def handle_idle_click(tool: DrawTool, click_info: ClickInfo) -> None:
    """IDLE: map click starts a path, path click shows its chart."""
    if click_info.is_terrain:
        tool.begin(vertex=click_info.location)
        return

    if click_info.marker_type == MarkerType.PATH:
        path_id = tool.engine.registry.path_id_for_layer(click_info.layer_handle)
        if path_id is None:
            logger.warning(f"Idle click on unbound layer {click_info.layer_handle}")
            return
        highlight_path(path_id=path_id)
        return

    InvalidClickMessage(action=f"use {click_info.display_name}", reason="no tool is active").display()


def handle_drawing_click(tool: DrawTool, click_info: ClickInfo) -> None:
    """DRAWING: map click adds a vertex, last vertex click finishes."""
    if click_info.marker_type == MarkerType.SKETCH_VERTEX:
        if click_info.vertex_index == tool.ctx.sketch.vertex_count - 1:
            if not tool.finish():
                PathTooShortMessage(vertex_count=tool.ctx.sketch.vertex_count).display()
            return
        InvalidClickMessage(action="close the path here", reason="click the last point to finish").display()
        return

    # Clicking over an existing path still places a vertex at that spot
    if click_info.lat is None or click_info.lon is None:
        InvalidClickMessage(action="add a point", reason="the click had no map position").display()
        return
    tool.add_vertex(vertex=click_info.location)


def handle_editing_click(tool: DrawTool, click_info: ClickInfo) -> None:
    """EDITING: vertex click selects, map click moves the selected vertex."""
    if click_info.marker_type == MarkerType.VERTEX:
        if tool.select_vertex(handle=click_info.layer_handle, index=click_info.vertex_index):
            reload_map()
        return

    if click_info.lat is None or click_info.lon is None:
        return
    if not tool.ctx.edit.has_selection():
        InvalidClickMessage(action="move a point", reason="select a vertex handle first").display()
        return
    if tool.move_selected_vertex(vertex=click_info.location):
        reload_map()


def handle_removing_click(tool: DrawTool, click_info: ClickInfo) -> None:
    """REMOVING: path click toggles its removal mark."""
    if click_info.marker_type != MarkerType.PATH:
        InvalidClickMessage(action="remove this", reason="click a path to mark it").display()
        return
    marked = tool.toggle_removal(handle=click_info.layer_handle)
    logger.info(f"[DRAW] {click_info.layer_handle} {'marked' if marked else 'unmarked'} for removal")
    reload_map()


def handle_map_result(clicked_object: dict | None, clicked_coordinate: list[float] | None) -> None:
    """Detect a new click from the map component and dispatch it."""
    ctx = st.session_state.context
    detector = ClickDetector(dedup=ctx.click_dedup, map_version=st.session_state.get("map_version", 0))
    click_info = detector.detect(clicked_object=clicked_object, clicked_coordinate=clicked_coordinate)
    if click_info is not None:
        dispatch_click(click_info=click_info)
