"""UI Actions - All action functions for the walk time planner.

Centralizes the functions that modify session state, call the annotation
engine, or drive the draw tool from buttons.

This module handles:
- Map reload and version bumping (reload_map, bump_map_version)
- Session accessors (get_engine, get_draw_tool)
- Sidebar commands (delete_path, clear_all_paths, undo_last_action)
- Map centering (recenter_on_location, highlight_path)
- Draw tool buttons (finish, cancel, save, ...)
"""

import logging
from collections.abc import Callable

import streamlit as st

from walktime_planner.constants import LocationConfig
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.events import PathsChanged
from walktime_planner.model.message import (
    InvalidClickMessage,
    PathTooShortMessage,
    UndoneMessage,
)
from walktime_planner.model.undo_log import CreatePathAction, DeletePathAction, UndoAction
from walktime_planner.ui.context import DrawContext
from walktime_planner.ui.draw_tool import DrawTool
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.state_machine import DrawToolStateMachine

logger = logging.getLogger(__name__)


# =============================================================================
# MAP RELOAD ABSTRACTION
# =============================================================================


def reload_map(before: "Callable[[], None] | None" = None) -> None:
    """Reload map with optional pre-reload callback.

    The flow is:
    1. Execute before callback (if provided) - runs BEFORE st.rerun()
    2. Bump map version to clear stale click state
    3. Call st.rerun() which raises StopExecution
    """
    if before is not None:
        before()
    bump_map_version()
    st.rerun()


def bump_map_version() -> None:
    """Increment map_version to create fresh Pydeck component.

    This eliminates ghost clicks by creating a new component instance
    with no memory of previous click events.
    """
    old_version = st.session_state.get("map_version", 0)
    new_version = old_version + 1
    st.session_state.map_version = new_version
    logger.info(f"[MAP] Bumped map_version: {old_version} -> {new_version}")


# =============================================================================
# SESSION ACCESSORS
# =============================================================================


def get_engine() -> AnnotationEngine:
    return st.session_state.engine


def get_draw_tool() -> DrawTool:
    """Draw tool bound to this session's state machine, surface and engine."""
    sm: DrawToolStateMachine = st.session_state.state_machine
    surface: MapSurface = st.session_state.surface
    return DrawTool(sm=sm, surface=surface, engine=get_engine())


def store_paths_changed(change: PathsChanged) -> None:
    """Engine listener: keep the latest snapshot for the sidebar."""
    st.session_state.paths_changed = change
    logger.debug(f"[ENGINE] PathsChanged: {len(change.rows)} path(s), undo depth {change.undo_depth}")


# =============================================================================
# SIDEBAR COMMANDS
# =============================================================================


def describe_undo(action: UndoAction, path_name: str | None = None) -> str:
    """Short user-facing description of an undone action."""
    if isinstance(action, CreatePathAction):
        return f"created {path_name or action.path_id}"
    if isinstance(action, DeletePathAction):
        return f"deleted Path {action.sequence_number}"
    return "last action"


def undo_last_action() -> None:
    """Undo the most recent create or sidebar delete."""
    engine = get_engine()

    # Guard: nothing to undo (UI disables the button when empty)
    if not engine.can_undo:
        return

    logger.info(f"[ACTION] Undo requested, undo depth={engine.undo_depth}")
    pending = engine.undo_log.peek()
    pending_name = None
    if isinstance(pending, CreatePathAction):
        path = engine.get_path(pending.path_id)
        pending_name = path.name if path is not None else None

    undone = engine.undo()
    if undone is not None:
        UndoneMessage(description=describe_undo(action=undone, path_name=pending_name)).display()
    reload_map()


def delete_path(path_id: str) -> None:
    """Delete a path from the sidebar (undoable)."""
    engine = get_engine()
    ctx: DrawContext = st.session_state.context
    logger.info(f"[ACTION] Delete requested for {path_id}")
    engine.delete_path(path_id=path_id)
    if ctx.viewing.path_id == path_id:
        ctx.viewing.clear()
    reload_map()


def clear_all_paths() -> None:
    """Remove every path. Undo history is kept."""
    engine = get_engine()
    ctx: DrawContext = st.session_state.context
    count = engine.clear_all()
    ctx.viewing.clear()
    logger.info(f"[ACTION] Cleared {count} path(s)")
    reload_map()


# =============================================================================
# MAP CENTERING
# =============================================================================


def recenter_on_location(code: str) -> None:
    """Jump the map to a named location from LocationConfig."""
    ctx: DrawContext = st.session_state.context
    for loc_code, name, lat, lon, zoom in LocationConfig.LOCATIONS:
        if loc_code == code:
            ctx.map.jump_to(lat=lat, lon=lon, zoom=zoom)
            logger.info(f"[ACTION] Recentered on {name}")
            reload_map()
            return
    raise ValueError(f"Unknown location code: {code}")


def highlight_path(path_id: str) -> None:
    """Show a path in the bottom chart and center the map on it."""
    ctx: DrawContext = st.session_state.context
    path = get_engine().get_path(path_id)
    if path is None:
        return
    ctx.viewing.show(path_id=path_id)
    midpoint = path.midpoint
    if midpoint is not None:
        ctx.map.set_center(lon=midpoint.lng, lat=midpoint.lat)
    reload_map()


# =============================================================================
# DRAW TOOL BUTTONS
# =============================================================================
# Transitions trigger st.rerun() through StreamlitUIListener. Operations
# that do not change state call reload_map() themselves.


def finish_sketch() -> None:
    tool = get_draw_tool()
    if not tool.finish():
        PathTooShortMessage(vertex_count=tool.ctx.sketch.vertex_count).display()


def remove_last_sketch_vertex() -> None:
    get_draw_tool().remove_last_vertex()


def cancel_sketch() -> None:
    get_draw_tool().cancel_drawing()


def start_editing() -> None:
    if not get_draw_tool().start_editing():
        InvalidClickMessage(action="edit", reason="there are no paths yet").display()


def delete_selected_vertex() -> None:
    tool = get_draw_tool()
    if tool.delete_selected_vertex():
        reload_map()
    else:
        InvalidClickMessage(action="delete this vertex", reason="a path needs at least 2 points").display()


def save_edits() -> None:
    changed = get_draw_tool().save_edits()
    logger.info(f"[ACTION] Saved edits for {changed} path(s)")


def cancel_edits() -> None:
    get_draw_tool().cancel_edits()


def start_removing() -> None:
    if not get_draw_tool().start_removing():
        InvalidClickMessage(action="remove", reason="there are no paths yet").display()


def save_removal() -> None:
    removed = get_draw_tool().save_removal()
    logger.info(f"[ACTION] Removed {removed} path(s) with the draw tool")


def cancel_removal() -> None:
    get_draw_tool().cancel_removal()
