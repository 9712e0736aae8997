"""Right panel - draw tool controls.

Shows ONE instruction message for the current draw tool state plus the
buttons that apply in that state:
- Idle: Edit paths, Remove paths
- Drawing: Finish, Delete last point, Cancel
- Editing: Delete vertex, Save, Cancel
- Removing: Save, Cancel
"""

import logging

import streamlit as st

from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.walk_time import format_long, walking_seconds
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.message import (
    DrawingContextMessage,
    EditingContextMessage,
    IdleContextMessage,
    Message,
    RemovingContextMessage,
)
from walktime_planner.ui.actions import (
    cancel_edits,
    cancel_removal,
    cancel_sketch,
    delete_selected_vertex,
    finish_sketch,
    remove_last_sketch_vertex,
    save_edits,
    save_removal,
    start_editing,
    start_removing,
)
from walktime_planner.ui.context import DrawContext
from walktime_planner.ui.state_machine import DrawToolStateMachine

logger = logging.getLogger(__name__)


def build_context_message(sm: DrawToolStateMachine, ctx: DrawContext, engine: AnnotationEngine) -> Message:
    """Instruction message for the current state.

    Raises:
        RuntimeError: If the state has no message
    """
    if sm.is_idle:
        return IdleContextMessage(path_count=len(engine.registry))
    if sm.is_drawing:
        feet = GeoCalculator.path_length_feet(ctx.sketch.vertices)
        return DrawingContextMessage(
            vertex_count=ctx.sketch.vertex_count,
            length_label=f"{feet:,.0f} ft · {format_long(walking_seconds(feet))}",
        )
    if sm.is_editing:
        return EditingContextMessage(
            selected_vertex=ctx.edit.selected_index,
            changed_paths=len(ctx.edit.changed_handles()),
        )
    if sm.is_removing:
        return RemovingContextMessage(marked_count=len(ctx.removal.marked))
    raise RuntimeError(f"No control panel message for state '{sm.get_state_name()}'")


def render_control_panel(sm: DrawToolStateMachine, ctx: DrawContext, engine: AnnotationEngine) -> None:
    """Render draw tool instructions and buttons for the current state."""
    st.markdown("### ✏️ Draw Tool")
    build_context_message(sm=sm, ctx=ctx, engine=engine).display()

    if sm.is_idle:
        has_paths = len(engine.registry) > 0
        if st.button("✏️ Edit paths", key="tool_edit", use_container_width=True, disabled=not has_paths):
            start_editing()
        if st.button("🧹 Remove paths", key="tool_remove", use_container_width=True, disabled=not has_paths):
            start_removing()

    elif sm.is_drawing:
        can_finish = ctx.sketch.can_finish()
        if st.button("✅ Finish", key="tool_finish", type="primary", use_container_width=True, disabled=not can_finish):
            finish_sketch()
        if st.button("⌫ Delete last point", key="tool_delete_last", use_container_width=True):
            remove_last_sketch_vertex()
        if st.button("✖️ Cancel", key="tool_cancel_sketch", use_container_width=True):
            cancel_sketch()

    elif sm.is_editing:
        has_selection = ctx.edit.has_selection()
        if st.button("⌫ Delete vertex", key="tool_delete_vertex", use_container_width=True, disabled=not has_selection):
            delete_selected_vertex()
        if st.button("💾 Save", key="tool_save_edits", type="primary", use_container_width=True):
            save_edits()
        if st.button("✖️ Cancel", key="tool_cancel_edits", use_container_width=True):
            cancel_edits()

    elif sm.is_removing:
        has_marks = bool(ctx.removal.marked)
        if st.button("💾 Save", key="tool_save_removal", type="primary", use_container_width=True, disabled=not has_marks):
            save_removal()
        if st.button("✖️ Cancel", key="tool_cancel_removal", use_container_width=True):
            cancel_removal()
