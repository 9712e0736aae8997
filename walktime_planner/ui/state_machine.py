"""State machine for the walk time planner draw tool.

Uses python-statemachine for robust state management with:
- Clear state definitions
- Guarded transitions (conditions)
- Entry/exit hooks for context cleanup
- Explicit event-driven transitions

Architecture Overview
---------------------
The draw tool is the map-side collaborator of the annotation engine. It only
knows its own layers and tells the engine what happened through three event
kinds (PathFinished, PathEdited, PathRemoved). The pattern is:

1. User action (map click or button) is handled by DrawTool
2. DrawTool updates the surface and hands an event to the engine
3. DrawTool fires the state machine transition
4. StreamlitUIListener fires after_transition and calls st.rerun()

Business work always happens BEFORE the transition because st.rerun()
stops the script run.

States (4 states):
    IDLE: Viewing paths, a terrain click starts a new path
    DRAWING: Sketch in progress, terrain clicks add vertices
    EDITING: Vertex handles visible, vertices can be moved or deleted
    REMOVING: Paths can be marked for removal

Transitions:
    IDLE -> DRAWING: start_path (terrain click, seeded with the clicked vertex)
    DRAWING -> DRAWING: start_path (discards sketch), add_vertex, remove_last_vertex
    DRAWING -> IDLE: finish_path (>= 2 vertices), cancel_path, remove_last_vertex (last one)
    IDLE -> EDITING: start_editing
    EDITING -> IDLE: save_edits, cancel_edits
    IDLE -> REMOVING: start_removing
    REMOVING -> IDLE: save_removal, cancel_removal
"""

from __future__ import annotations

import logging
from typing import Any

import streamlit as st
from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from walktime_planner.core.lat_lng import LatLng
from walktime_planner.ui.context import DrawContext

logger = logging.getLogger(__name__)


class StreamlitUIListener:
    """Listener that handles Streamlit UI side effects after state transitions.

    Usage:
        sm = DrawToolStateMachine(context=context)
        sm.add_listener(StreamlitUIListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        """Log the transition and trigger a Streamlit rerun."""
        logger.info(f"[DRAW] {source.name} --({event})--> {target.name}")
        st.rerun()


class DrawToolStateMachine(StateMachine):
    """State machine for the draw tool workflow.

    States:
        idle: No tool mode active
        drawing: Sketching a new path
        editing: Moving or deleting vertices of existing paths
        removing: Marking paths for removal
    """

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    drawing = State("Drawing")
    editing = State("Editing")
    removing = State("Removing")

    # ==========================================================================
    # Transitions: DRAWING
    # ==========================================================================

    # Start a new sketch (from drawing: discard the current one)
    start_path = idle.to(drawing) | drawing.to(drawing)
    add_vertex = drawing.to(drawing)
    # Drop last vertex, leaving drawing when none would remain
    remove_last_vertex = drawing.to(drawing, cond="has_more_vertices") | drawing.to(
        idle, unless="has_more_vertices"
    )
    finish_path = drawing.to(idle, cond="can_finish_path")
    cancel_path = drawing.to(idle)

    # ==========================================================================
    # Transitions: EDITING
    # ==========================================================================

    start_editing = idle.to(editing)
    save_edits = editing.to(idle)
    cancel_edits = editing.to(idle)

    # ==========================================================================
    # Transitions: REMOVING
    # ==========================================================================

    start_removing = idle.to(removing)
    save_removal = removing.to(idle)
    cancel_removal = removing.to(idle)

    # ==========================================================================
    # Guards (Conditions)
    # ==========================================================================

    def has_more_vertices(self) -> bool:
        """Guard: Check if a vertex remains after removing the last one."""
        return self.context.sketch.vertex_count > 1

    def can_finish_path(self) -> bool:
        """Guard: Check if the sketch has enough vertices to be a path."""
        return self.context.sketch.can_finish()

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_drawing(self) -> bool:
        return self.drawing.is_active

    @property
    def is_editing(self) -> bool:
        return self.editing.is_active

    @property
    def is_removing(self) -> bool:
        return self.removing.is_active

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_idle(self) -> None:
        """Hook: Entering idle state."""
        self.context.clear_tool_state()
        # Allow clicking the same object again in the new state
        self.context.click_dedup.clear_marker()

    def on_enter_editing(self) -> None:
        self.context.click_dedup.clear_marker()

    def on_enter_removing(self) -> None:
        self.context.click_dedup.clear_marker()

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_start_path(self, vertex: LatLng) -> None:
        """Action before starting a sketch: seed it with the clicked vertex."""
        self.context.sketch.vertices = [vertex]

    def before_add_vertex(self, vertex: LatLng) -> None:
        self.context.sketch.vertices.append(vertex)

    def before_remove_last_vertex(self) -> None:
        if self.context.sketch.vertices:
            self.context.sketch.vertices.pop()

    def before_start_editing(self, layers: dict[str, list[LatLng]]) -> None:
        """Action before editing: snapshot the geometry of every layer."""
        self.context.edit.begin(layers=layers)

    def before_start_removing(self) -> None:
        self.context.removal.clear()

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: DrawContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or DrawContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> DrawContext:
        return self.model

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name

    def __repr__(self) -> str:
        return f"DrawToolStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(add_ui_listener: bool = True) -> tuple["DrawToolStateMachine", DrawContext]:
        """Factory method to create state machine with context and optional UI listener.

        Args:
            add_ui_listener: If True, adds StreamlitUIListener for auto st.rerun().
                             Set to False for testing or non-Streamlit usage.

        Returns:
            Tuple of (DrawToolStateMachine, DrawContext)
        """
        context = DrawContext()
        sm = DrawToolStateMachine(context=context)
        if add_ui_listener:
            sm.add_listener(StreamlitUIListener())
            logger.info("Created DrawToolStateMachine with StreamlitUIListener")
        else:
            logger.info("Created DrawToolStateMachine without UI listener")
        return sm, context
