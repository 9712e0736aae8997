"""Sidebar UI renderer for the walk time planner.

Renders the left sidebar with:
- Summary panel (total distance and walking time of all paths)
- Path list (name, color, distance and time, chart and delete buttons)
- Undo and clear-all buttons
- Location quick-jump buttons

Sidebar rows and summary come from the engine's latest PathsChanged
snapshot, so the sidebar always reflects the last applied event.
"""

import logging

import streamlit as st

from walktime_planner.constants import LocationConfig
from walktime_planner.model.aggregator import PathRow
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.events import PathsChanged
from walktime_planner.model.undo_log import CreatePathAction, DeletePathAction, UndoAction
from walktime_planner.ui.actions import (
    clear_all_paths,
    delete_path,
    highlight_path,
    recenter_on_location,
    undo_last_action,
)
from walktime_planner.ui.context import DrawContext

logger = logging.getLogger(__name__)


def _describe_pending_undo(action: UndoAction, engine: AnnotationEngine) -> str:
    """Human-readable description of what undo will do."""
    if isinstance(action, CreatePathAction):
        path = engine.get_path(action.path_id)
        return f"Remove **{path.name if path else action.path_id}**"
    if isinstance(action, DeletePathAction):
        return f"Restore deleted **Path {action.sequence_number}**"
    return "Nothing to undo"


@st.dialog("Clear all paths?")
def _confirm_clear_dialog(path_count: int) -> None:
    """Show confirmation dialog before removing every path."""
    st.write(f"This removes **{path_count} path(s)**. Clearing cannot be undone.")

    col_yes, col_no = st.columns(2)
    with col_yes:
        if st.button("🗑️ Yes, clear", key="clear_confirm", type="primary", use_container_width=True):
            st.session_state._pending_clear = True
            st.rerun()
    with col_no:
        if st.button("✖️ Cancel", key="clear_cancel", use_container_width=True):
            st.rerun()


class SidebarRenderer:
    """Renders the sidebar UI.

    Buttons call action functions directly; those trigger st.rerun().
    """

    def __init__(self, engine: AnnotationEngine, context: DrawContext, change: PathsChanged) -> None:
        self.engine = engine
        self.ctx = context
        self.change = change

    def render(self) -> None:
        """Render complete sidebar."""
        # Pending clear from confirmation dialog (must be before UI rendering)
        if st.session_state.get("_pending_clear"):
            st.session_state._pending_clear = False
            clear_all_paths()

        with st.sidebar:
            self._render_summary()
            st.divider()
            self._render_path_list()
            st.divider()
            self._render_undo_clear_buttons()
            st.divider()
            self._render_locations()

    def _render_summary(self) -> None:
        """Render totals of all paths combined."""
        st.markdown("**🚶 Summary**")
        col_dist, col_time = st.columns(2)
        with col_dist:
            st.metric("Total distance", self.change.summary.distance)
        with col_time:
            st.metric("Walking time", self.change.summary.time)

    def _render_path_list(self) -> None:
        """Render one row per path in creation order."""
        st.markdown(f"**Paths ({len(self.change.rows)})**")
        if not self.change.rows:
            st.caption("No paths yet. Click the map to start drawing.")
            return
        for row in self.change.rows:
            self._render_path_row(row=row)

    def _render_path_row(self, row: PathRow) -> None:
        is_viewed = self.ctx.viewing.path_id == row.id
        col_name, col_view, col_delete = st.columns([5, 1, 1])
        with col_name:
            marker = "▶ " if is_viewed else ""
            st.markdown(
                f'<span style="color:{row.color}; font-size:1.2em">●</span> {marker}**{row.name}**<br>'
                f'<span style="color:#666; font-size:0.85em">{row.stats_label}</span>',
                unsafe_allow_html=True,
            )
        with col_view:
            if st.button("📈", key=f"view_{row.id}", help=f"Show {row.name} in the chart"):
                highlight_path(path_id=row.id)
        with col_delete:
            if st.button("🗑️", key=f"delete_{row.id}", help=f"Delete {row.name} (can be undone)"):
                delete_path(path_id=row.id)

    def _render_undo_clear_buttons(self) -> None:
        """Render undo and clear-all buttons."""
        depth = self.change.undo_depth
        pending = self.engine.undo_log.peek()
        if st.button(
            f"↩️ Undo ({depth})",
            key="undo_last",
            use_container_width=True,
            disabled=depth == 0,
            help="Nothing to undo" if pending is None else _describe_pending_undo(action=pending, engine=self.engine),
        ):
            undo_last_action()

        path_count = len(self.change.rows)
        if st.button(
            "🗑️ Clear all",
            key="clear_all",
            use_container_width=True,
            disabled=path_count == 0,
            help="Remove every path",
        ):
            _confirm_clear_dialog(path_count=path_count)

    def _render_locations(self) -> None:
        """Render quick-jump buttons for the named locations."""
        with st.expander("📍 Locations", expanded=False):
            cols = st.columns(3)
            for i, (code, name, *_rest) in enumerate(LocationConfig.LOCATIONS):
                with cols[i % 3]:
                    if st.button(code, key=f"loc_{code}", help=name, use_container_width=True):
                        recenter_on_location(code=code)
