"""DrawTool - Turns user gestures into draw-tool events for the engine.

The draw tool owns its layers on the MapSurface. It never reads path ids:
every event it emits references layer handles only. The engine resolves
them through the registry's lookup table.

Order of work in every operation:
1. Update the surface (the tool's own layers)
2. Hand the event to the engine
3. Fire the state machine transition (which may st.rerun())
"""

import logging

from walktime_planner.constants import StyleConfig, WalkConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.events import PathEdit, PathEdited, PathFinished, PathRemoved
from walktime_planner.ui.context import DrawContext
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.state_machine import DrawToolStateMachine

logger = logging.getLogger(__name__)


class DrawTool:
    """Click-driven polyline tool on top of DrawToolStateMachine.

    Example:
        tool = DrawTool(sm=sm, surface=surface, engine=engine)
        tool.begin(vertex=a)
        tool.add_vertex(vertex=b)
        tool.finish()  # engine receives PathFinished
    """

    def __init__(self, sm: DrawToolStateMachine, surface: MapSurface, engine: AnnotationEngine) -> None:
        self.sm = sm
        self.surface = surface
        self.engine = engine

    @property
    def ctx(self) -> DrawContext:
        return self.sm.context

    # =========================================================================
    # Drawing
    # =========================================================================

    def begin(self, vertex: LatLng) -> bool:
        """Start a new sketch at the clicked vertex."""
        logger.info(f"[DRAW] New sketch at {vertex}")
        return self.sm.try_transition("start_path", vertex=vertex)

    def add_vertex(self, vertex: LatLng) -> bool:
        return self.sm.try_transition("add_vertex", vertex=vertex)

    def remove_last_vertex(self) -> bool:
        return self.sm.try_transition("remove_last_vertex")

    def finish(self) -> bool:
        """Complete the sketch as a new path.

        Returns:
            False if not drawing or the sketch has too few vertices.
        """
        if not self.sm.is_drawing:
            return False
        sketch = self.ctx.sketch
        if not sketch.can_finish():
            logger.info(
                f"[DRAW] Finish refused: {sketch.vertex_count} vertex(es), need {WalkConfig.MIN_PATH_VERTICES}"
            )
            return False

        vertices = tuple(sketch.vertices)
        handle = self.surface.add_layer(vertices=vertices, color=StyleConfig.SKETCH_COLOR)
        self.engine.handle(PathFinished(layer_handle=handle, vertices=vertices))
        return self.sm.try_transition("finish_path")

    def cancel_drawing(self) -> bool:
        return self.sm.try_transition("cancel_path")

    # =========================================================================
    # Editing
    # =========================================================================

    def start_editing(self) -> bool:
        """Enter edit mode for every layer on the surface."""
        if not self.surface.layers:
            return False
        layers = {handle: list(layer.vertices) for handle, layer in self.surface.layers.items()}
        return self.sm.try_transition("start_editing", layers=layers)

    def select_vertex(self, handle: str, index: int) -> bool:
        """Select a vertex handle. No state change."""
        if not self.sm.is_editing:
            return False
        vertices = self.ctx.edit.working.get(handle)
        if vertices is None or not 0 <= index < len(vertices):
            logger.warning(f"[DRAW] Vertex {index} of {handle} not editable")
            return False
        self.ctx.edit.select(handle=handle, index=index)
        return True

    def move_selected_vertex(self, vertex: LatLng) -> bool:
        """Move the selected vertex to a new location. No state change."""
        edit = self.ctx.edit
        if not self.sm.is_editing or not edit.has_selection():
            return False
        vertices = edit.working[edit.selected_handle]
        vertices[edit.selected_index] = vertex
        self.surface.set_layer_vertices(handle=edit.selected_handle, vertices=vertices)
        edit.clear_selection()
        return True

    def delete_selected_vertex(self) -> bool:
        """Delete the selected vertex. Paths keep at least the minimum vertex count."""
        edit = self.ctx.edit
        if not self.sm.is_editing or not edit.has_selection():
            return False
        vertices = edit.working[edit.selected_handle]
        if len(vertices) <= WalkConfig.MIN_PATH_VERTICES:
            return False
        del vertices[edit.selected_index]
        self.surface.set_layer_vertices(handle=edit.selected_handle, vertices=vertices)
        edit.clear_selection()
        return True

    def save_edits(self) -> int:
        """Emit one PathEdited with every changed layer.

        Returns:
            Number of changed layers (0 emits nothing).
        """
        if not self.sm.is_editing:
            return 0
        edit = self.ctx.edit
        edits = tuple(
            PathEdit(layer_handle=handle, vertices=tuple(edit.working[handle])) for handle in edit.changed_handles()
        )
        if edits:
            self.engine.handle(PathEdited(edits=edits))
        self.sm.try_transition("save_edits")
        return len(edits)

    def cancel_edits(self) -> bool:
        """Restore every layer's original geometry."""
        if not self.sm.is_editing:
            return False
        for handle, vertices in self.ctx.edit.originals.items():
            self.surface.set_layer_vertices(handle=handle, vertices=vertices)
        return self.sm.try_transition("cancel_edits")

    # =========================================================================
    # Removing
    # =========================================================================

    def start_removing(self) -> bool:
        if not self.surface.layers:
            return False
        return self.sm.try_transition("start_removing")

    def toggle_removal(self, handle: str) -> bool:
        """Mark or unmark a layer for removal. Returns True if now marked."""
        if not self.sm.is_removing or handle not in self.surface.layers:
            return False
        return self.ctx.removal.toggle(handle=handle)

    def save_removal(self) -> int:
        """Remove marked layers and emit PathRemoved.

        Returns:
            Number of removed layers.
        """
        if not self.sm.is_removing:
            return 0
        handles = tuple(self.ctx.removal.marked)
        for handle in handles:
            self.surface.remove_layer(handle=handle)
        if handles:
            self.engine.handle(PathRemoved(layer_handles=handles))
        self.sm.try_transition("save_removal")
        return len(handles)

    def cancel_removal(self) -> bool:
        return self.sm.try_transition("cancel_removal")
