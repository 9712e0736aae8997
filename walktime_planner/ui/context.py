"""Context Classes for the Draw Tool State Machine.

This module contains all context dataclasses that hold mutable state
for the draw tool. The state machine uses these contexts to track the
in-progress sketch, pending vertex edits, paths marked for removal and
map view settings.

Architecture:
- All contexts inherit from BaseContext (provides clear() interface)
- DrawContext composes all sub-contexts
- Contexts are pure data holders - no business logic
- State machine owns the context, UI reads from it

Sub-contexts:
    SketchContext: Vertices of the path being drawn
    EditContext: Working copies of layer vertices while editing
    RemovalContext: Layers marked for removal
    ViewingContext: Which path the bottom chart shows
    MapContext: Map center and zoom
    ClickDeduplicationContext: Click deduplication tracking
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from walktime_planner.constants import ClickConfig, MapConfig, WalkConfig
from walktime_planner.core.lat_lng import LatLng


class BaseContext(ABC):
    """Abstract base class for all context dataclasses.

    All contexts should be clearable to reset to their initial state.
    """

    @abstractmethod
    def clear(self) -> None:
        """Reset context to initial state."""
        ...


@dataclass
class SketchContext(BaseContext):
    """Path being drawn (not yet known to the engine)."""

    vertices: list[LatLng] = field(default_factory=list)

    def clear(self) -> None:
        self.vertices = []

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def can_finish(self) -> bool:
        return len(self.vertices) >= WalkConfig.MIN_PATH_VERTICES

    @property
    def last_vertex(self) -> LatLng | None:
        return self.vertices[-1] if self.vertices else None


@dataclass
class EditContext(BaseContext):
    """Vertex editing state.

    originals holds the geometry each layer had when editing started,
    working holds the geometry shown on the map right now.
    """

    originals: dict[str, list[LatLng]] = field(default_factory=dict)
    working: dict[str, list[LatLng]] = field(default_factory=dict)
    selected_handle: str | None = None
    selected_index: int | None = None

    def clear(self) -> None:
        self.originals = {}
        self.working = {}
        self.clear_selection()

    def begin(self, layers: dict[str, list[LatLng]]) -> None:
        self.originals = {handle: list(vertices) for handle, vertices in layers.items()}
        self.working = {handle: list(vertices) for handle, vertices in layers.items()}
        self.clear_selection()

    def select(self, handle: str, index: int) -> None:
        self.selected_handle = handle
        self.selected_index = index

    def clear_selection(self) -> None:
        self.selected_handle = None
        self.selected_index = None

    def has_selection(self) -> bool:
        return self.selected_handle is not None and self.selected_index is not None

    def changed_handles(self) -> list[str]:
        """Layers whose working geometry differs from the original, in edit order."""
        return [handle for handle, vertices in self.working.items() if vertices != self.originals.get(handle)]


@dataclass
class RemovalContext(BaseContext):
    """Layers marked for removal, in click order."""

    marked: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.marked = []

    def toggle(self, handle: str) -> bool:
        """Mark or unmark a layer. Returns True if now marked."""
        if handle in self.marked:
            self.marked.remove(handle)
            return False
        self.marked.append(handle)
        return True

    def is_marked(self, handle: str) -> bool:
        return handle in self.marked


@dataclass
class ViewingContext(BaseContext):
    """Path highlighted in the sidebar and shown in the bottom chart."""

    path_id: str | None = None

    def clear(self) -> None:
        self.path_id = None

    def show(self, path_id: str) -> None:
        self.path_id = path_id


@dataclass
class MapContext(BaseContext):
    """Map view state (pydeck [lon, lat] ordering for the view)."""

    lat: float = MapConfig.START_CENTER_LAT
    lon: float = MapConfig.START_CENTER_LON
    zoom: int = MapConfig.DEFAULT_ZOOM
    pitch: float = MapConfig.DEFAULT_PITCH
    bearing: float = MapConfig.DEFAULT_BEARING

    def set_center(self, lon: float, lat: float) -> None:
        self.lon = lon
        self.lat = lat

    def jump_to(self, lat: float, lon: float, zoom: int) -> None:
        """Recenter on a named location."""
        self.lat = lat
        self.lon = lon
        self.zoom = min(zoom, MapConfig.MAX_ZOOM)

    def clear(self) -> None:
        """Reset to default map position and view settings."""
        self.lat = MapConfig.START_CENTER_LAT
        self.lon = MapConfig.START_CENTER_LON
        self.zoom = MapConfig.DEFAULT_ZOOM
        self.pitch = MapConfig.DEFAULT_PITCH
        self.bearing = MapConfig.DEFAULT_BEARING


@dataclass
class ClickDeduplicationContext(BaseContext):
    """Click deduplication for Pydeck by tracking last-seen coordinates and object IDs.

    st_deckgl returns the last click event on every rerun, so the same click
    would be processed again after any button press. Also includes a
    timestamp debounce against rapid double-clicks.
    """

    last_coord: tuple[float, float] | None = None
    last_object_id: str | None = None
    last_click_timestamp: float = 0.0
    debounce_seconds: float = ClickConfig.DEBOUNCE_TIME_DELAY

    def is_new_click(
        self,
        coord: tuple[float, ...] | None,
        obj_id: str | None,
    ) -> bool:
        """Check if this is a new click by comparing coordinates, object ID, and timing.

        Args:
            coord: Click coordinate tuple (lon, lat) or None
            obj_id: Unique object identifier string or None for terrain

        Returns:
            True if this is a new click that should be processed
        """
        if coord is None and obj_id is None:
            return False

        # debounce_seconds is 0 in tests
        now = time.time()
        if self.debounce_seconds > 0 and now - self.last_click_timestamp < self.debounce_seconds:
            return False

        if obj_id is not None:
            if obj_id != self.last_object_id:
                self.last_object_id = obj_id
                self.last_click_timestamp = now
                if coord is not None:
                    self.last_coord = (coord[0], coord[1])
                return True
            return False

        coord_2d = (coord[0], coord[1])
        if coord_2d != self.last_coord:
            self.last_coord = coord_2d
            self.last_object_id = None
            self.last_click_timestamp = now
            return True
        return False

    def clear(self) -> None:
        self.last_coord = None
        self.last_object_id = None

    def clear_marker(self) -> None:
        """Clear only object dedup state.

        Called on state transitions to allow clicking the same object in a new state.
        Coordinate dedup is preserved to prevent ghost clicks from st.rerun().
        """
        self.last_object_id = None


@dataclass
class DrawContext:
    """Shared context/model for the draw tool state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.
    """

    state: str | None = None

    sketch: SketchContext = field(default_factory=SketchContext)
    edit: EditContext = field(default_factory=EditContext)
    removal: RemovalContext = field(default_factory=RemovalContext)
    viewing: ViewingContext = field(default_factory=ViewingContext)
    map: MapContext = field(default_factory=MapContext)
    click_dedup: ClickDeduplicationContext = field(default_factory=ClickDeduplicationContext)

    def clear_tool_state(self) -> None:
        """Drop sketch, edit and removal state (back to a neutral tool)."""
        self.sketch.clear()
        self.edit.clear()
        self.removal.clear()

    def __repr__(self) -> str:
        return (
            f"DrawContext(state={self.state}, "
            f"sketch={self.sketch.vertex_count}, "
            f"edited={len(self.edit.changed_handles())}, "
            f"marked={len(self.removal.marked)})"
        )
