"""Click detection types - unified click information for map interactions.

This module defines the canonical types for ALL click detection:
- MapClickType: Source of click (MARKER or TERRAIN)
- MarkerType: Type of marker clicked (or None for terrain)
- ClickInfo: Unified click information returned by ClickDetector

Markers reference drawing-surface layer handles, never path ids: the draw
tool only knows its own layers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from walktime_planner.core.lat_lng import LatLng


class MapClickType(Enum):
    """Source of click on the map - EXACTLY one per interaction."""

    MARKER = "marker"  # Clicked on a pickable object
    TERRAIN = "terrain"  # Clicked on empty map (raw coordinates)


class MarkerType(Enum):
    """Type of marker clicked. None for terrain clicks."""

    PATH = "path"  # A finished path polyline
    VERTEX = "vertex"  # A vertex handle of a finished path (editing)
    SKETCH_VERTEX = "sketch_vertex"  # A vertex of the path being drawn


@dataclass(frozen=True)
class ClickInfo:
    """Unified click information - the ONLY output from click detection.

    STRICT CONTRACT:
    - For TERRAIN: lat/lon are REQUIRED, marker fields are None
    - For MARKER: marker_type is REQUIRED
    - PATH and VERTEX markers carry layer_handle
    - VERTEX and SKETCH_VERTEX markers carry vertex_index (0-indexed)

    Marker clicks may also carry lat/lon when deck.gl reports the
    click coordinate.
    """

    click_type: MapClickType
    lat: Optional[float] = None
    lon: Optional[float] = None
    marker_type: Optional[MarkerType] = None
    layer_handle: Optional[str] = None
    vertex_index: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate invariants - STRICT: fail immediately on invalid state."""
        if self.click_type == MapClickType.TERRAIN:
            if self.lat is None or self.lon is None:
                raise ValueError("TERRAIN click requires lat and lon")
            if self.marker_type is not None:
                raise ValueError(f"TERRAIN click must not have marker_type, got {self.marker_type}")
            return

        if self.marker_type is None:
            raise ValueError("MARKER click requires marker_type")
        if self.marker_type in (MarkerType.PATH, MarkerType.VERTEX) and self.layer_handle is None:
            raise ValueError(f"{self.marker_type.value} click requires layer_handle")
        if self.marker_type in (MarkerType.VERTEX, MarkerType.SKETCH_VERTEX) and self.vertex_index is None:
            raise ValueError(f"{self.marker_type.value} click requires vertex_index")

    @property
    def is_terrain(self) -> bool:
        return self.click_type == MapClickType.TERRAIN

    @property
    def location(self) -> LatLng:
        """Clicked coordinate. Raises if the click carried none."""
        if self.lat is None or self.lon is None:
            raise ValueError(f"Click has no coordinate: {self}")
        return LatLng(lat=self.lat, lng=self.lon)

    @property
    def display_name(self) -> str:
        """Human readable description for logs and toasts."""
        if self.is_terrain:
            return f"map at ({self.lat:.5f}, {self.lon:.5f})"
        if self.marker_type == MarkerType.PATH:
            return f"path layer {self.layer_handle}"
        if self.marker_type == MarkerType.VERTEX:
            return f"vertex {self.vertex_index + 1} of {self.layer_handle}"
        return f"sketch vertex {self.vertex_index + 1}"
