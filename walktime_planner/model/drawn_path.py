"""DrawnPath - A user-drawn walking path on the map.

A DrawnPath is an ordered list of vertices with a stable identity,
a creation sequence number and a palette color. Its labels are derived
data, rebuilt by LabelLayout whenever vertices or color change.

The PathRegistry is the only writer of vertices and color.
"""

from dataclasses import dataclass, field

from walktime_planner.constants import EntityPrefixes
from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.core.walk_time import walking_seconds
from walktime_planner.model.path_label import PathLabel


@dataclass
class DrawnPath:
    """A drawn multi-segment path.

    Attributes:
        id: Unique identifier ("path-1", "path-2", ...), never reused
        sequence_number: Creation order (1, 2, 3, ...), used for naming and color
        vertices: Ordered vertices in walking order (may hold fewer than 2)
        color: Hex color string from the palette
        labels: Derived segment and total labels (never snapshotted for undo)
        label_handles: Renderer handles of the labels currently on the map

    Example:
        path = DrawnPath(id="path-1", sequence_number=1, vertices=[a, b], color="#3388ff")
        print(path.length_feet)
    """

    id: str
    sequence_number: int
    vertices: list[LatLng]
    color: str
    labels: list[PathLabel] = field(default_factory=list)
    label_handles: list[str] = field(default_factory=list)

    @staticmethod
    def id_for(sequence_number: int) -> str:
        """Path id derived from a sequence number."""
        return f"{EntityPrefixes.PATH}{sequence_number}"

    @property
    def name(self) -> str:
        """Display name for sidebar rows."""
        return f"Path {self.sequence_number}"

    @property
    def segment_count(self) -> int:
        return max(0, len(self.vertices) - 1)

    @property
    def length_feet(self) -> float:
        """Total length in feet (0 for fewer than 2 vertices)."""
        return GeoCalculator.path_length_feet(self.vertices)

    @property
    def walking_seconds(self) -> float:
        """Estimated walking time for the whole path."""
        return walking_seconds(self.length_feet)

    @property
    def midpoint(self) -> LatLng | None:
        """Point halfway along the path by arc length."""
        return GeoCalculator.path_midpoint_by_arc_length(self.vertices)

    def __repr__(self) -> str:
        return f"DrawnPath({self.id}, n={self.sequence_number}, {len(self.vertices)} vertices, {self.color})"
