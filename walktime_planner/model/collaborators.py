"""Protocols for the map-side collaborators of the annotation engine.

The engine never touches map objects directly. It talks to:
- DrawingSurface: owns rendered polylines ("layers"), addressed by opaque handles
- LabelRenderer: places and removes positioned text markers by handle

ui.map_surface.MapSurface implements both for the pydeck renderer.
"""

from typing import Protocol, Sequence

from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.path_label import PathLabel


class DrawingSurface(Protocol):
    """Rendered polylines owned by the drawing tool."""

    def add_layer(self, vertices: Sequence[LatLng], color: str) -> str:
        """Add a polyline and return its handle."""
        ...

    def style_layer(self, handle: str, color: str) -> None:
        """Recolor an existing polyline."""
        ...

    def remove_layer(self, handle: str) -> None:
        """Remove a polyline. Unknown handles are ignored."""
        ...

    def clear_layers(self) -> None:
        """Remove every polyline."""
        ...


class LabelRenderer(Protocol):
    """Positioned text markers on the map."""

    def place_label(self, label: PathLabel, color: str) -> str:
        """Render a label and return its handle."""
        ...

    def remove_label(self, handle: str) -> None:
        """Remove a rendered label. Unknown handles are ignored."""
        ...

    def clear_labels(self) -> None:
        """Remove every rendered label."""
        ...
