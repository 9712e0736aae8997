"""MapSurface - In-memory drawing surface and label renderer.

Holds everything the map shows for finished paths:
- layers: rendered polylines keyed by layer handle (owned by the draw tool)
- labels: rendered time labels keyed by label handle (placed by the engine)

MapRenderer turns the contents into pydeck layers on every rerun, so the
surface is plain Python state that lives in st.session_state.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Sequence

from walktime_planner.constants import EntityPrefixes
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.path_label import PathLabel

logger = logging.getLogger(__name__)


@dataclass
class SurfaceLayer:
    """A rendered polyline."""

    handle: str
    vertices: list[LatLng]
    color: str


@dataclass(frozen=True)
class RenderedLabel:
    """A placed time label with the color of its path."""

    handle: str
    label: PathLabel
    color: str


class MapSurface:
    """Implements DrawingSurface and LabelRenderer for the pydeck map."""

    def __init__(self) -> None:
        self.layers: dict[str, SurfaceLayer] = {}
        self.rendered_labels: dict[str, RenderedLabel] = {}
        self._layer_ids = itertools.count(1)
        self._label_ids = itertools.count(1)

    def __repr__(self) -> str:
        return f"MapSurface(layers={len(self.layers)}, labels={len(self.rendered_labels)})"

    # =========================================================================
    # DrawingSurface
    # =========================================================================

    def add_layer(self, vertices: Sequence[LatLng], color: str) -> str:
        handle = f"{EntityPrefixes.LAYER}{next(self._layer_ids)}"
        self.layers[handle] = SurfaceLayer(handle=handle, vertices=list(vertices), color=color)
        logger.debug(f"Layer added: {handle}, {len(vertices)} vertices")
        return handle

    def style_layer(self, handle: str, color: str) -> None:
        layer = self.layers.get(handle)
        if layer is None:
            logger.warning(f"style_layer: unknown layer {handle}")
            return
        layer.color = color

    def remove_layer(self, handle: str) -> None:
        if self.layers.pop(handle, None) is not None:
            logger.debug(f"Layer removed: {handle}")

    def clear_layers(self) -> None:
        self.layers.clear()

    def set_layer_vertices(self, handle: str, vertices: Sequence[LatLng]) -> bool:
        """Move a layer's geometry (draw tool edits). Returns False for unknown handles."""
        layer = self.layers.get(handle)
        if layer is None:
            return False
        layer.vertices = list(vertices)
        return True

    def layer_vertices(self, handle: str) -> list[LatLng] | None:
        layer = self.layers.get(handle)
        return list(layer.vertices) if layer is not None else None

    # =========================================================================
    # LabelRenderer
    # =========================================================================

    def place_label(self, label: PathLabel, color: str) -> str:
        handle = f"{EntityPrefixes.LABEL}{next(self._label_ids)}"
        self.rendered_labels[handle] = RenderedLabel(handle=handle, label=label, color=color)
        return handle

    def remove_label(self, handle: str) -> None:
        self.rendered_labels.pop(handle, None)

    def clear_labels(self) -> None:
        self.rendered_labels.clear()
