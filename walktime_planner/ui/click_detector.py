"""Click detector - detects map clicks from Pydeck events.

Pydeck click events return picked object data directly. Every pickable
layer puts a "type" field on its data rows so the detector can tell paths,
vertex handles and sketch vertices apart.

Coordinate tracking prevents re-processing the same click on reruns.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from walktime_planner.constants import ClickConfig
from walktime_planner.model.click_info import ClickInfo, MapClickType, MarkerType

if TYPE_CHECKING:
    from walktime_planner.ui.context import ClickDeduplicationContext

logger = logging.getLogger(__name__)


@dataclass
class ClickDetector:
    """Detects clicks from Pydeck picked objects.

    Attributes:
        dedup: ClickDeduplicationContext for tracking last-seen clicks
        map_version: Included in object ids so the same marker is clickable
            again after the map component was recreated
    """

    dedup: "ClickDeduplicationContext"
    map_version: int = 0

    def detect(
        self,
        clicked_object: dict[str, Any] | None,
        clicked_coordinate: list[float] | None,
    ) -> ClickInfo | None:
        """Detect click from Pydeck event data.

        Args:
            clicked_object: The picked deck.gl object data (dict) or None
            clicked_coordinate: [lon, lat] of click location or None

        Returns:
            ClickInfo for new clicks, None otherwise
        """
        obj_id = self._get_object_id(obj=clicked_object)
        coord_tuple = tuple(clicked_coordinate) if clicked_coordinate else None

        if not self.dedup.is_new_click(coord=coord_tuple, obj_id=obj_id):
            return None

        if clicked_object is not None:
            return self._parse_object_click(obj=clicked_object, coordinate=clicked_coordinate)

        if clicked_coordinate is not None:
            lon, lat = clicked_coordinate[0], clicked_coordinate[1]
            logger.debug(f"Terrain click at ({lat:.6f}, {lon:.6f})")
            return ClickInfo(click_type=MapClickType.TERRAIN, lat=lat, lon=lon)

        return None

    def _get_object_id(self, obj: dict[str, Any] | None) -> str | None:
        """Generate unique ID for object for deduplication."""
        if obj is None:
            return None

        obj_type = obj.get("type", "")
        layer_handle = obj.get("layer_handle", "")

        if obj_type in {ClickConfig.TYPE_VERTEX, ClickConfig.TYPE_SKETCH_VERTEX}:
            return f"{obj_type}_{layer_handle}_{obj.get('vertex_index', 0)}_v{self.map_version}"

        return f"{obj_type}_{layer_handle}_v{self.map_version}"

    def _parse_object_click(self, obj: dict[str, Any], coordinate: list[float] | None) -> ClickInfo | None:
        """Parse clicked object to ClickInfo."""
        obj_type = obj.get("type")
        lon, lat = (coordinate[0], coordinate[1]) if coordinate else (None, None)

        if not obj_type:
            logger.warning(f"Object click without type field: {obj}")
            return None

        logger.debug(f"Object click: type={obj_type}, data={obj}")

        if obj_type == ClickConfig.TYPE_PATH:
            layer_handle = obj.get("layer_handle")
            if not layer_handle:
                logger.warning("Path click missing layer_handle")
                return None
            return ClickInfo(
                click_type=MapClickType.MARKER,
                marker_type=MarkerType.PATH,
                layer_handle=layer_handle,
                lat=lat,
                lon=lon,
            )

        if obj_type == ClickConfig.TYPE_VERTEX:
            layer_handle = obj.get("layer_handle")
            vertex_index = obj.get("vertex_index")
            if not layer_handle or vertex_index is None:
                logger.warning(f"Vertex click missing layer_handle or vertex_index: {obj}")
                return None
            return ClickInfo(
                click_type=MapClickType.MARKER,
                marker_type=MarkerType.VERTEX,
                layer_handle=layer_handle,
                vertex_index=int(vertex_index),
                lat=lat,
                lon=lon,
            )

        if obj_type == ClickConfig.TYPE_SKETCH_VERTEX:
            vertex_index = obj.get("vertex_index")
            if vertex_index is None:
                logger.warning("Sketch vertex click missing vertex_index")
                return None
            return ClickInfo(
                click_type=MapClickType.MARKER,
                marker_type=MarkerType.SKETCH_VERTEX,
                vertex_index=int(vertex_index),
                lat=lat,
                lon=lon,
            )

        # Labels are display only: treat the click as a click on the map below
        if obj_type == ClickConfig.TYPE_LABEL:
            if lat is None or lon is None:
                return None
            return ClickInfo(click_type=MapClickType.TERRAIN, lat=lat, lon=lon)

        logger.warning(f"Unknown object type: {obj_type}")
        return None
