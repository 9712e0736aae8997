"""LabelLayout - Derives walking time labels for a drawn path.

For a path with n >= 2 vertices the layout is:
- n - 1 segment labels, one at each segment midpoint, short time format
- 1 total label at the last vertex, "Total: " + long time format

Labels are rebuilt from scratch on every call. Edits can change the
vertex count, so there is no incremental diffing; the rebuild is
O(vertex count).
"""

import logging
from typing import Sequence

from walktime_planner.constants import WalkConfig
from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.core.walk_time import format_short, format_total_label, walking_seconds
from walktime_planner.model.collaborators import LabelRenderer
from walktime_planner.model.drawn_path import DrawnPath
from walktime_planner.model.path_label import LabelKind, PathLabel

logger = logging.getLogger(__name__)


class LabelLayout:
    """Computes and (re)places the time labels of a path."""

    @staticmethod
    def compute(vertices: Sequence[LatLng]) -> list[PathLabel]:
        """Compute segment labels plus one total label.

        Args:
            vertices: Ordered path vertices

        Returns:
            Labels in segment order followed by the total label; empty for
            fewer than 2 vertices.
        """
        if len(vertices) < WalkConfig.MIN_PATH_VERTICES:
            return []

        labels = []
        total_feet = 0.0
        for start, end in zip(vertices, vertices[1:]):
            segment_feet = GeoCalculator.to_feet(GeoCalculator.distance_m(a=start, b=end))
            total_feet += segment_feet
            labels.append(
                PathLabel(
                    position=GeoCalculator.segment_midpoint(a=start, b=end),
                    text=format_short(walking_seconds(segment_feet)),
                    kind=LabelKind.SEGMENT,
                )
            )

        labels.append(
            PathLabel(
                position=vertices[-1],
                text=format_total_label(walking_seconds(total_feet)),
                kind=LabelKind.TOTAL,
            )
        )
        return labels

    @staticmethod
    def discard(path: DrawnPath, renderer: LabelRenderer) -> None:
        """Remove a path's rendered labels and forget them."""
        for handle in path.label_handles:
            renderer.remove_label(handle)
        path.label_handles = []
        path.labels = []

    @staticmethod
    def apply(path: DrawnPath, renderer: LabelRenderer) -> list[PathLabel]:
        """Discard the path's labels and render a fresh set.

        Writes only the derived labels/label_handles fields of the path.

        Returns:
            The new labels (empty for paths with fewer than 2 vertices).
        """
        LabelLayout.discard(path=path, renderer=renderer)
        labels = LabelLayout.compute(path.vertices)
        path.labels = labels
        path.label_handles = [renderer.place_label(label=label, color=path.color) for label in labels]
        logger.debug(f"Labels rebuilt for {path.id}: {len(labels)} label(s)")
        return labels
