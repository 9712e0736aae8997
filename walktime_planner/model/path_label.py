"""PathLabel - A positioned text annotation derived from a drawn path."""

from dataclasses import dataclass
from enum import Enum

from walktime_planner.core.lat_lng import LatLng


class LabelKind(Enum):
    """What the label annotates."""

    SEGMENT = "segment"  # Walking time of one vertex pair, at its midpoint
    TOTAL = "total"  # Walking time of the whole path, at its last vertex


@dataclass(frozen=True)
class PathLabel:
    """Text marker computed by LabelLayout.

    Attributes:
        position: Anchor coordinate on the map
        text: Display text, e.g. "3m" or "Total: 12 min"
        kind: SEGMENT or TOTAL
    """

    position: LatLng
    text: str
    kind: LabelKind

    @property
    def is_total(self) -> bool:
        return self.kind is LabelKind.TOTAL
