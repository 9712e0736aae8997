"""LatLng - The fundamental geometry atom for walk time planning.

A LatLng represents a single map coordinate in decimal degrees.
It is the single source of truth for location throughout the system.

Used by:
- DrawnPath (ordered vertices)
- PathLabel (label anchor position)
- Draw tool sketches and edits
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LatLng:
    """A geographic coordinate.

    Attributes:
        lat: Latitude in decimal degrees (WGS84)
        lng: Longitude in decimal degrees (WGS84)

    Example:
        gate = LatLng(lat=33.6407, lng=-84.4277)
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.lat) or np.isnan(self.lng):
            raise ValueError(f"LatLng cannot have NaN coordinates: ({self.lat}, {self.lng})")

    @property
    def lon_lat(self) -> list[float]:
        """Return [lon, lat] list - GeoJSON/Pydeck order."""
        return [self.lng, self.lat]

    @classmethod
    def from_lon_lat(cls, coord: "list[float] | tuple[float, ...]") -> "LatLng":
        """Create from a [lon, lat] pair as delivered by deck.gl click events."""
        return cls(lat=float(coord[1]), lng=float(coord[0]))

    def __repr__(self) -> str:
        return f"LatLng(lat={self.lat:.6f}, lng={self.lng:.6f})"
