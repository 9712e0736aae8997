"""Geodesic and planar helpers for drawn walking paths.

Provides the geometry the annotation engine needs:
- Distance calculation (Haversine formula, same sphere as the map library)
- Unit conversion (meters to feet)
- Path total length
- Segment midpoint (planar lat/lng mean)
- Arc-length-weighted path midpoint
- Map ground resolution for the scale hint

All calculations use a spherical Earth approximation (R = 6,371 km).
Midpoints interpolate latitude and longitude linearly, which is accurate
enough at the scale of an airport terminal.
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Sequence

import numpy as np

from walktime_planner.constants import MapConfig, WalkConfig
from walktime_planner.core.lat_lng import LatLng

EARTH_RADIUS_M = WalkConfig.EARTH_RADIUS_M


class GeoCalculator:
    """Static methods for distances and midpoints along drawn paths.

    Coordinates are LatLng in decimal degrees (WGS84).
    Distances are in meters unless the method name says feet.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def distance_m(a: LatLng, b: LatLng) -> float:
        """Distance in meters between two coordinates."""
        return GeoCalculator.haversine_distance_m(lat1=a.lat, lon1=a.lng, lat2=b.lat, lon2=b.lng)

    @staticmethod
    def to_feet(meters: float) -> float:
        """Convert meters to feet."""
        return meters * WalkConfig.FEET_PER_METER

    @staticmethod
    def meters_per_pixel(lat: float, zoom: float) -> float:
        """Ground distance covered by one screen pixel of the Web Mercator map."""
        return MapConfig.METERS_PER_PIXEL_ZOOM_0 * cos(radians(lat)) / 2**zoom

    @staticmethod
    def segment_lengths_m(vertices: Sequence[LatLng]) -> np.ndarray:
        """Lengths of consecutive vertex pairs in meters (empty for < 2 vertices)."""
        return np.array(
            [GeoCalculator.distance_m(a=vertices[i], b=vertices[i + 1]) for i in range(len(vertices) - 1)],
            dtype=float,
        )

    @staticmethod
    def path_length_feet(vertices: Sequence[LatLng]) -> float:
        """Total path length in feet.

        Args:
            vertices: Ordered path vertices

        Returns:
            Sum of consecutive pairwise distances in feet; 0 for 0 or 1 vertices.
        """
        if len(vertices) < 2:
            return 0.0
        return GeoCalculator.to_feet(float(GeoCalculator.segment_lengths_m(vertices).sum()))

    @staticmethod
    def segment_midpoint(a: LatLng, b: LatLng) -> LatLng:
        """Arithmetic mean of latitude and of longitude."""
        return LatLng(lat=(a.lat + b.lat) / 2, lng=(a.lng + b.lng) / 2)

    @staticmethod
    def interpolate(a: LatLng, b: LatLng, ratio: float) -> LatLng:
        """Linear lat/lng interpolation; ratio 0 gives a, 1 gives b."""
        return LatLng(
            lat=a.lat + (b.lat - a.lat) * ratio,
            lng=a.lng + (b.lng - a.lng) * ratio,
        )

    @staticmethod
    def path_midpoint_by_arc_length(vertices: Sequence[LatLng]) -> LatLng | None:
        """Point halfway along the path, measured by arc length.

        Walks the segments accumulating length and interpolates inside the
        segment that contains the 50% mark.

        Args:
            vertices: Ordered path vertices

        Returns:
            None for no vertices, the single vertex for one vertex, otherwise
            the interpolated midpoint.
        """
        if not vertices:
            return None
        if len(vertices) == 1:
            return vertices[0]

        lengths = GeoCalculator.segment_lengths_m(vertices)
        mid_distance = float(lengths.sum()) / 2

        accumulated = 0.0
        for i, seg_length in enumerate(lengths):
            if accumulated + seg_length >= mid_distance:
                # Zero-length path: every segment is degenerate, stay at its start
                ratio = (mid_distance - accumulated) / seg_length if seg_length > 0 else 0.0
                return GeoCalculator.interpolate(a=vertices[i], b=vertices[i + 1], ratio=ratio)
            accumulated += seg_length

        # Unreachable for finite coordinates
        return vertices[len(vertices) // 2]
