"""Core foundation for walking distance and time calculations.

This module provides the mathematical backbone for walk time planning:
- LatLng: Geometry atom (lat, lng)
- GeoCalculator: Distances, path lengths and midpoints
- walk_time: Walking time estimates and text formatting
"""

from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.core.walk_time import (
    format_distance,
    format_long,
    format_short,
    format_total_label,
    round_half_up,
    walking_seconds,
)

__all__ = [
    # Geometry
    "LatLng",
    "GeoCalculator",
    # Walk time
    "walking_seconds",
    "round_half_up",
    "format_short",
    "format_long",
    "format_distance",
    "format_total_label",
]
