"""Walking time estimates and their text formatting.

Two time formats are used across the UI:
- short ("3m", "<1m") for per-segment map labels
- long ("3 min", "1 min", "<1 min") for totals, sidebar rows and summary

Rounding is to the nearest minute with halves rounding up, so 30 seconds
already counts as one minute.
"""

from math import floor

from walktime_planner.constants import LabelConfig, WalkConfig


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values."""
    return int(floor(value + 0.5))


def walking_seconds(feet: float) -> float:
    """Seconds needed to walk the given distance at the fixed walking speed."""
    return feet / WalkConfig.WALKING_SPEED_FT_PER_SEC


def format_short(seconds: float) -> str:
    """Format seconds for segment labels: '<1m' or '<N>m'."""
    minutes = round_half_up(seconds / 60)
    if minutes == 0:
        return "<1m"
    return f"{minutes}m"


def format_long(seconds: float) -> str:
    """Format seconds for totals: '<1 min', '1 min' or '<N> min'."""
    minutes = round_half_up(seconds / 60)
    if minutes == 0:
        return "<1 min"
    if minutes == 1:
        return "1 min"
    return f"{minutes} min"


def format_distance(feet: float) -> str:
    """Format a distance as rounded feet with thousands separators plus miles.

    Example:
        format_distance(feet=6000.0) -> "6,000 ft (1.14 mi)"
    """
    return f"{round_half_up(feet):,} ft ({feet / WalkConfig.FEET_PER_MILE:.2f} mi)"


def format_total_label(seconds: float) -> str:
    """Text of the total label drawn at a path's last vertex."""
    return f"{LabelConfig.TOTAL_PREFIX}{format_long(seconds)}"


def format_scale(pixels: int, meters: float) -> str:
    """Imperial and metric length of a screen distance, e.g. '100 px ≈ 328 ft / 100 m'."""
    feet = meters * WalkConfig.FEET_PER_METER
    return f"{pixels} px ≈ {round_half_up(feet):,} ft / {round_half_up(meters):,} m"
