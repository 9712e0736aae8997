"""Configuration constants for Walk Time Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Default map view parameters
    WalkConfig: Walking speed and unit conversion factors
    StyleConfig: Path color palette and map styling
    LabelConfig: Time label styling and text rules
    UndoConfig: Undo log capacity
    ClickConfig: Click detection and pickable object types
    LocationConfig: Named locations for quick map recentering
    ChartConfig: Chart rendering dimensions
"""


class AppConfig:
    """UI application settings."""

    TITLE = "Walk Time Planner - Airport Walking Distances"
    ICON = "🚶"
    LAYOUT = "wide"


class EntityPrefixes:
    """ID prefixes for engine entities."""

    PATH = "path-"
    LAYER = "layer-"
    LABEL = "label-"


class MapConfig:
    """Default map view parameters."""

    # Initial center for program start: ATL (busiest airport)
    START_CENTER_LAT = 33.6407
    START_CENTER_LON = -84.4277

    # Terminal/gate detail needs close zoom
    DEFAULT_ZOOM = 17
    MAX_ZOOM = 20

    # 2D top-down only
    DEFAULT_PITCH = 0.0
    DEFAULT_BEARING = 0.0

    MAP_HEIGHT_PX = 620

    # Web Mercator ground resolution at zoom 0 on the equator (256 px tiles)
    METERS_PER_PIXEL_ZOOM_0 = 156543.03392
    SCALE_HINT_PX = 100


class WalkConfig:
    """Walking speed and unit conversion factors."""

    # Fixed walking speed used for all time estimates
    WALKING_SPEED_FT_PER_SEC = 3.0

    FEET_PER_METER = 3.28084
    FEET_PER_MILE = 5280

    # Earth's radius in meters (same spherical model as the map library)
    EARTH_RADIUS_M = 6_371_000

    # Drawn polylines need at least this many vertices to be finished
    MIN_PATH_VERTICES = 2


class StyleConfig:
    """Path color palette and map styling."""

    # Cycled by creation order: palette[(sequence_number - 1) % len(palette)]
    PATH_COLORS = [
        "#3388ff",
        "#ff6b6b",
        "#4ecdc4",
        "#45b7d1",
        "#96ceb4",
        "#ffeaa7",
        "#dfe6e9",
        "#fd79a8",
    ]

    PATH_WIDTH_PX = 4
    PATH_OPACITY = 0.8

    # In-progress sketch and edit markers
    SKETCH_COLOR = "#3388ff"
    VERTEX_MARKER_COLOR = [255, 255, 255, 230]
    VERTEX_MARKER_BORDER = [51, 51, 51, 255]
    SELECTED_VERTEX_COLOR = [249, 115, 22, 255]  # Orange-500
    REMOVAL_MARK_COLOR = [239, 68, 68, 200]  # Red-500

    @staticmethod
    def hex_to_rgba(hex_color: str, alpha: int = 255) -> list[int]:
        """Convert '#rrggbb' to [R, G, B, A] (pydeck color format).

        Args:
            hex_color: Color string like "#3388ff"
            alpha: Alpha channel 0-255

        Returns:
            [R, G, B, A] list with 0-255 components.
        """
        value = hex_color.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Invalid hex color: {hex_color}")
        return [int(value[i : i + 2], 16) for i in (0, 2, 4)] + [alpha]


assert StyleConfig.PATH_COLORS, "Palette must not be empty"


class LabelConfig:
    """Time label styling and text rules."""

    TOTAL_PREFIX = "Total: "
    PLACEHOLDER = "--"

    SEGMENT_FONT_SIZE = 11
    TOTAL_FONT_SIZE = 13
    TEXT_COLOR = [255, 255, 255, 255]
    BORDER_COLOR = [255, 255, 255, 255]


class UndoConfig:
    """Undo system configuration."""

    # Maximum number of actions to keep in undo log
    # Oldest actions are discarded when limit is reached
    MAX_UNDO_LOG_SIZE = 10


assert UndoConfig.MAX_UNDO_LOG_SIZE > 0


class ClickConfig:
    """Click detection configuration.

    Every pickable pydeck object carries a "type" field so the click
    detector can tell what was clicked without tooltip parsing.
    """

    TYPE_PATH = "path"
    TYPE_VERTEX = "vertex"
    TYPE_SKETCH_VERTEX = "sketch_vertex"
    TYPE_LABEL = "label"

    VERTEX_MARKER_RADIUS = 6
    PICKING_RADIUS_PX = 8

    # Minimum time between processed clicks
    DEBOUNCE_TIME_DELAY = 0.15


class LocationConfig:
    """Named locations for quick map recentering.

    Static reference data only; nothing in the annotation engine reads it.
    Tuples are (code, name, lat, lon, zoom).
    """

    LOCATIONS = [
        ("ATL", "Atlanta Hartsfield-Jackson", 33.6407, -84.4277, 17),
        ("DFW", "Dallas/Fort Worth", 32.8998, -97.0403, 16),
        ("DEN", "Denver", 39.8561, -104.6737, 16),
        ("ORD", "Chicago O'Hare", 41.9742, -87.9073, 16),
        ("LAX", "Los Angeles", 33.9416, -118.4085, 16),
        ("JFK", "New York JFK", 40.6413, -73.7781, 16),
    ]
    assert len({code for code, *_ in LOCATIONS}) == len(LOCATIONS)


class ChartConfig:
    """Chart rendering dimensions and settings."""

    CHART_HEIGHT = 300
    CHART_WIDTH = 1100

    BAR_OPACITY = 0.85
    CUMULATIVE_LINE_COLOR = "#333333"
