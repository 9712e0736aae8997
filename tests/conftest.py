"""Shared pytest fixtures for walktime_planner tests.

Provides a fresh MapSurface/AnnotationEngine pair and reusable vertex data.
All fixtures use explicit values with documented rationale.

COORDINATE SYSTEM:
    Most tests walk due north along the prime meridian (lon=0). Along a
    meridian the haversine distance is exactly R * dlat, so lat_for_feet()
    gives vertices whose segment lengths are exact feet values and the
    expected walking times can be written down by hand.
"""

from collections.abc import Callable
from math import degrees

import pytest

from walktime_planner.constants import WalkConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.ui.context import ClickDeduplicationContext, DrawContext
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.state_machine import DrawToolStateMachine


def lat_for_feet(feet: float) -> float:
    """Latitude offset (degrees) that spans the given distance along a meridian."""
    return degrees(feet / WalkConfig.FEET_PER_METER / WalkConfig.EARTH_RADIUS_M)


def _north_path(*segment_feet: float) -> list[LatLng]:
    """Vertices starting at (0, 0) going north with the given segment lengths."""
    vertices = [LatLng(lat=0.0, lng=0.0)]
    lat = 0.0
    for feet in segment_feet:
        lat += lat_for_feet(feet)
        vertices.append(LatLng(lat=lat, lng=0.0))
    return vertices


# =============================================================================
# VERTEX FIXTURES
# =============================================================================


@pytest.fixture
def north_path() -> Callable[..., list[LatLng]]:
    """Factory: north_path(540.0, 900.0) builds a path with those segment lengths in feet."""
    return _north_path


@pytest.fixture
def vertices_540ft_900ft() -> list[LatLng]:
    """Two segments: 540 ft (180s = 3 min) then 900 ft (300s = 5 min).

    Total 1,440 ft = 480s = 8 min.
    """
    return _north_path(540.0, 900.0)


@pytest.fixture
def vertices_60ft() -> list[LatLng]:
    """Single short segment: 60 ft = 20s, rounds down to '<1m'."""
    return _north_path(60.0)


@pytest.fixture
def vertices_atl_gate_walk() -> list[LatLng]:
    """Short walk at ATL, the documented example path (about 475 ft = 158s = 3 min)."""
    return [LatLng(lat=33.64, lng=-84.43), LatLng(lat=33.641, lng=-84.429)]


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def surface() -> MapSurface:
    """Fresh in-memory drawing surface and label renderer."""
    return MapSurface()


@pytest.fixture
def engine(surface: MapSurface) -> AnnotationEngine:
    """Annotation engine rendering into the surface fixture."""
    return AnnotationEngine(surface=surface, labels=surface)


# =============================================================================
# DRAW TOOL FIXTURES
# =============================================================================


@pytest.fixture
def sm_and_ctx() -> tuple[DrawToolStateMachine, DrawContext]:
    """State machine without StreamlitUIListener (no st.rerun in tests)."""
    sm, ctx = DrawToolStateMachine.create(add_ui_listener=False)
    ctx.click_dedup.debounce_seconds = 0
    return sm, ctx


@pytest.fixture
def dedup() -> ClickDeduplicationContext:
    """Click deduplication without time debounce."""
    return ClickDeduplicationContext(debounce_seconds=0)
