"""Shared pytest fixtures for walktime_planner workflow tests.

Workflow tests drive the engine the way the app does: through the draw
tool (map clicks and buttons) and the sidebar commands (delete, undo,
clear all). Keep this file minimal.

COORDINATE SYSTEM:
    Real airport coordinates around ATL Concourse A-B, where 0.001° of
    latitude is about 365 ft.
"""

import pytest

from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.ui.context import DrawContext
from walktime_planner.ui.draw_tool import DrawTool
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.state_machine import DrawToolStateMachine

# Type alias for workflow_setup fixture return value
WorkflowSetup = tuple[DrawTool, DrawContext, AnnotationEngine, MapSurface]


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "apptest: Streamlit AppTest end-to-end runs")


@pytest.fixture
def path_a_vertices() -> list[LatLng]:
    """Documented example path: two vertices, one segment (~475 ft)."""
    return [LatLng(lat=33.64, lng=-84.43), LatLng(lat=33.641, lng=-84.429)]


@pytest.fixture
def path_b_vertices() -> list[LatLng]:
    """Three vertices walking north then east, two segments."""
    return [
        LatLng(lat=33.6400, lng=-84.4280),
        LatLng(lat=33.6420, lng=-84.4280),
        LatLng(lat=33.6420, lng=-84.4260),
    ]


@pytest.fixture
def workflow_setup() -> WorkflowSetup:
    """Draw tool wired to a fresh engine and surface (no Streamlit reruns)."""
    surface = MapSurface()
    engine = AnnotationEngine(surface=surface, labels=surface)
    sm, ctx = DrawToolStateMachine.create(add_ui_listener=False)
    ctx.click_dedup.debounce_seconds = 0
    tool = DrawTool(sm=sm, surface=surface, engine=engine)
    return tool, ctx, engine, surface
