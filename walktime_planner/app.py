"""Walk Time Planner - Interactive airport walking time annotation.

Draw walking paths on a map and see per-segment and total walking times,
a running summary of all paths and a bounded undo history.

Run: streamlit run walktime_planner/app.py
"""

import logging
import traceback

import streamlit as st

from walktime_planner.constants import AppConfig, MapConfig
from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.walk_time import format_scale
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.ui import (
    DrawContext,
    DrawToolStateMachine,
    MapRenderer,
    MapSurface,
    SidebarRenderer,
    WalkTimeChart,
    handle_map_result,
    render_control_panel,
    store_paths_changed,
)
from walktime_planner.ui.pydeck_click_handler import render_pydeck_map

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> None:
    """Initialize session state with surface, engine and UI components."""
    if "surface" not in st.session_state:
        st.session_state.surface = MapSurface()

    if "engine" not in st.session_state:
        surface = st.session_state.surface
        engine = AnnotationEngine(surface=surface, labels=surface)
        engine.subscribe(store_paths_changed)
        st.session_state.engine = engine
        st.session_state.paths_changed = engine.snapshot()

    if "state_machine" not in st.session_state:
        sm, ctx = DrawToolStateMachine.create()
        st.session_state.state_machine = sm
        st.session_state.context = ctx

    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = MapRenderer()

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0


def reset_ui_state() -> None:
    """Reset UI state to initial while preserving the engine.

    Called when an error occurs to recover gracefully. Resets:
    - State machine to Idle state (drops sketch, edits, removal marks)
    - Map version (to clear any stale map state)

    Preserves:
    - Annotation engine (all paths and undo history)
    - Map surface (layers and labels of those paths)
    """
    logger.info("Resetting UI state due to error recovery")

    old_ctx: DrawContext = st.session_state.context
    surface: MapSurface = st.session_state.surface

    # Put back geometry of layers that were being edited
    for handle, vertices in old_ctx.edit.originals.items():
        surface.set_layer_vertices(handle=handle, vertices=vertices)

    sm, ctx = DrawToolStateMachine.create()
    ctx.map = old_ctx.map
    st.session_state.state_machine = sm
    st.session_state.context = ctx

    st.session_state.map_version = st.session_state.get("map_version", 0) + 1
    logger.info("UI state reset complete - engine preserved")


# =============================================================================
# MAP RENDERING
# =============================================================================


def _render_map() -> None:
    """Render map and handle clicks."""
    sm: DrawToolStateMachine = st.session_state.state_machine
    ctx: DrawContext = st.session_state.context
    engine: AnnotationEngine = st.session_state.engine
    surface: MapSurface = st.session_state.surface
    renderer: MapRenderer = st.session_state.map_renderer

    map_version = st.session_state.get("map_version", 0)
    logger.info(f"[RENDER] Map: state={sm.get_state_name()}, map_version={map_version}")

    renderer.update_view(
        lat=ctx.map.lat,
        lon=ctx.map.lon,
        zoom=ctx.map.zoom,
        pitch=ctx.map.pitch,
        bearing=ctx.map.bearing,
    )

    layer_names = {}
    for path in engine.paths():
        handle = engine.registry.layer_for_path(path.id)
        if handle is not None:
            layer_names[handle] = f"{path.name} · {path.length_feet:,.0f} ft"
    highlight_handle = engine.registry.layer_for_path(ctx.viewing.path_id) if ctx.viewing.path_id else None

    deck = renderer.render(
        surface=surface,
        ctx=ctx,
        layer_names=layer_names,
        highlight_handle=highlight_handle,
        show_vertex_handles=sm.is_editing,
    )
    click_result = render_pydeck_map(deck=deck, key=f"main_map_{map_version}", height=MapConfig.MAP_HEIGHT_PX)
    meters_per_px = GeoCalculator.meters_per_pixel(lat=ctx.map.lat, zoom=ctx.map.zoom)
    st.caption(
        f"Scale: {format_scale(pixels=MapConfig.SCALE_HINT_PX, meters=MapConfig.SCALE_HINT_PX * meters_per_px)}"
    )
    handle_map_result(
        clicked_object=click_result.clicked_object,
        clicked_coordinate=click_result.clicked_coordinate,
    )


def _render_chart() -> None:
    """Render the walking time chart below the map."""
    ctx: DrawContext = st.session_state.context
    engine: AnnotationEngine = st.session_state.engine
    chart = WalkTimeChart()

    path = engine.get_path(ctx.viewing.path_id) if ctx.viewing.path_id else None
    if path is not None and path.segment_count > 0:
        st.plotly_chart(chart.render_path(path=path), width="stretch", key="path_chart")
        return

    rows = engine.path_rows()
    if rows:
        st.plotly_chart(chart.render_overview(rows=rows), width="stretch", key="overview_chart")


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(AppConfig.TITLE)

    try:
        _run_app_ui()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        # Reset UI state while preserving the engine
        reset_ui_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    sm: DrawToolStateMachine = st.session_state.state_machine
    ctx: DrawContext = st.session_state.context
    engine: AnnotationEngine = st.session_state.engine

    logger.info(f"[MAIN] Render cycle starting: state={sm.get_state_name()}, paths={len(engine.registry)}")

    SidebarRenderer(engine=engine, context=ctx, change=st.session_state.paths_changed).render()

    col_map, col_ctrl = st.columns([3, 1])
    with col_map:
        _render_map()
    with col_ctrl:
        render_control_panel(sm=sm, ctx=ctx, engine=engine)

    _render_chart()


if __name__ == "__main__":
    main()
