"""User interface components for the walk time planner.

File Structure (layout-based naming):
- left_panel.py: Sidebar with summary, path list, undo, clear all, locations
- center_map.py: Pydeck map with paths, labels, vertex handles, sketch
- right_panel.py: Draw tool instructions and buttons
- bottom_chart.py: Plotly walking time charts

Core Components:
- map_surface.py: MapSurface (drawing surface + label renderer)
- state_machine.py: DrawToolStateMachine (4 states) + StreamlitUIListener
- context.py: DrawContext and its sub-contexts
- draw_tool.py: DrawTool (gestures -> engine events)
- actions.py: All action functions (undo, delete, clear, tool buttons)
- click_handlers.py: State-specific map click processing
"""

from walktime_planner.ui.actions import (
    bump_map_version,
    clear_all_paths,
    delete_path,
    get_draw_tool,
    get_engine,
    highlight_path,
    recenter_on_location,
    reload_map,
    store_paths_changed,
    undo_last_action,
)
from walktime_planner.ui.bottom_chart import WalkTimeChart
from walktime_planner.ui.center_map import MapRenderer
from walktime_planner.ui.click_detector import ClickDetector
from walktime_planner.ui.click_handlers import dispatch_click, handle_map_result
from walktime_planner.ui.context import DrawContext
from walktime_planner.ui.draw_tool import DrawTool
from walktime_planner.ui.left_panel import SidebarRenderer
from walktime_planner.ui.map_surface import MapSurface
from walktime_planner.ui.right_panel import render_control_panel
from walktime_planner.ui.state_machine import DrawToolStateMachine, StreamlitUIListener

__all__ = [
    "DrawToolStateMachine",
    "DrawContext",
    "StreamlitUIListener",
    "DrawTool",
    "MapSurface",
    "MapRenderer",
    "WalkTimeChart",
    "SidebarRenderer",
    "ClickDetector",
    "dispatch_click",
    "handle_map_result",
    "render_control_panel",
    "bump_map_version",
    "clear_all_paths",
    "delete_path",
    "get_draw_tool",
    "get_engine",
    "highlight_path",
    "recenter_on_location",
    "reload_map",
    "store_paths_changed",
    "undo_last_action",
]
