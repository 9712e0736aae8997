"""Walk Time Planner - Annotate walking paths with walking times.

An interactive map tool for airport walking distances featuring:
- Per-segment and total walking time labels on every drawn path
- Path registry with stable ids, names and cycling colors
- Bounded undo history for created and deleted paths
- State machine-based draw tool (draw, edit, remove)

Modules:
    core: Foundation classes (geo calculations, walking time formatting)
    model: Data structures (DrawnPath, PathRegistry, UndoLog, AnnotationEngine)
    ui: Streamlit interface components (state machine, draw tool, renderers)

Example:
    from walktime_planner.model import AnnotationEngine, PathFinished
    from walktime_planner.core import LatLng
"""
