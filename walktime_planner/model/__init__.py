"""Data model classes for the walking path annotation engine.

Follows the separation of entities (what exists) vs derived views (what is shown):
- DrawnPath: A drawn path (id, sequence number, vertices, color, labels)
- PathLabel: Positioned segment/total time label
- LabelLayout: Pure label computation plus rebuild via LabelRenderer
- PathRegistry: Central owner of all paths and the path/layer lookup table
- UndoLog: Bounded create/delete history
- PathAggregator: Cross-path totals and sidebar rows
- AnnotationEngine: Coordinating service consuming draw-tool events
"""

from walktime_planner.model.aggregator import PathAggregator, PathRow, SummaryText
from walktime_planner.model.annotation_engine import AnnotationEngine
from walktime_planner.model.collaborators import DrawingSurface, LabelRenderer
from walktime_planner.model.drawn_path import DrawnPath
from walktime_planner.model.events import (
    DrawEvent,
    PathEdit,
    PathEdited,
    PathFinished,
    PathRemoved,
    PathsChanged,
)
from walktime_planner.model.label_layout import LabelLayout
from walktime_planner.model.path_label import LabelKind, PathLabel
from walktime_planner.model.path_registry import PathRegistry
from walktime_planner.model.undo_log import (
    CreatePathAction,
    DeletePathAction,
    UndoAction,
    UndoLog,
)

__all__ = [
    "DrawnPath",
    "PathLabel",
    "LabelKind",
    "LabelLayout",
    "DrawingSurface",
    "LabelRenderer",
    "PathRegistry",
    "UndoLog",
    "UndoAction",
    "CreatePathAction",
    "DeletePathAction",
    "PathAggregator",
    "PathRow",
    "SummaryText",
    "DrawEvent",
    "PathFinished",
    "PathEdit",
    "PathEdited",
    "PathRemoved",
    "PathsChanged",
    "AnnotationEngine",
]
