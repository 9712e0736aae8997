"""Messages exchanged between the draw tool, the engine and the UI.

Draw tool -> engine:
    PathFinished: a sketch was completed and is rendered by a surface layer
    PathEdited: one or more existing layers got new vertices
    PathRemoved: layers were removed with the tool's own delete control

Engine -> UI:
    PathsChanged: current sidebar rows and summary after any applied change

Layer handles are the drawing surface's identifiers; the engine maps them
to path ids through the registry's lookup table.
"""

from dataclasses import dataclass

from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.aggregator import PathRow, SummaryText


@dataclass(frozen=True)
class PathFinished:
    layer_handle: str | None
    vertices: tuple[LatLng, ...]


@dataclass(frozen=True)
class PathEdit:
    layer_handle: str
    vertices: tuple[LatLng, ...]


@dataclass(frozen=True)
class PathEdited:
    edits: tuple[PathEdit, ...]


@dataclass(frozen=True)
class PathRemoved:
    layer_handles: tuple[str, ...]


DrawEvent = PathFinished | PathEdited | PathRemoved


@dataclass(frozen=True)
class PathsChanged:
    """Snapshot for sidebar/summary rendering."""

    rows: tuple[PathRow, ...]
    summary: SummaryText
    undo_depth: int
