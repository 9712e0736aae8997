"""AnnotationEngine - Coordinates registry, undo log and totals.

The single service the UI talks to. It owns one PathRegistry, one UndoLog
and one PathAggregator, consumes draw-tool events, exposes the user
commands (delete, clear all, undo) and notifies listeners with a
PathsChanged snapshot after each handled event or command.

Undo policy:
- Finishing a path records a create action.
- Deleting from the sidebar records a delete action with a snapshot.
- Removing with the draw tool's own delete control records nothing.
- Clearing all paths neither records nor clears history.

Everything runs synchronously to completion; the engine is not thread-safe
and relies on Streamlit's one-script-run-at-a-time session model.
"""

import logging
from collections.abc import Callable

from walktime_planner.model.aggregator import PathAggregator, PathRow, SummaryText
from walktime_planner.model.collaborators import DrawingSurface, LabelRenderer
from walktime_planner.model.drawn_path import DrawnPath
from walktime_planner.model.events import (
    DrawEvent,
    PathEdited,
    PathFinished,
    PathRemoved,
    PathsChanged,
)
from walktime_planner.model.path_registry import PathRegistry
from walktime_planner.model.undo_log import UndoAction, UndoLog

logger = logging.getLogger(__name__)

PathsChangedListener = Callable[[PathsChanged], None]


class AnnotationEngine:
    """Walking path annotation engine.

    Example:
        surface = MapSurface()
        engine = AnnotationEngine(surface=surface, labels=surface)
        engine.subscribe(lambda change: print(change.summary))
        engine.handle(PathFinished(layer_handle=None, vertices=(a, b)))
        engine.undo()
    """

    def __init__(
        self,
        surface: DrawingSurface,
        labels: LabelRenderer,
        registry: PathRegistry | None = None,
        undo_log: UndoLog | None = None,
    ) -> None:
        self.registry = registry if registry is not None else PathRegistry(surface=surface, labels=labels)
        self.undo_log = undo_log if undo_log is not None else UndoLog()
        self.aggregator = PathAggregator(registry=self.registry)
        self._listeners: list[PathsChangedListener] = []

    # =========================================================================
    # Notifications
    # =========================================================================

    def subscribe(self, listener: PathsChangedListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: PathsChangedListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self) -> PathsChanged:
        return PathsChanged(
            rows=tuple(self.path_rows()),
            summary=self.summary(),
            undo_depth=len(self.undo_log),
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        change = self.snapshot()
        for listener in list(self._listeners):
            listener(change)

    # =========================================================================
    # Draw Tool Events
    # =========================================================================

    def handle(self, event: DrawEvent) -> None:
        """Apply a draw-tool event and notify listeners.

        Raises:
            TypeError: If event is not one of the draw-tool event types.
        """
        if isinstance(event, PathFinished):
            self._on_path_finished(event)
        elif isinstance(event, PathEdited):
            self._on_path_edited(event)
        elif isinstance(event, PathRemoved):
            self._on_path_removed(event)
        else:
            raise TypeError(f"Unsupported draw event: {event!r}")
        self._notify()

    def _on_path_finished(self, event: PathFinished) -> None:
        path = self.registry.create(vertices=event.vertices, layer_handle=event.layer_handle)
        self.undo_log.record_create(path_id=path.id)
        logger.info(f"[ENGINE] {path.name} finished ({path.length_feet:.0f} ft)")

    def _on_path_edited(self, event: PathEdited) -> None:
        for edit in event.edits:
            path_id = self.registry.path_id_for_layer(edit.layer_handle)
            if path_id is None:
                logger.debug(f"[ENGINE] Stale edit for layer {edit.layer_handle}, ignored")
                continue
            self.registry.update_vertices(path_id=path_id, vertices=edit.vertices)

    def _on_path_removed(self, event: PathRemoved) -> None:
        for layer_handle in event.layer_handles:
            path_id = self.registry.path_id_for_layer(layer_handle)
            if path_id is None:
                logger.debug(f"[ENGINE] Stale removal for layer {layer_handle}, ignored")
                continue
            self.registry.remove(path_id=path_id)
            logger.info(f"[ENGINE] {path_id} removed by draw tool (no undo entry)")

    # =========================================================================
    # User Commands
    # =========================================================================

    def delete_path(self, path_id: str) -> bool:
        """Delete a path from the sidebar, recording it for undo.

        Returns:
            True if deleted, False if the id is unknown.
        """
        path = self.registry.get(path_id)
        if path is None:
            logger.debug(f"[ENGINE] Delete of unknown path {path_id}, ignored")
            self._notify()
            return False

        self.undo_log.record_delete(path=path)
        self.registry.remove(path_id=path_id)
        logger.info(f"[ENGINE] {path.name} deleted by user")
        self._notify()
        return True

    def clear_all(self) -> int:
        """Remove every path. Undo history is left untouched.

        Returns:
            Number of paths removed.
        """
        count = self.registry.clear()
        self._notify()
        return count

    def undo(self) -> UndoAction | None:
        """Revert the most recent create or user delete.

        Returns:
            The undone action, or None if there was nothing to undo.
        """
        action = self.undo_log.undo(registry=self.registry)
        self._notify()
        return action

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_log)

    @property
    def undo_depth(self) -> int:
        return len(self.undo_log)

    def get_path(self, path_id: str) -> DrawnPath | None:
        return self.registry.get(path_id)

    def paths(self) -> list[DrawnPath]:
        return self.registry.all_paths()

    def path_rows(self) -> list[PathRow]:
        return self.aggregator.path_rows()

    def summary(self) -> SummaryText:
        return self.aggregator.summary()

    def total_distance_feet(self) -> float:
        return self.aggregator.total_distance_feet()
