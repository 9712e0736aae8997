"""UndoLog - Bounded history of reversible path lifecycle actions.

Two action kinds exist:
- CreatePathAction: recorded when a drawn path is finished
- DeletePathAction: recorded when the user deletes a path from the sidebar,
  with a full snapshot (vertices, color, sequence number)

Pushing beyond capacity drops the oldest entry; undo pops the newest.
There is no redo: undoing never records a new action.
"""

import logging
from collections import deque
from dataclasses import dataclass

from walktime_planner.constants import UndoConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.drawn_path import DrawnPath
from walktime_planner.model.path_registry import PathRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# Undo Action Types
# =============================================================================


@dataclass(frozen=True)
class CreatePathAction:
    """Undo action for a newly finished path."""

    path_id: str


@dataclass(frozen=True)
class DeletePathAction:
    """Undo action for a user deletion (stores data for restore)."""

    path_id: str
    vertices: tuple[LatLng, ...]
    color: str
    sequence_number: int


UndoAction = CreatePathAction | DeletePathAction


class UndoLog:
    """Most-recent-last action history with FIFO eviction.

    Example:
        log = UndoLog()
        log.record_create(path_id="path-1")
        log.undo(registry=registry)  # removes path-1
    """

    def __init__(self, capacity: int = UndoConfig.MAX_UNDO_LOG_SIZE) -> None:
        if capacity <= 0:
            raise ValueError(f"Undo capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._actions: deque[UndoAction] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._actions)

    def __bool__(self) -> bool:
        return bool(self._actions)

    @property
    def actions(self) -> list[UndoAction]:
        """Snapshot of the log, oldest first."""
        return list(self._actions)

    def peek(self) -> UndoAction | None:
        """Most recent action without removing it."""
        return self._actions[-1] if self._actions else None

    def push(self, action: UndoAction) -> None:
        """Append an action, evicting the oldest one beyond capacity."""
        if len(self._actions) == self.capacity:
            logger.debug(f"[UNDO] Log full, dropping oldest action {self._actions[0]}")
        self._actions.append(action)

    def pop(self) -> UndoAction | None:
        """Remove and return the most recent action (None if empty)."""
        if not self._actions:
            return None
        return self._actions.pop()

    def record_create(self, path_id: str) -> None:
        self.push(CreatePathAction(path_id=path_id))

    def record_delete(self, path: DrawnPath) -> None:
        """Snapshot a path at the moment of user deletion."""
        self.push(
            DeletePathAction(
                path_id=path.id,
                vertices=tuple(path.vertices),
                color=path.color,
                sequence_number=path.sequence_number,
            )
        )

    def undo(self, registry: PathRegistry) -> UndoAction | None:
        """Revert the most recent action against the registry.

        Returns:
            The undone action, or None if the log was empty or the
            deleted path's id is already taken.
        """
        action = self.pop()
        if action is None:
            logger.debug("[UNDO] Nothing to undo")
            return None

        if isinstance(action, CreatePathAction):
            registry.remove(path_id=action.path_id)
            logger.info(f"[UNDO] Reverted creation of {action.path_id}")

        elif isinstance(action, DeletePathAction):
            restored = registry.restore(
                vertices=action.vertices,
                color=action.color,
                sequence_number=action.sequence_number,
            )
            if restored is None:
                logger.warning(f"[UNDO] {action.path_id} already exists, nothing restored")
                return None
            logger.info(f"[UNDO] Restored deleted {action.path_id}")

        else:
            logger.warning(f"[UNDO] Ignoring unsupported action {action!r}")

        return action
