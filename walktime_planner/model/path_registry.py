"""PathRegistry - Single source of truth for drawn paths.

Owns every DrawnPath and is the only writer of their vertices and color.
Provides operations for:
- Creating paths from finished sketches (sequence number, id, palette color)
- Replacing vertices after edits
- Removing and clearing paths together with their rendered labels
- Restoring a path from an undo snapshot

Also owns the bidirectional lookup table between path ids and the drawing
surface's layer handles, so draw-tool events can be resolved without
attaching anything to the tool's own objects.
"""

import logging
from typing import Sequence

from walktime_planner.constants import StyleConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.model.collaborators import DrawingSurface, LabelRenderer
from walktime_planner.model.drawn_path import DrawnPath
from walktime_planner.model.label_layout import LabelLayout

logger = logging.getLogger(__name__)


class PathRegistry:
    """Collection of drawn paths keyed by id, in creation order.

    Example:
        registry = PathRegistry(surface=surface, labels=surface)
        path = registry.create(vertices=[a, b, c])
        registry.update_vertices(path_id=path.id, vertices=[a, c])
        registry.remove(path_id=path.id)
    """

    def __init__(
        self,
        surface: DrawingSurface,
        labels: LabelRenderer,
        palette: Sequence[str] = tuple(StyleConfig.PATH_COLORS),
    ) -> None:
        """Initialize empty registry.

        Args:
            surface: Drawing surface holding the rendered polylines
            labels: Renderer for time labels
            palette: Colors cycled by sequence number
        """
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self.surface = surface
        self.labels = labels
        self.palette = list(palette)
        self.paths: dict[str, DrawnPath] = {}

        self._path_counter = 0
        self._layer_by_path: dict[str, str] = {}
        self._path_by_layer: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, path_id: object) -> bool:
        return path_id in self.paths

    @property
    def sequence_counter(self) -> int:
        """Highest sequence number handed out so far."""
        return self._path_counter

    def color_for(self, sequence_number: int) -> str:
        """Palette color for a sequence number (depends only on creation order)."""
        return self.palette[(sequence_number - 1) % len(self.palette)]

    def get(self, path_id: str) -> DrawnPath | None:
        return self.paths.get(path_id)

    def all_paths(self) -> list[DrawnPath]:
        """Paths in creation/restore order."""
        return list(self.paths.values())

    # =========================================================================
    # Layer Lookup Table
    # =========================================================================

    def bind_layer(self, path_id: str, layer_handle: str) -> None:
        """Associate a path with the surface layer that renders it."""
        old_handle = self._layer_by_path.pop(path_id, None)
        if old_handle is not None:
            self._path_by_layer.pop(old_handle, None)
        self._layer_by_path[path_id] = layer_handle
        self._path_by_layer[layer_handle] = path_id

    def _unbind_layer(self, path_id: str) -> str | None:
        handle = self._layer_by_path.pop(path_id, None)
        if handle is not None:
            self._path_by_layer.pop(handle, None)
        return handle

    def path_id_for_layer(self, layer_handle: str) -> str | None:
        return self._path_by_layer.get(layer_handle)

    def layer_for_path(self, path_id: str) -> str | None:
        return self._layer_by_path.get(path_id)

    # =========================================================================
    # Lifecycle Operations
    # =========================================================================

    def create(self, vertices: Sequence[LatLng], layer_handle: str | None = None) -> DrawnPath:
        """Create a path from a finished sketch.

        Args:
            vertices: Ordered vertices (may be empty; such paths get no labels)
            layer_handle: Surface layer already rendering the sketch. If None,
                the registry asks the surface for a new layer.

        Returns:
            The created path.
        """
        self._path_counter += 1
        sequence_number = self._path_counter
        color = self.color_for(sequence_number)

        path = DrawnPath(
            id=DrawnPath.id_for(sequence_number),
            sequence_number=sequence_number,
            vertices=list(vertices),
            color=color,
        )
        self.paths[path.id] = path

        if layer_handle is None:
            layer_handle = self.surface.add_layer(vertices=path.vertices, color=color)
        else:
            self.surface.style_layer(handle=layer_handle, color=color)
        self.bind_layer(path_id=path.id, layer_handle=layer_handle)

        LabelLayout.apply(path=path, renderer=self.labels)
        logger.info(f"Path created: {path.id}, {len(path.vertices)} vertices, color={color}")
        return path

    def update_vertices(self, path_id: str, vertices: Sequence[LatLng]) -> bool:
        """Replace a path's vertices and rebuild its labels.

        Args:
            path_id: Path to update
            vertices: New ordered vertices

        Returns:
            True if updated, False if the id is unknown (stale edit, ignored).
        """
        path = self.paths.get(path_id)
        if path is None:
            logger.debug(f"Ignoring edit for unknown path {path_id}")
            return False

        path.vertices = list(vertices)
        LabelLayout.apply(path=path, renderer=self.labels)
        logger.info(f"Path edited: {path_id}, {len(path.vertices)} vertices")
        return True

    def remove(self, path_id: str) -> DrawnPath | None:
        """Remove a path, its layer and its rendered labels.

        Returns:
            The removed path, or None if the id is unknown.
        """
        path = self.paths.pop(path_id, None)
        if path is None:
            logger.debug(f"Ignoring removal of unknown path {path_id}")
            return None

        LabelLayout.discard(path=path, renderer=self.labels)
        layer_handle = self._unbind_layer(path_id)
        if layer_handle is not None:
            self.surface.remove_layer(handle=layer_handle)

        logger.info(f"Path removed: {path_id}")
        return path

    def restore(self, vertices: Sequence[LatLng], color: str, sequence_number: int) -> DrawnPath | None:
        """Reconstruct a path from an undo snapshot.

        The id is derived from the sequence number and the given color is
        used as-is (bypassing palette assignment). The live counter is only
        raised if the restored number is beyond it, so restored and newly
        created paths can never share an id.

        Returns:
            The restored path, or None if a path with that id already exists.
        """
        path_id = DrawnPath.id_for(sequence_number)
        if path_id in self.paths:
            logger.warning(f"Restore skipped: {path_id} already exists")
            return None

        self._path_counter = max(self._path_counter, sequence_number)

        path = DrawnPath(
            id=path_id,
            sequence_number=sequence_number,
            vertices=list(vertices),
            color=color,
        )
        self.paths[path_id] = path
        layer_handle = self.surface.add_layer(vertices=path.vertices, color=color)
        self.bind_layer(path_id=path_id, layer_handle=layer_handle)

        LabelLayout.apply(path=path, renderer=self.labels)
        logger.info(f"Path restored: {path_id}, {len(path.vertices)} vertices")
        return path

    def clear(self) -> int:
        """Remove all paths, layers and labels unconditionally.

        Returns:
            Number of paths removed.
        """
        count = len(self.paths)
        self.paths.clear()
        self._layer_by_path.clear()
        self._path_by_layer.clear()
        self.surface.clear_layers()
        self.labels.clear_labels()
        logger.info(f"Cleared {count} path(s)")
        return count
