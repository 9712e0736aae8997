"""Message - User-facing messages for the walk time planner UI.

Architecture:
- LEFT (sidebar): summary and path list, no instruction text
- CENTER (under map): toasts for clicks that do nothing in the current mode
- RIGHT (control panel): ONE instruction message for what to do NOW

Design Principles:
- Maximum ONE message per panel location at any time
- RIGHT = ACTION (yellow/blue) - Specific next step for the draw tool state
- Toasts are transient and always logged
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from walktime_planner.constants import WalkConfig


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - user mistakes


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline (sidebars/panels).

    These messages are rendered as st.info/st.warning/st.error blocks that persist
    in the UI until replaced. Used for context, instructions, and status.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications.

    Good for: click feedback, undo confirmations
    Bad for: context messages, status displays, instruction panels
    """

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES
# =============================================================================


@dataclass(frozen=True)
class InvalidClickMessage(ToastMessage):
    """User clicked something that does nothing in the current mode."""

    action: str  # e.g., "select a vertex"
    reason: str  # e.g., "click a path to mark it"

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return f"Cannot {self.action}: {self.reason}"


@dataclass(frozen=True)
class PathTooShortMessage(ToastMessage):
    """User tried to finish a sketch with too few vertices."""

    vertex_count: int

    @property
    def icon(self) -> str:
        return "✏️"

    @property
    def message(self) -> str:
        return (
            f"A path needs at least {WalkConfig.MIN_PATH_VERTICES} points "
            f"(has {self.vertex_count}). Click the map to add more."
        )


@dataclass(frozen=True)
class UndoneMessage(ToastMessage):
    """Confirmation after an undo."""

    description: str

    @property
    def icon(self) -> str:
        return "↩️"

    @property
    def message(self) -> str:
        return f"Undone: {self.description}"


# =============================================================================
# CONTROL PANEL MESSAGES - one per draw tool state
# =============================================================================


@dataclass(frozen=True)
class IdleContextMessage(Message):
    """Instructions while no tool mode is active."""

    path_count: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        if self.path_count == 0:
            return "**Click the map** to start drawing a walking path."
        return (
            f"**{self.path_count} path(s)** drawn. Click the map to start another, "
            "or use **Edit** / **Remove** to change existing paths."
        )


@dataclass(frozen=True)
class DrawingContextMessage(Message):
    """Instructions while sketching a new path."""

    vertex_count: int
    length_label: str

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return (
            f"**Drawing** · {self.vertex_count} point(s) · {self.length_label}\n\n"
            "Click the map to add points. Click the last point or **Finish** to complete."
        )


@dataclass(frozen=True)
class EditingContextMessage(Message):
    """Instructions while editing vertices."""

    selected_vertex: int | None
    changed_paths: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        if self.selected_vertex is None:
            step = "Click a vertex handle to select it."
        else:
            step = f"Vertex {self.selected_vertex + 1} selected. Click the map to move it there."
        return f"**Editing** · {self.changed_paths} path(s) changed\n\n{step} **Save** applies all changes."


@dataclass(frozen=True)
class RemovingContextMessage(Message):
    """Instructions while removing paths with the tool."""

    marked_count: int

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return (
            f"**Removing** · {self.marked_count} path(s) marked\n\n"
            "Click paths to mark them. **Save** removes them (this cannot be undone)."
        )
