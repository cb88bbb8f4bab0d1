"""Pointer tracking for the before/after comparison slider."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DIVIDER_PERCENT = 50.0


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def divider_percent(pointer_x: float, container_left: float, container_width: float) -> float:
    """Map a pointer x coordinate to a divider position in [0, 100]."""
    if container_width <= 0:
        return DEFAULT_DIVIDER_PERCENT
    return clamp_percent((pointer_x - container_left) / container_width * 100.0)


@dataclass
class DragState:
    """Divider position plus the transient dragging flag.

    Moves are ignored unless a drag is active; a drag starts on pointer
    down inside the slider and ends on pointer up anywhere.
    """

    percent: float = DEFAULT_DIVIDER_PERCENT
    dragging: bool = False

    def begin(self) -> None:
        self.dragging = True

    def move(self, pointer_x: float, container_left: float, container_width: float) -> bool:
        """Update the divider from a pointer move; return True if it changed."""
        if not self.dragging:
            return False
        updated = divider_percent(pointer_x, container_left, container_width)
        if updated == self.percent:
            return False
        self.percent = updated
        return True

    def end(self) -> None:
        self.dragging = False

    def nudge(self, delta: float) -> float:
        """Shift the divider by ``delta`` percent (keyboard control)."""
        self.percent = clamp_percent(self.percent + delta)
        return self.percent

    def reset(self) -> None:
        self.percent = DEFAULT_DIVIDER_PERCENT
        self.dragging = False
