"""Before/after wipe slider rendered with terminal half-blocks."""

from __future__ import annotations

from typing import Any

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text
from textual import events
from textual.binding import Binding
from textual.widget import Widget

from ..imaging import render_wipe
from ..models import ImageRef
from ..slider import DragState
from .preview import UNREADABLE_IMAGE_TEXT


class ComparisonSlider(Widget, can_focus=True):
    """Overlay ``after`` with the left part of ``before``, split at a draggable divider.

    Both images are cover-fitted to the widget independently; images with
    different aspect ratios will not line up.
    """

    DEFAULT_CSS = """
    ComparisonSlider {
        height: 1fr;
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("left", "nudge(-1)", "Slide left", show=False),
        Binding("right", "nudge(1)", "Slide right", show=False),
        Binding("home", "jump(0)", "Show redesign", show=False),
        Binding("end", "jump(100)", "Show original", show=False),
    ]

    def __init__(self, step: float = 5.0, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.step = step
        self.drag = DragState()
        self._before: ImageRef | None = None
        self._after: ImageRef | None = None

    @property
    def divider_percent(self) -> float:
        return self.drag.percent

    @property
    def dragging(self) -> bool:
        return self.drag.dragging

    def set_images(self, before: ImageRef | None, after: ImageRef | None) -> None:
        """Swap in a new pair; the divider stays where the user left it."""
        if before == self._before and after == self._after:
            return
        if before != self._before:
            self.drag.reset()
        self._before = before
        self._after = after
        self.refresh()

    def begin_drag(self) -> None:
        self.drag.begin()

    def drag_to(self, screen_x: float) -> bool:
        """Move the divider to a screen column while dragging."""
        region = self.content_region
        changed = self.drag.move(screen_x, region.x, region.width)
        if changed:
            self.refresh()
        return changed

    def end_drag(self) -> None:
        self.drag.end()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        event.stop()
        self.begin_drag()
        # Capturing routes the release to us even when it happens elsewhere.
        self.capture_mouse()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.dragging:
            self.drag_to(event.screen_x)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.dragging:
            self.end_drag()
            self.release_mouse()

    def on_mouse_release(self, event: events.MouseRelease) -> None:
        self.end_drag()

    def action_nudge(self, direction: int) -> None:
        self.drag.nudge(direction * self.step)
        self.refresh()

    def action_jump(self, percent: float) -> None:
        self.drag.nudge(percent - self.drag.percent)
        self.refresh()

    def _caption(self, width: int) -> Table:
        caption = Table.grid(expand=True)
        caption.add_column(justify="left")
        caption.add_column(justify="center")
        caption.add_column(justify="right")
        caption.add_row(
            Text(" Original ", style="bold white on grey23"),
            Text(f"{self.divider_percent:.0f}%", style="dim"),
            Text(" Redesigned ", style="bold white on #4f46e5"),
        )
        caption.width = width
        return caption

    def render(self) -> RenderableType:
        if self._before is None or self._after is None:
            return Text("No redesign yet.", style="dim")
        width, height = self.content_size
        image_rows = max(1, height - 1)
        try:
            body = render_wipe(
                self._before, self._after, self.divider_percent, width, image_rows
            )
        except (OSError, ValueError):
            body = Text(UNREADABLE_IMAGE_TEXT, style="dim")
        return Group(self._caption(width), body)
