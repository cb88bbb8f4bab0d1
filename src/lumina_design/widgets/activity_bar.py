"""Animated in-progress indicator shown while a request is in flight."""

from __future__ import annotations

import asyncio
from typing import Any

from textual.app import ComposeResult
from textual.widgets import Label, Static

from ..models import Status

_ANIMATION_FRAMES: tuple[str, ...] = (
    "·······",
    "●······",
    "·●·····",
    "··●····",
    "···●···",
    "····●··",
    "·····●·",
    "······●",
)

STATUS_LABELS: dict[Status, str] = {
    Status.GENERATING: "Rendering design...",
    Status.CHATTING: "Thinking...",
}


def label_for_status(status: Status) -> str:
    """Return the indicator caption for a busy status, or '' when idle."""
    return STATUS_LABELS.get(status, "")


class ActivityBar(Static):
    """Render job activity animation and a cancel hint."""

    DEFAULT_CSS = """
    ActivityBar {
        layout: horizontal;
        height: 1;
        padding: 0 1;
    }
    ActivityBar #activity_left {
        width: 1fr;
    }
    ActivityBar #activity_right {
        width: auto;
        text-align: right;
        color: $text-muted;
    }
    """

    def __init__(self, cancel_hint: str = "esc cancel", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._cancel_hint = cancel_hint
        self._animation_task: asyncio.Task[None] | None = None
        self._label = ""

    @property
    def label(self) -> str:
        return self._label

    @property
    def running(self) -> bool:
        return bool(self._label)

    def compose(self) -> ComposeResult:
        yield Label("", id="activity_left")
        yield Label("", id="activity_right")

    def show_status(self, status: Status) -> None:
        """Start, relabel or stop the indicator to match ``status``."""
        label = label_for_status(status)
        if label == self._label:
            return
        self._stop_animation()
        self._label = label
        right = self.query_one("#activity_right", Label)
        if not label:
            self.query_one("#activity_left", Label).update("")
            right.update("")
            return
        right.update(self._cancel_hint)
        self._animation_task = asyncio.create_task(self._animate_frames(label))

    def _stop_animation(self) -> None:
        task = self._animation_task
        self._animation_task = None
        if task is not None and not task.done():
            task.cancel()

    def on_unmount(self) -> None:
        self._stop_animation()

    async def _animate_frames(self, label: str) -> None:
        """Cycle through animation frames until cancelled."""
        left = self.query_one("#activity_left", Label)
        frame_index = 0
        while True:
            frame = _ANIMATION_FRAMES[frame_index % len(_ANIMATION_FRAMES)]
            left.update(f"{frame}  {label}")
            frame_index += 1
            await asyncio.sleep(0.12)
