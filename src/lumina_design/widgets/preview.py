"""Single-image room preview shown until a redesign exists."""

from __future__ import annotations

from typing import Any

from rich.console import RenderableType
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widget import Widget
from textual.widgets import Static

from ..imaging import render_image
from ..models import ImageRef, Status

UPLOAD_PROMPT = "Upload a photo of your room to get started (ctrl+o)."
SELECT_STYLE_CAPTION = "Select a style below to begin"
DESIGNING_CAPTION = "Designing your room..."
UNREADABLE_IMAGE_TEXT = "This image could not be displayed."


def caption_for(has_image: bool, status: Status) -> str:
    if not has_image:
        return UPLOAD_PROMPT
    if status is Status.GENERATING:
        return DESIGNING_CAPTION
    return SELECT_STYLE_CAPTION


class ImageCanvas(Widget):
    """Draw an image cover-fitted to the widget size."""

    DEFAULT_CSS = """
    ImageCanvas {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.image: ImageRef | None = None

    def set_image(self, image: ImageRef | None) -> None:
        if image == self.image:
            return
        self.image = image
        self.refresh()

    def render(self) -> RenderableType:
        if self.image is None:
            return Text("")
        width, height = self.content_size
        try:
            return render_image(self.image, width, height)
        except (OSError, ValueError):
            return Text(UNREADABLE_IMAGE_TEXT, style="dim")


class RoomPreview(Vertical):
    """Show the uploaded photo with a caption describing the next step."""

    DEFAULT_CSS = """
    RoomPreview {
        height: 1fr;
    }
    RoomPreview #preview_caption {
        height: 1;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._caption = UPLOAD_PROMPT

    @property
    def caption(self) -> str:
        return self._caption

    def compose(self) -> ComposeResult:
        yield ImageCanvas(id="preview_canvas")
        yield Static(self._caption, id="preview_caption")

    def show(self, image: ImageRef | None, status: Status) -> None:
        self._caption = caption_for(image is not None, status)
        self.query_one(ImageCanvas).set_image(image)
        self.query_one("#preview_caption", Static).update(self._caption)
