"""Reusable modal screens for help text and the upload path prompt."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class InfoScreen(ModalScreen[None]):
    """Modal that shows a block of text and closes on Escape/OK."""

    CSS = """
    InfoScreen {
        align: center middle;
    }

    #info-dialog {
        width: 80;
        max-width: 120;
        max-height: 28;
        padding: 1 2;
        border: round $panel;
        background: $surface;
    }

    #info-body {
        height: auto;
    }

    #info-actions {
        dock: bottom;
        height: 3;
        align: right middle;
    }
    """

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text

    def compose(self) -> ComposeResult:
        with Container(id="info-dialog"):
            yield Static(self._text, id="info-body")
            with Container(id="info-actions"):
                yield Button("OK", id="info-ok", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "info-ok":
            event.stop()
            self.dismiss(None)

    def on_key(self, event: Any) -> None:  # noqa: ANN401
        key = str(getattr(event, "key", "")).lower()
        if key in {"escape", "enter"}:
            event.stop()
            self.dismiss(None)


class ImagePathScreen(ModalScreen[str | None]):
    """Fallback modal for collecting a photo path when no native dialog is available."""

    CSS = """
    ImagePathScreen {
        align: center middle;
    }

    #image-path-dialog {
        width: 64;
        height: auto;
        padding: 1 3;
        border: round $panel;
        background: $surface;
    }

    #image-path-title {
        padding-bottom: 1;
        text-style: bold;
    }

    #image-path-input {
        width: 100%;
        margin: 1 0;
    }

    #image-path-help {
        padding-top: 1;
        text-align: center;
    }
    """

    def compose(self) -> ComposeResult:
        with Container(id="image-path-dialog"):
            yield Static("Upload room photo", id="image-path-title")
            yield Input(
                placeholder="~/Pictures/living-room.jpg",
                id="image-path-input",
            )
            yield Static("Enter to upload | Esc to cancel", id="image-path-help")

    def on_mount(self) -> None:
        self.query_one("#image-path-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "image-path-input":
            return
        event.stop()
        value = event.value.strip()
        self.dismiss(value if value else None)

    def on_key(self, event: Any) -> None:  # noqa: ANN401
        if str(getattr(event, "key", "")).lower() == "escape":
            event.stop()
            self.dismiss(None)
