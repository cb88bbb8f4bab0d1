"""Horizontally scrolling row of style cards."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from textual.app import ComposeResult
from textual.containers import HorizontalScroll
from textual.message import Message
from textual.widgets import Button

from ..models import Style


class StylePicker(HorizontalScroll):
    """Render the style catalog; clicking a card requests that style."""

    DEFAULT_CSS = """
    StylePicker {
        height: auto;
        scrollbar-size-horizontal: 1;
    }
    StylePicker > Button {
        min-width: 16;
        margin-right: 1;
    }
    """

    class Selected(Message):
        """Posted when an enabled style card is clicked."""

        def __init__(self, style: Style) -> None:
            super().__init__()
            self.style = style

    def __init__(self, styles: Sequence[Style], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.catalog = tuple(styles)
        self._by_button_id = {f"style-{style.id}": style for style in self.catalog}

    def compose(self) -> ComposeResult:
        for button_id, style in self._by_button_id.items():
            yield Button(style.name, id=button_id)

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable every card; disabled cards ignore clicks."""
        for button in self.query(Button):
            button.disabled = not enabled

    def on_button_pressed(self, event: Button.Pressed) -> None:
        style = self._by_button_id.get(event.button.id or "")
        if style is None:
            return
        event.stop()
        self.post_message(self.Selected(style))
