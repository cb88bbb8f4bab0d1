"""Status bar widget for session telemetry."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.widgets import Label, Static


class StatusBar(Static):
    """Render compact session status information.

    Segments (left to right):
        room.jpg  |  Style: Japandi  |  Messages: 4  |  Chat: gemini
    """

    DEFAULT_CSS = """
    StatusBar {
        layout: horizontal;
        height: auto;
    }
    StatusBar Label {
        margin-right: 1;
    }
    StatusBar #status_style {
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose child labels for each status segment."""
        yield Label("No photo", id="status_source")
        yield Label("|", id="status_sep1")
        yield Label("Style: —", id="status_style")
        yield Label("|", id="status_sep2")
        yield Label("Messages: 0", id="status_messages")
        yield Label("|", id="status_sep3")
        yield Label("Chat: —", id="status_provider")

    def on_mount(self) -> None:
        """Cache label references once after the DOM is ready."""
        self._lbl_source = self.query_one("#status_source", Label)
        self._lbl_style = self.query_one("#status_style", Label)
        self._lbl_messages = self.query_one("#status_messages", Label)
        self._lbl_provider = self.query_one("#status_provider", Label)

    def set_status(
        self,
        *,
        source_name: str,
        style_name: str,
        message_count: int,
        provider: str,
    ) -> None:
        """Update all status segment labels."""
        self._lbl_source.update(source_name or "No photo")
        self._lbl_style.update(f"Style: {style_name or '—'}")
        self._lbl_messages.update(f"Messages: {message_count}")
        self._lbl_provider.update(f"Chat: {provider}")
