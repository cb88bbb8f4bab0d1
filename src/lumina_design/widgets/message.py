"""Message bubble widget for conversation rendering."""

from __future__ import annotations

from typing import Any

from rich.markdown import Markdown
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from ..models import Message, Role


class MessageBubble(Vertical):
    """Render a single conversation message with its role header."""

    DEFAULT_CSS = """
    MessageBubble {
        height: auto;
    }
    MessageBubble > #header-block {
        padding: 0;
        color: $text-muted;
    }
    MessageBubble > #content-block {
        height: auto;
    }
    """

    def __init__(self, message: Message, show_timestamp: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.message = message
        self.show_timestamp = show_timestamp
        self.add_class(f"role-{message.role.value}")

    @property
    def role_prefix(self) -> str:
        """Return a human-friendly role label."""
        return "You" if self.message.role is Role.USER else "Designer"

    @property
    def message_content(self) -> str:
        return self.message.text

    def _compose_header(self) -> str:
        if self.show_timestamp:
            stamp = self.message.created_at.strftime("%H:%M:%S")
            return f"**{self.role_prefix}**  _{stamp}_"
        return f"**{self.role_prefix}**"

    def compose(self) -> ComposeResult:
        yield Static(Markdown(self._compose_header()), id="header-block")
        yield Static(Markdown(self.message.text.rstrip()), id="content-block")
