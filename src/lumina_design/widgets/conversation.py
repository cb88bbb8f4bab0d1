"""Conversation panel: message log, progress indicator and the two send actions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Static

from .. import models
from .activity_bar import ActivityBar
from .message import MessageBubble

EMPTY_LOG_HINT = (
    "Ask questions about your design or type instructions to update the look."
)
INPUT_PLACEHOLDER = "E.g., 'Make the rug blue' or 'Where can I buy this lamp?'"


class ConversationPanel(Vertical):
    """Render the message log and collect chat or refinement input.

    The panel owns only the text in its input field. Everything else is
    pushed in by the app from the session.
    """

    DEFAULT_CSS = """
    ConversationPanel {
        height: 1fr;
    }
    ConversationPanel #conversation_title {
        text-style: bold;
        padding: 0 1;
        border-bottom: solid $panel;
    }
    ConversationPanel #message_log {
        height: 1fr;
        padding: 0 1;
    }
    ConversationPanel #empty_hint {
        color: $text-muted;
        text-align: center;
        margin-top: 1;
    }
    ConversationPanel #input_row {
        height: auto;
    }
    ConversationPanel #message_input {
        width: 1fr;
    }
    ConversationPanel Button {
        margin-left: 1;
        min-width: 10;
    }
    """

    class Submitted(Message):
        """Posted when the user sends the buffer as chat or as a refinement."""

        def __init__(self, text: str, is_refinement: bool) -> None:
            super().__init__()
            self.text = text
            self.is_refinement = is_refinement

    def __init__(self, show_timestamps: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.show_timestamps = show_timestamps
        self._status = models.Status.IDLE
        self._rendered_ids: list[str] = []

    def compose(self) -> ComposeResult:
        yield Static("Design Assistant", id="conversation_title")
        with VerticalScroll(id="message_log"):
            yield Static(EMPTY_LOG_HINT, id="empty_hint")
        yield ActivityBar(id="activity_bar")
        with Horizontal(id="input_row"):
            yield Input(placeholder=INPUT_PLACEHOLDER, id="message_input")
            yield Button("Update Look", id="refine_button", variant="success")
            yield Button("Chat", id="chat_button", variant="primary")

    def on_mount(self) -> None:
        self._sync_buttons()

    @property
    def status(self) -> models.Status:
        return self._status

    @property
    def rendered_count(self) -> int:
        return len(self._rendered_ids)

    def _can_submit(self, text: str) -> bool:
        return self._status is models.Status.IDLE and bool(text.strip())

    def _sync_buttons(self) -> None:
        value = self.query_one("#message_input", Input).value
        disabled = not self._can_submit(value)
        self.query_one("#refine_button", Button).disabled = disabled
        self.query_one("#chat_button", Button).disabled = disabled

    def submit(self, is_refinement: bool) -> bool:
        """Post the buffer as chat or refinement and clear it; False if not allowed."""
        input_widget = self.query_one("#message_input", Input)
        text = input_widget.value
        if not self._can_submit(text):
            return False
        self.post_message(self.Submitted(text, is_refinement))
        input_widget.value = ""
        self._sync_buttons()
        return True

    def restore_input(self, text: str) -> None:
        """Put rejected text back unless the user has started typing again."""
        input_widget = self.query_one("#message_input", Input)
        if input_widget.value:
            return
        input_widget.value = text
        self._sync_buttons()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "message_input":
            self._sync_buttons()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "message_input":
            return
        event.stop()
        self.submit(is_refinement=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "refine_button":
            event.stop()
            self.submit(is_refinement=True)
        elif event.button.id == "chat_button":
            event.stop()
            self.submit(is_refinement=False)

    def set_status(self, status: models.Status) -> None:
        """Reflect the session status in the indicator and send controls."""
        self._status = status
        self.query_one(ActivityBar).show_status(status)
        self._sync_buttons()

    def sync_messages(self, messages: Sequence[models.Message]) -> None:
        """Mount bubbles for messages not yet shown; rebuild after a reset."""
        log = self.query_one("#message_log", VerticalScroll)
        incoming_ids = [message.id for message in messages]
        if incoming_ids[: len(self._rendered_ids)] != self._rendered_ids:
            log.query(MessageBubble).remove()
            self._rendered_ids = []

        pending = messages[len(self._rendered_ids) :]
        self.query_one("#empty_hint", Static).display = not messages
        if not pending:
            return
        bubbles = []
        for message in pending:
            bubble = MessageBubble(message, show_timestamp=self.show_timestamps)
            bubble.add_class(f"message-{message.role.value}")
            bubbles.append(bubble)
            self._rendered_ids.append(message.id)
        log.mount(*bubbles)
        self.call_after_refresh(log.scroll_end, animate=False)
