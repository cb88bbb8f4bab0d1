"""Application state controller: the sole owner and writer of the Session."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging
from pathlib import Path

from .exceptions import ChatError, GenerationError
from .gateway import AIGateway
from .imaging import DEFAULT_MAX_IMAGE_BYTES, decode_upload, read_image_file
from .models import ImageRef, Message, Role, Session, Status, Style
from .state import StateManager

LOGGER = logging.getLogger(__name__)

WELCOME_MESSAGE_ID = "welcome"
WELCOME_TEXT = (
    "Great photo! Select a style above to reimagine this space, or type a custom "
    "instruction below."
)
STYLE_APPLIED_TEXT = (
    "Here is the {name} version of your room! Use the slider to compare. "
    "You can refine this further in the chat."
)
STYLE_FAILED_TEXT = (
    "Sorry, I encountered an error generating the design. Please try again."
)
REFINE_APPLIED_TEXT = "I've updated the design based on your feedback."
REFINE_FAILED_TEXT = "I couldn't update the image. Please try a simpler instruction."
CHAT_FAILED_TEXT = "I'm having trouble connecting right now."

SessionListener = Callable[[Session], None]


class DesignController:
    """Orchestrate upload, style generation, refinement and chat.

    Every public operation returns ``True`` when it was accepted and
    ``False`` when a precondition rejected it without touching state.
    Gateway failures never propagate; they become fixed assistant messages.
    """

    def __init__(
        self,
        gateway: AIGateway,
        session: Session | None = None,
        *,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self.gateway = gateway
        self.session = session if session is not None else Session()
        self.state = StateManager(self.session)
        self.max_image_bytes = max_image_bytes
        self._listeners: list[SessionListener] = []

    def add_listener(self, listener: SessionListener) -> None:
        """Register a callback invoked after every session mutation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.session)
            except Exception as exc:  # noqa: BLE001 - a UI listener must not break state.
                LOGGER.warning(
                    "controller.listener.failed",
                    extra={
                        "event": "controller.listener.failed",
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )

    def _append(self, role: Role, text: str) -> Message:
        message = Message(role=role, text=text)
        self.session.messages.append(message)
        self._notify()
        return message

    async def _begin(self, busy_state: Status) -> bool:
        transitioned = await self.state.transition_if(Status.IDLE, busy_state)
        if transitioned:
            LOGGER.info(
                "app.state.transition",
                extra={
                    "event": "app.state.transition",
                    "from_state": Status.IDLE.value,
                    "to_state": busy_state.value,
                },
            )
            self._notify()
        return transitioned

    async def _finish(self) -> None:
        previous = self.session.status
        await self.state.transition_to(Status.IDLE)
        LOGGER.info(
            "app.state.transition",
            extra={
                "event": "app.state.transition",
                "from_state": previous.value,
                "to_state": Status.IDLE.value,
            },
        )
        self._notify()

    def upload_image(self, file_bytes: bytes, name: str = "") -> bool:
        """Replace the source image and reset all derived state.

        Raises InvalidInputError, leaving the session untouched, when the
        bytes are not a decodable image.
        """
        if not self.session.is_idle:
            LOGGER.info(
                "controller.upload.rejected",
                extra={
                    "event": "controller.upload.rejected",
                    "status": self.session.status.value,
                },
            )
            return False

        image = decode_upload(file_bytes, max_bytes=self.max_image_bytes)
        self.session.source_image = image
        self.session.current_image = None
        self.session.source_name = name
        self.session.last_style = ""
        self.session.messages = [
            Message(role=Role.ASSISTANT, text=WELCOME_TEXT, id=WELCOME_MESSAGE_ID)
        ]
        self.session.status = Status.IDLE
        LOGGER.info(
            "controller.upload.accepted",
            extra={
                "event": "controller.upload.accepted",
                "image_name": name,
                "mime_type": image.mime_type,
                "image_bytes": image.size,
            },
        )
        self._notify()
        return True

    def load_image_file(self, path: str) -> bool:
        """Read a local image file fully into memory and upload it."""
        file_bytes = read_image_file(path, max_bytes=self.max_image_bytes)
        return self.upload_image(file_bytes, name=Path(path).name)

    async def select_style(self, style: Style) -> bool:
        """Restyle the source image with a catalog style."""
        source = self.session.source_image
        if source is None:
            return False
        if not await self._begin(Status.GENERATING):
            LOGGER.info(
                "controller.style.rejected",
                extra={"event": "controller.style.rejected", "style": style.id},
            )
            return False

        try:
            result = await self.gateway.transform_image(source, style.prompt)
        except GenerationError as exc:
            LOGGER.warning(
                "controller.style.failed",
                extra={
                    "event": "controller.style.failed",
                    "style": style.id,
                    "error": str(exc),
                },
            )
            self._append(Role.ASSISTANT, STYLE_FAILED_TEXT)
        except asyncio.CancelledError:
            LOGGER.info(
                "controller.request.cancelled",
                extra={"event": "controller.request.cancelled", "style": style.id},
            )
            raise
        else:
            self.session.current_image = result
            self.session.last_style = style.name
            self._append(Role.ASSISTANT, STYLE_APPLIED_TEXT.format(name=style.name))
        finally:
            await self._finish()
        return True

    async def send_message(self, text: str, is_refinement: bool) -> bool:
        """Post a user message, then either refine the image or chat about it."""
        normalized = text.strip()
        source = self.session.source_image
        if not normalized or source is None:
            return False

        busy_state = Status.GENERATING if is_refinement else Status.CHATTING
        history = list(self.session.messages)
        if not await self._begin(busy_state):
            LOGGER.info(
                "controller.message.rejected",
                extra={
                    "event": "controller.message.rejected",
                    "refinement": is_refinement,
                },
            )
            return False

        try:
            self._append(Role.USER, normalized)
            if is_refinement:
                # Refinements build on the latest redesign when there is one.
                await self._refine(self.session.current_image or source, normalized)
            else:
                await self._chat(history, normalized)
        except asyncio.CancelledError:
            LOGGER.info(
                "controller.request.cancelled",
                extra={
                    "event": "controller.request.cancelled",
                    "refinement": is_refinement,
                },
            )
            raise
        finally:
            await self._finish()
        return True

    async def _refine(self, base: ImageRef, instruction: str) -> None:
        try:
            result = await self.gateway.transform_image(base, instruction)
        except GenerationError as exc:
            LOGGER.warning(
                "controller.refine.failed",
                extra={"event": "controller.refine.failed", "error": str(exc)},
            )
            self._append(Role.ASSISTANT, REFINE_FAILED_TEXT)
            return
        self.session.current_image = result
        self._append(Role.ASSISTANT, REFINE_APPLIED_TEXT)

    async def _chat(self, history: list[Message], text: str) -> None:
        try:
            reply = await self.gateway.chat_reply(
                history, text, self.session.visible_image
            )
        except ChatError as exc:
            LOGGER.warning(
                "controller.chat.failed",
                extra={"event": "controller.chat.failed", "error": str(exc)},
            )
            self._append(Role.ASSISTANT, CHAT_FAILED_TEXT)
            return
        self._append(Role.ASSISTANT, reply)

