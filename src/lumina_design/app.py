"""Main Textual application for reimagining a room photo."""

from __future__ import annotations

from collections.abc import Coroutine
import logging
from pathlib import Path
import sys
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from .config import load_config
from .controller import DesignController
from .exceptions import InvalidInputError
from .file_dialog import open_native_file_dialog
from .gateway import AIGateway, build_gateway
from .imaging import IMAGE_EXTENSIONS
from .logging_utils import configure_logging
from .models import Session, Status
from .screens import ImagePathScreen, InfoScreen
from .styles import STYLES
from .task_manager import TaskManager
from .widgets.comparison import ComparisonSlider
from .widgets.conversation import ConversationPanel
from .widgets.message import MessageBubble
from .widgets.preview import RoomPreview
from .widgets.status_bar import StatusBar
from .widgets.style_picker import StylePicker

LOGGER = logging.getLogger(__name__)


class LuminaDesignApp(App[None]):
    """Upload a room photo, restyle it, compare and refine it in conversation."""

    CSS = """
    Screen {
        layout: vertical;
        background: $background;
    }

    #app-root {
        layout: vertical;
        width: 100%;
        height: 1fr;
        background: $background;
    }

    Header {
        border-bottom: solid $panel;
        background: $surface;
    }

    Footer {
        border-top: solid $panel;
        background: $surface;
    }

    #workspace {
        height: 1fr;
    }

    #visualizer {
        width: 3fr;
        padding: 0 1;
    }

    #comparison {
        display: none;
    }

    #comparison.has-result {
        display: block;
    }

    #room_preview.has-result {
        display: none;
    }

    #style_title {
        text-style: bold;
        padding: 1 0 0 0;
    }

    #conversation {
        width: 2fr;
        min-width: 40;
        border-left: solid $panel;
        background: $surface;
    }

    #status_bar {
        height: auto;
        padding: 0 1;
        border-top: solid $panel;
        background: $surface;
    }

    MessageBubble {
        width: 85%;
        margin: 1 0 0 0;
        padding: 0 1;
        border: round $panel;
    }

    .message-user {
        margin-left: 4;
    }
    """

    DEFAULT_ACTION_DESCRIPTIONS: dict[str, str] = {
        "upload_image": "Upload",
        "send_refinement": "Update Look",
        "cancel_request": "Cancel",
        "show_help": "Help",
        "quit": "Quit",
    }

    def __init__(
        self,
        config_path: Path | None = None,
        gateway: AIGateway | None = None,
        initial_image: str | None = None,
    ) -> None:
        super().__init__()
        self.config = load_config(config_path)
        self.window_title = str(self.config["app"]["title"])
        configure_logging(self.config["logging"])
        LOGGER.info(
            "app.python",
            extra={
                "event": "app.python",
                "executable": sys.executable,
                "version": sys.version.split()[0],
            },
        )

        self.gateway = gateway if gateway is not None else build_gateway(self.config)
        self.controller = DesignController(
            self.gateway,
            Session(),
            max_image_bytes=int(self.config["upload"]["max_image_bytes"]),
        )
        self.controller.add_listener(self._on_session_changed)
        self._task_manager = TaskManager()
        self._binding_specs = self._binding_specs_from_config(self.config)
        self._initial_image = initial_image
        self._upload_dialog_active = False

        # Cached widget references, populated in on_mount() after compose().
        self._w_preview: RoomPreview | None = None
        self._w_slider: ComparisonSlider | None = None
        self._w_picker: StylePicker | None = None
        self._w_panel: ConversationPanel | None = None
        self._w_status: StatusBar | None = None

    @classmethod
    def _binding_specs_from_config(
        cls, config: dict[str, dict[str, Any]]
    ) -> list[Binding]:
        keybinds = config.get("keybinds", {})
        bindings: list[Binding] = []
        for action_name, description in cls.DEFAULT_ACTION_DESCRIPTIONS.items():
            binding_key = keybinds.get(action_name)
            if isinstance(binding_key, str) and binding_key.strip():
                bindings.append(
                    Binding(
                        key=binding_key.strip(),
                        action=action_name,
                        description=description,
                        show=True,
                    )
                )
        return bindings

    @property
    def provider(self) -> str:
        return str(self.config["chat"]["provider"])

    def compose(self) -> ComposeResult:
        """Compose app widgets."""
        yield Header()
        with Container(id="app-root"):
            with Horizontal(id="workspace"):
                with Vertical(id="visualizer"):
                    yield RoomPreview(id="room_preview")
                    yield ComparisonSlider(
                        step=float(self.config["ui"]["slider_step"]),
                        id="comparison",
                    )
                    yield Static("Choose a Style", id="style_title")
                    yield StylePicker(STYLES, id="style_picker")
                yield ConversationPanel(
                    show_timestamps=bool(self.config["ui"]["show_timestamps"]),
                    id="conversation",
                )
            yield StatusBar(id="status_bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Register runtime keybindings, cache widgets and load the startup photo."""
        self.title = self.window_title
        self.sub_title = "Upload a room photo to begin."
        for binding in self._binding_specs:
            self.bind(
                binding.key,
                binding.action,
                description=binding.description,
                show=binding.show,
            )

        self._w_preview = self.query_one("#room_preview", RoomPreview)
        self._w_slider = self.query_one("#comparison", ComparisonSlider)
        self._w_picker = self.query_one("#style_picker", StylePicker)
        self._w_panel = self.query_one("#conversation", ConversationPanel)
        self._w_status = self.query_one("#status_bar", StatusBar)
        self._w_panel.styles.border_left = ("solid", str(self.config["ui"]["border_color"]))

        self._render_session(self.controller.session)
        if self._initial_image:
            self._load_image(self._initial_image)

    def _on_session_changed(self, session: Session) -> None:
        panel = self._w_panel
        if not self.is_running or panel is None or not panel.is_mounted:
            return
        self._render_session(session)

    def _render_session(self, session: Session) -> None:
        """Push the session into every widget; widgets hold no state of their own."""
        preview = self._w_preview or self.query_one("#room_preview", RoomPreview)
        slider = self._w_slider or self.query_one("#comparison", ComparisonSlider)
        picker = self._w_picker or self.query_one("#style_picker", StylePicker)
        panel = self._w_panel or self.query_one("#conversation", ConversationPanel)
        status_bar = self._w_status or self.query_one("#status_bar", StatusBar)

        has_result = session.current_image is not None
        preview.set_class(has_result, "has-result")
        slider.set_class(has_result, "has-result")
        preview.show(session.source_image, session.status)
        slider.set_images(session.source_image, session.current_image)

        picker.set_enabled(
            session.has_source and session.status is not Status.GENERATING
        )
        panel.set_status(session.status)
        panel.sync_messages(session.messages)
        self._style_bubbles(panel)

        status_bar.set_status(
            source_name=session.source_name,
            style_name=session.last_style,
            message_count=len(session.messages),
            provider=self.provider,
        )

    def _style_bubbles(self, panel: ConversationPanel) -> None:
        ui_cfg = self.config["ui"]
        for bubble in panel.query(MessageBubble):
            if bubble.message.is_user:
                bubble.styles.border = ("round", str(ui_cfg["user_message_color"]))
            else:
                bubble.styles.border = (
                    "round",
                    str(ui_cfg["assistant_message_color"]),
                )

    def _load_image(self, raw_path: str) -> bool:
        try:
            accepted = self.controller.load_image_file(raw_path)
        except InvalidInputError as exc:
            LOGGER.warning(
                "app.upload.invalid",
                extra={"event": "app.upload.invalid", "error": str(exc)},
            )
            self.sub_title = str(exc)
            return False
        if not accepted:
            self.sub_title = "Upload is available only when idle."
            return False
        self.sub_title = f"Loaded {self.controller.session.source_name}"
        return True

    def _start_request(self, coro: Coroutine[Any, Any, bool], label: str) -> bool:
        if self._task_manager.is_running():
            coro.close()
            self.sub_title = "A request is already in progress."
            return False
        self._task_manager.start(coro)
        LOGGER.info(
            "app.request.started",
            extra={"event": "app.request.started", "request": label},
        )
        return True

    def on_style_picker_selected(self, event: StylePicker.Selected) -> None:
        event.stop()
        self._start_request(self.controller.select_style(event.style), "style")

    def on_conversation_panel_submitted(
        self, event: ConversationPanel.Submitted
    ) -> None:
        event.stop()
        label = "refine" if event.is_refinement else "chat"
        started = self._start_request(
            self.controller.send_message(event.text, event.is_refinement), label
        )
        if not started:
            panel = self._w_panel or self.query_one("#conversation", ConversationPanel)
            panel.restore_input(event.text)

    async def action_upload_image(self) -> None:
        """Pick a room photo with a native dialog, falling back to a path prompt."""
        if not self.controller.session.is_idle:
            self.sub_title = "Upload is available only when idle."
            return
        if self._upload_dialog_active:
            return
        self._upload_dialog_active = True
        try:
            patterns = [f"*{ext}" for ext in sorted(IMAGE_EXTENSIONS)]
            available, path = await open_native_file_dialog(
                title="Upload room photo", patterns=patterns
            )
            if not available:
                self.push_screen(
                    ImagePathScreen(), callback=self._on_upload_path_dismissed
                )
                return
            if path:
                self._load_image(path)
        finally:
            self._upload_dialog_active = False

    def _on_upload_path_dismissed(self, path: str | None) -> None:
        if path:
            self._load_image(path)

    def action_send_refinement(self) -> None:
        panel = self._w_panel or self.query_one("#conversation", ConversationPanel)
        panel.submit(is_refinement=True)

    async def action_cancel_request(self) -> None:
        """Cancel the in-flight gateway request, if any."""
        cancelled = await self._task_manager.cancel()
        if cancelled:
            LOGGER.info(
                "app.request.cancelled", extra={"event": "app.request.cancelled"}
            )
            self.sub_title = "Request cancelled."

    async def action_show_help(self) -> None:
        lines = ["Keybind actions:", ""]
        for binding in self._binding_specs:
            lines.append(f"{binding.key}  {binding.description}")
        lines.append("")
        lines.append("Comparison slider: drag the divider, or focus it and use")
        lines.append("left/right to nudge, home/end to jump to either side.")
        lines.append("")
        lines.append("Enter sends a chat message; Update Look applies it to the image.")
        self.push_screen(InfoScreen("\n".join(lines)))

    async def on_unmount(self) -> None:
        """Cancel and await all background tasks during shutdown."""
        self.controller.remove_listener(self._on_session_changed)
        await self._task_manager.cancel_all()

    async def action_quit(self) -> None:
        """Exit the app."""
        self.exit()
