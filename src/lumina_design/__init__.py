"""Top-level package for lumina-design."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import LuminaDesignApp
    from .config import ensure_config_dir, load_config
    from .controller import DesignController
    from .exceptions import (
        ChatError,
        ConfigValidationError,
        GatewayConfigurationError,
        GenerationError,
        InvalidInputError,
        LuminaError,
    )
    from .gateway import GeminiGateway, OllamaChatGateway, build_gateway
    from .models import ImageRef, Message, Role, Session, Status, Style
    from .state import StateManager
    from .styles import STYLES

__all__ = [
    "ChatError",
    "ConfigValidationError",
    "DesignController",
    "GatewayConfigurationError",
    "GeminiGateway",
    "GenerationError",
    "ImageRef",
    "InvalidInputError",
    "LuminaDesignApp",
    "LuminaError",
    "Message",
    "OllamaChatGateway",
    "Role",
    "STYLES",
    "Session",
    "StateManager",
    "Status",
    "Style",
    "build_gateway",
    "ensure_config_dir",
    "load_config",
]

_MODEL_NAMES = {"ImageRef", "Message", "Role", "Session", "Status", "Style"}
_EXCEPTION_NAMES = {
    "ChatError",
    "ConfigValidationError",
    "GatewayConfigurationError",
    "GenerationError",
    "InvalidInputError",
    "LuminaError",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols so the core can be used without the UI or SDKs loaded."""
    if name in _MODEL_NAMES:
        from . import models

        return getattr(models, name)
    if name in _EXCEPTION_NAMES:
        from . import exceptions

        return getattr(exceptions, name)
    if name in {"ensure_config_dir", "load_config"}:
        from .config import ensure_config_dir, load_config

        return {"ensure_config_dir": ensure_config_dir, "load_config": load_config}[name]
    if name == "STYLES":
        from .styles import STYLES

        return STYLES
    if name == "StateManager":
        from .state import StateManager

        return StateManager
    if name == "DesignController":
        from .controller import DesignController

        return DesignController
    if name in {"GeminiGateway", "OllamaChatGateway", "build_gateway"}:
        from . import gateway

        return getattr(gateway, name)
    if name == "LuminaDesignApp":
        from .app import LuminaDesignApp

        return LuminaDesignApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
