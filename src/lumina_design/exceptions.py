"""Domain exception hierarchy for the Lumina Design application."""

from __future__ import annotations


class LuminaError(RuntimeError):
    """Base class for all domain-level errors."""


class InvalidInputError(LuminaError):
    """Raised when an uploaded file cannot be used as a room photo."""


class GenerationError(LuminaError):
    """Raised when the image transform returns no usable image or fails."""


class ChatError(LuminaError):
    """Raised when the design assistant cannot produce a chat reply."""


class ConfigValidationError(LuminaError):
    """Raised when configuration cannot be validated safely."""


class GatewayConfigurationError(LuminaError):
    """Raised when the AI gateway cannot be constructed from configuration."""
