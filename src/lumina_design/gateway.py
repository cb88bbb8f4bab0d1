"""AI gateway: image transformation and design-chat replies.

Two implementations are provided. ``GeminiGateway`` talks to Google's
Gemini models for both operations. ``OllamaChatGateway`` answers chat
through a local Ollama vision model and hands image transforms to a
Gemini gateway, since Ollama has no image-editing endpoint.
"""

from __future__ import annotations

import base64
from collections.abc import Sequence
import logging
import os
import time
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import types
from ollama import AsyncClient as OllamaAsyncClient

from .exceptions import (
    ChatError,
    GatewayConfigurationError,
    GenerationError,
    InvalidInputError,
)
from .imaging import decoded_mime_type
from .models import ImageRef, Message, Role

LOGGER = logging.getLogger(__name__)

API_KEY_ENV_VARS: tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")

TRANSFORM_PROMPT_TEMPLATE = (
    "Act as an expert interior designer. Transform the attached room image based "
    'on this style or instruction: "{instruction}". Maintain the structural '
    "integrity of the room (windows, doors, walls) but change the decor, "
    "furniture, colors, and lighting to match the requested style. Return ONLY "
    "the image."
)
EMPTY_CHAT_REPLY = "I couldn't generate a response."


class AIGateway(Protocol):
    """Remote operations the controller depends on."""

    async def transform_image(self, base_image: ImageRef, instruction: str) -> ImageRef:
        ...

    async def chat_reply(
        self,
        history: Sequence[Message],
        new_message: str,
        context_image: ImageRef | None = None,
    ) -> str:
        ...


def resolve_api_key(configured: str = "") -> str:
    """Return the configured key, else the first non-empty known env var."""
    if configured and configured.strip():
        return configured.strip()
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


def extract_image(response: Any) -> ImageRef | None:
    """Return the first inline image payload in a generate_content response."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline is not None else None
            if not data:
                continue
            mime_type = getattr(inline, "mime_type", None) or "image/png"
            if not mime_type.startswith("image/"):
                continue
            if isinstance(data, str):
                data = base64.b64decode(data)
            return ImageRef(data=data, mime_type=mime_type)
    return None


class GeminiGateway:
    """Gateway backed by the google-genai async client."""

    def __init__(
        self,
        api_key: str,
        image_model: str,
        chat_model: str,
        system_prompt: str,
        timeout: int = 120,
        client: Any | None = None,
    ) -> None:
        self.image_model = image_model
        self.chat_model = chat_model
        self.system_prompt = system_prompt
        self.timeout = timeout

        if client is not None:
            self._client = client
        elif api_key:
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout * 1000),
            )
        else:
            raise GatewayConfigurationError(
                "No Gemini API key configured. Set gemini.api_key or GEMINI_API_KEY."
            )

    async def transform_image(self, base_image: ImageRef, instruction: str) -> ImageRef:
        """Restyle ``base_image`` according to ``instruction``."""
        started = time.monotonic()
        LOGGER.info(
            "gateway.transform.start",
            extra={
                "event": "gateway.transform.start",
                "model": self.image_model,
                "image_bytes": base_image.size,
            },
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.image_model,
                contents=[
                    types.Part.from_text(
                        text=TRANSFORM_PROMPT_TEMPLATE.format(instruction=instruction)
                    ),
                    types.Part.from_bytes(
                        data=base_image.data, mime_type=base_image.mime_type
                    ),
                ],
            )
        except Exception as exc:  # noqa: BLE001 - SDK raises many transport errors.
            LOGGER.warning(
                "gateway.transform.failed",
                extra={
                    "event": "gateway.transform.failed",
                    "model": self.image_model,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise GenerationError(f"Image generation failed: {exc}") from exc

        result = extract_image(response)
        if result is None:
            LOGGER.warning(
                "gateway.transform.no_image",
                extra={"event": "gateway.transform.no_image", "model": self.image_model},
            )
            raise GenerationError("No image generated.")

        try:
            mime_type = decoded_mime_type(result.data)
        except InvalidInputError as exc:
            LOGGER.warning(
                "gateway.transform.undecodable",
                extra={
                    "event": "gateway.transform.undecodable",
                    "model": self.image_model,
                    "mime_type": result.mime_type,
                    "image_bytes": result.size,
                },
            )
            raise GenerationError("Generated image could not be decoded.") from exc
        result = ImageRef(data=result.data, mime_type=mime_type)

        LOGGER.info(
            "gateway.transform.complete",
            extra={
                "event": "gateway.transform.complete",
                "model": self.image_model,
                "image_bytes": result.size,
                "elapsed_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return result

    @staticmethod
    def _build_chat_contents(
        history: Sequence[Message],
        new_message: str,
        context_image: ImageRef | None,
    ) -> list[types.Content]:
        # Leading assistant turns are dropped and consecutive turns from the
        # same role are merged so the request alternates user/model.
        contents: list[types.Content] = []
        for message in history:
            role = "user" if message.role is Role.USER else "model"
            if not contents and role == "model":
                continue
            part = types.Part.from_text(text=message.text)
            if contents and contents[-1].role == role:
                contents[-1].parts.append(part)
            else:
                contents.append(types.Content(role=role, parts=[part]))

        parts = [types.Part.from_text(text=new_message)]
        if context_image is not None:
            parts.append(
                types.Part.from_bytes(
                    data=context_image.data, mime_type=context_image.mime_type
                )
            )
        if contents and contents[-1].role == "user":
            contents[-1].parts.extend(parts)
        else:
            contents.append(types.Content(role="user", parts=parts))
        return contents

    async def chat_reply(
        self,
        history: Sequence[Message],
        new_message: str,
        context_image: ImageRef | None = None,
    ) -> str:
        """Answer ``new_message`` with the conversation and visible image as context."""
        contents = self._build_chat_contents(history, new_message, context_image)
        try:
            response = await self._client.aio.models.generate_content(
                model=self.chat_model,
                contents=contents,
                config=types.GenerateContentConfig(system_instruction=self.system_prompt),
            )
        except Exception as exc:  # noqa: BLE001 - SDK raises many transport errors.
            LOGGER.warning(
                "gateway.chat.failed",
                extra={
                    "event": "gateway.chat.failed",
                    "model": self.chat_model,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            raise ChatError(f"Chat request failed: {exc}") from exc

        text = getattr(response, "text", None)
        if isinstance(text, str) and text.strip():
            return text.strip()
        return EMPTY_CHAT_REPLY


class OllamaChatGateway:
    """Chat through a local Ollama vision model; transforms go to ``image_gateway``."""

    def __init__(
        self,
        host: str,
        model: str,
        system_prompt: str,
        image_gateway: AIGateway,
        timeout: int = 120,
        client: Any | None = None,
    ) -> None:
        self.host = host
        self.model = model
        self.system_prompt = system_prompt
        self.image_gateway = image_gateway
        self._client = client if client is not None else OllamaAsyncClient(
            host=host, timeout=timeout
        )

    async def transform_image(self, base_image: ImageRef, instruction: str) -> ImageRef:
        return await self.image_gateway.transform_image(base_image, instruction)

    def _build_messages(
        self,
        history: Sequence[Message],
        new_message: str,
        context_image: ImageRef | None,
    ) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if self.system_prompt:
            messages.append({"role": "system", "content": self.system_prompt})
        for message in history:
            messages.append({"role": message.role.value, "content": message.text})
        user_turn: dict[str, Any] = {"role": "user", "content": new_message}
        if context_image is not None:
            user_turn["images"] = [context_image.to_base64()]
        messages.append(user_turn)
        return messages

    @staticmethod
    def _extract_content(response: Any) -> str:
        message = getattr(response, "message", None)
        if message is not None:
            value = getattr(message, "content", None)
            if isinstance(value, str):
                return value
        if isinstance(response, dict):
            message = response.get("message")
            if isinstance(message, dict):
                value = message.get("content")
                if isinstance(value, str):
                    return value
        return ""

    def _map_exception(self, exc: Exception) -> ChatError:
        if isinstance(
            exc,
            (httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout, httpx.NetworkError),
        ):
            return ChatError(f"Unable to connect to Ollama host {self.host}.")
        lower_message = str(exc).lower()
        if "model" in lower_message and "not found" in lower_message:
            return ChatError(f"Model {self.model!r} was not found on {self.host}.")
        return ChatError(f"Ollama chat failed at {self.host}: {exc}")

    async def chat_reply(
        self,
        history: Sequence[Message],
        new_message: str,
        context_image: ImageRef | None = None,
    ) -> str:
        messages = self._build_messages(history, new_message, context_image)
        try:
            response = await self._client.chat(
                model=self.model, messages=messages, stream=False
            )
        except Exception as exc:  # noqa: BLE001 - external API can fail in many ways.
            mapped = self._map_exception(exc)
            LOGGER.warning(
                "gateway.chat.failed",
                extra={
                    "event": "gateway.chat.failed",
                    "model": self.model,
                    "error_type": type(exc).__name__,
                    "error": str(mapped),
                },
            )
            raise mapped from exc

        text = self._extract_content(response).strip()
        return text or EMPTY_CHAT_REPLY


def build_gateway(config: dict[str, dict[str, Any]]) -> AIGateway:
    """Construct the gateway selected by ``chat.provider``."""
    gemini_cfg = config["gemini"]
    image_gateway = GeminiGateway(
        api_key=resolve_api_key(str(gemini_cfg.get("api_key", ""))),
        image_model=str(gemini_cfg["image_model"]),
        chat_model=str(gemini_cfg["chat_model"]),
        system_prompt=str(gemini_cfg["system_prompt"]),
        timeout=int(gemini_cfg["timeout"]),
    )
    provider = str(config["chat"]["provider"])
    if provider == "gemini":
        return image_gateway
    if provider == "ollama":
        ollama_cfg = config["ollama"]
        return OllamaChatGateway(
            host=str(ollama_cfg["host"]),
            model=str(ollama_cfg["model"]),
            system_prompt=str(gemini_cfg["system_prompt"]),
            image_gateway=image_gateway,
            timeout=int(ollama_cfg["timeout"]),
        )
    raise GatewayConfigurationError(f"Unknown chat provider {provider!r}.")
