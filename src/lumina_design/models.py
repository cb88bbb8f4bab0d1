"""Session data model shared by the controller and the UI."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4

from .exceptions import InvalidInputError

DEFAULT_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class ImageRef:
    """An encoded image held fully in memory, compared by value."""

    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    def __repr__(self) -> str:
        return f"ImageRef(mime_type={self.mime_type!r}, size={len(self.data)})"

    @property
    def size(self) -> int:
        return len(self.data)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Return a ``data:<mime>;base64,<payload>`` URL for this image."""
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @classmethod
    def from_data_url(cls, value: str) -> ImageRef:
        """Parse a data URL, or a bare base64 payload, into an ImageRef."""
        mime_type = DEFAULT_MIME_TYPE
        payload = value.strip()
        if payload.startswith("data:"):
            header, _, payload = payload.partition(",")
            declared = header[len("data:") :].split(";", 1)[0].strip()
            if declared:
                mime_type = declared
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError("Image payload is not valid base64.") from exc
        if not data:
            raise InvalidInputError("Image payload is empty.")
        return cls(data=data, mime_type=mime_type)


class Role(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single immutable entry in the conversation log."""

    role: Role
    text: str
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER


@dataclass(frozen=True)
class Style:
    """Static catalog entry describing a predefined interior style."""

    id: str
    name: str
    prompt: str
    thumbnail: str = ""


class Status(str, Enum):
    """Single global activity flag for the session."""

    IDLE = "IDLE"
    GENERATING = "GENERATING"
    CHATTING = "CHATTING"


@dataclass
class Session:
    """Root aggregate for one run of the app; never persisted."""

    source_image: ImageRef | None = None
    current_image: ImageRef | None = None
    messages: list[Message] = field(default_factory=list)
    status: Status = Status.IDLE
    source_name: str = ""
    last_style: str = ""

    @property
    def has_source(self) -> bool:
        return self.source_image is not None

    @property
    def visible_image(self) -> ImageRef | None:
        """Return the current image, falling back to the source image."""
        return self.current_image or self.source_image

    @property
    def is_idle(self) -> bool:
        return self.status is Status.IDLE
