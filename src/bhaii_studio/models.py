"""Data models shared by the gateway, the session and the preference store.

These models define the chat transcript, the persisted preferences record
and the result values returned by the AI gateway, independent of the
storage backend or remote service used.
"""

import base64
import binascii
import mimetypes
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def now_ms() -> datetime:
    """Current UTC instant truncated to the millisecond."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def new_message_id() -> str:
    return uuid4().hex


class Sender(str, Enum):
    """Who authored a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class AspectRatio(str, Enum):
    """Aspect ratios accepted by the HD image generator."""

    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


class ChatMessage(BaseModel):
    """One turn of the chat transcript. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id, description="Opaque unique identifier")
    sender: Sender = Field(description="Author of the message")
    text: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=now_ms)

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat(timespec="milliseconds")


class UserPreferences(BaseModel):
    """Persisted user preferences and the last chat transcript.

    Serialized with the wire names ``name``, ``rememberMe`` and ``lastChat``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="")
    remember_me: bool = Field(default=False, alias="rememberMe")
    last_chat: list[ChatMessage] = Field(alias="lastChat")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "UserPreferences":
        """Parse a stored record.

        Raises:
            pydantic.ValidationError: If the record is malformed
        """
        return cls.model_validate_json(raw)


class ChatResult(BaseModel):
    """Outcome of one chat turn."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="")
    error: str | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


class ImageResult(BaseModel):
    """Outcome of an image edit or generation call.

    ``image_url`` is a self-describing ``data:`` URI.
    """

    model_config = ConfigDict(frozen=True)

    image_url: str | None = Field(default=None)
    error: str | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.image_url is not None and self.error is None


class ImagePayload(BaseModel):
    """Binary image plus its MIME type."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    @classmethod
    def from_path(cls, path: str | Path) -> "ImagePayload":
        """Read an image file, guessing its MIME type from the file name."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), mime_type=mime_type or "application/octet-stream")


def to_data_uri(mime_type: str, data: bytes) -> str:
    """Encode bytes as a base64 ``data:`` URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 ``data:`` URI into its MIME type and bytes.

    Raises:
        ValueError: If the URI is not a base64 data URI
    """
    if not uri.startswith("data:") or "," not in uri:
        raise ValueError("Not a data URI")
    header, payload = uri[len("data:"):].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")
    mime_type = header[: -len(";base64")] or "application/octet-stream"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def extension_for(mime_type: str) -> str:
    """File extension for a MIME type, ``.bin`` when unknown."""
    if mime_type == "image/jpeg":
        return ".jpg"
    return mimetypes.guess_extension(mime_type) or ".bin"
