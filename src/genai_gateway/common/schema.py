"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
import base64
import enum
from dataclasses import dataclass

from pydantic import BaseModel


class AttachmentKind(str, enum.Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"


@dataclass(frozen=True)
class Attachment:
    """Uploaded file carried as base64 text with its declared mime type."""
    data: str
    mime_type: str
    kind: AttachmentKind

    @classmethod
    def encode(cls, payload: bytes, mime_type: str, kind: AttachmentKind) -> "Attachment":
        return cls(
            data=base64.b64encode(payload).decode("ascii"),
            mime_type=mime_type,
            kind=kind,
        )

    def raw(self) -> bytes:
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class GenerationRequest:
    """Normalized input for a single generation call."""
    prompt: str | None = None
    attachment: Attachment | None = None


@dataclass(frozen=True)
class GenerationResult:
    text: str


@dataclass(frozen=True)
class GenerationError:
    message: str


class GenerateTextIn(BaseModel):
    prompt: str | None = None


class GenerateOut(BaseModel):
    result: str


class ErrorOut(BaseModel):
    message: str
