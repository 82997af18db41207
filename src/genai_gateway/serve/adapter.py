"""Turn parsed HTTP input into a GenerationRequest."""
from __future__ import annotations

from genai_gateway.common.errors import InputValidationError
from genai_gateway.common.schema import Attachment, AttachmentKind, GenerationRequest

FALLBACK_MIME_TYPE = "application/octet-stream"


def from_text(prompt: str | None) -> GenerationRequest:
    if prompt is None:
        raise InputValidationError("prompt is required")
    return GenerationRequest(prompt=prompt)


def from_upload(
    kind: AttachmentKind,
    payload: bytes | None,
    mime_type: str | None,
    prompt: str | None,
    default_prompt: str | None = None,
) -> GenerationRequest:
    """
    Build a request carrying an uploaded file.

    Args:
        kind: Which endpoint the file came through; also the form field name.
        payload: Buffered file contents, or None when no file was sent.
        mime_type: Content type declared by the client.
        prompt: Caller's prompt. Only ``None`` is replaced by ``default_prompt``;
            an empty string is forwarded as given.
        default_prompt: Fallback prompt configured for ``kind``.

    Raises:
        InputValidationError: if no file was sent. An empty file is forwarded.
    """
    if payload is None:
        raise InputValidationError(f"{kind.value} file is required")
    attachment = Attachment.encode(payload, mime_type or FALLBACK_MIME_TYPE, kind)
    if prompt is None:
        prompt = default_prompt
    return GenerationRequest(prompt=prompt, attachment=attachment)
