"""Single-call bridge to the Gemini API."""
from __future__ import annotations
import logging
from typing import Any

from google import genai
from google.genai import types

from genai_gateway.common.errors import UpstreamError
from genai_gateway.common.schema import GenerationError, GenerationRequest, GenerationResult
from genai_gateway.common.settings import Settings

LOGGER = logging.getLogger("genai_gateway.gateway")


def build_client(settings: Settings) -> genai.Client:
    if not settings.api_key:
        raise UpstreamError("GEMINI_API_KEY is not set")
    try:
        return genai.Client(api_key=settings.api_key)
    except Exception as e:
        raise UpstreamError(f"Failed to create Gemini client: {e}") from e


def build_parts(request: GenerationRequest) -> list[types.Part]:
    """Text part first (when there is a prompt), then the inline file."""
    parts: list[types.Part] = []
    if request.prompt is not None:
        parts.append(types.Part.from_text(text=request.prompt))
    if request.attachment is not None:
        parts.append(
            types.Part.from_bytes(
                data=request.attachment.raw(),
                mime_type=request.attachment.mime_type,
            )
        )
    return parts


class GenerationGateway:
    """Forward one GenerationRequest to the model and report the outcome.

    ``client`` is shared between requests and only read from.
    """

    def __init__(self, client: Any, model: str) -> None:
        self.client = client
        self.model = model

    async def generate(self, request: GenerationRequest) -> GenerationResult | GenerationError:
        parts = build_parts(request)
        LOGGER.debug("Calling %s with %d part(s)", self.model, len(parts))
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=parts,
            )
        except Exception as e:
            LOGGER.error("Gemini request failed: %s", e)
            return GenerationError(message=str(e) or type(e).__name__)

        text = getattr(response, "text", None)
        if text is None:
            LOGGER.error("Malformed response: no text in %r", response)
            return GenerationError(message="Upstream returned no text")
        return GenerationResult(text=text)
