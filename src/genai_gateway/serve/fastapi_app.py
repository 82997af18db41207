"""FastAPI gateway in front of the Gemini API.

Endpoints:
- GET /health
- POST /generate-text            { "prompt": "..." }
- POST /generate-from-image      multipart: image, prompt
- POST /generate-from-document   multipart: document, prompt (optional)
- POST /generate-from-audio      multipart: audio, prompt (optional)

Every failure is answered with HTTP 500 and ``{"message": "..."}``.
"""
from __future__ import annotations
import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from genai_gateway.common.errors import GatewayError
from genai_gateway.common.logging_setup import setup_logging
from genai_gateway.common.schema import (
    AttachmentKind,
    ErrorOut,
    GenerateOut,
    GenerateTextIn,
    GenerationError,
    GenerationResult,
)
from genai_gateway.common.settings import Settings, get_settings
from genai_gateway.serve import adapter
from genai_gateway.serve.gateway import GenerationGateway, build_client

LOGGER = logging.getLogger("genai_gateway.app")
setup_logging(get_settings().log_level)

_ERROR_RESPONSES = {500: {"model": ErrorOut}}

app = FastAPI(title="genai-gateway")


@lru_cache(maxsize=1)
def get_gateway() -> GenerationGateway:
    """Process-wide gateway, created on first use from the startup settings."""
    settings = get_settings()
    return GenerationGateway(build_client(settings), settings.model)


@app.on_event("startup")
def _check_credentials_on_startup() -> None:
    settings = get_settings()
    if not settings.api_key:
        LOGGER.warning("GEMINI_API_KEY is not set; generation requests will fail")
    LOGGER.info("Using model %s", settings.model)


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content=ErrorOut(message=message).model_dump())


@app.exception_handler(GatewayError)
async def _handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.message)


@app.exception_handler(RequestValidationError)
async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(str(err.get("msg", "")) for err in exc.errors()) or "Invalid request"
    LOGGER.error("%s %s rejected: %s", request.method, request.url.path, message)
    return _error(message)


def _respond(outcome: GenerationResult | GenerationError) -> GenerateOut | JSONResponse:
    if isinstance(outcome, GenerationError):
        return _error(outcome.message)
    return GenerateOut(result=outcome.text)


async def _form_prompt(http_request: Request) -> str | None:
    """Raw ``prompt`` form value; FastAPI maps an empty field to None."""
    form = await http_request.form()
    value = form.get("prompt")
    return value if isinstance(value, str) else None


async def _generate_from_upload(
    kind: AttachmentKind,
    upload: UploadFile | None,
    http_request: Request,
    gateway: GenerationGateway,
    settings: Settings,
) -> GenerateOut | JSONResponse:
    prompt = await _form_prompt(http_request)
    # a part without a filename is an unselected file input
    if upload is not None and not upload.filename:
        upload = None
    payload = await upload.read() if upload is not None else None
    mime_type = upload.content_type if upload is not None else None
    request = adapter.from_upload(kind, payload, mime_type, prompt, settings.default_prompt(kind))
    return _respond(await gateway.generate(request))


@app.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"status": "ok", "model": settings.model}


@app.post("/generate-text", response_model=GenerateOut, responses=_ERROR_RESPONSES)
async def generate_text(
    body: GenerateTextIn,
    gateway: GenerationGateway = Depends(get_gateway),
) -> GenerateOut | JSONResponse:
    request = adapter.from_text(body.prompt)
    return _respond(await gateway.generate(request))


@app.post("/generate-from-image", response_model=GenerateOut, responses=_ERROR_RESPONSES)
async def generate_from_image(
    http_request: Request,
    image: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: GenerationGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> GenerateOut | JSONResponse:
    return await _generate_from_upload(AttachmentKind.IMAGE, image, http_request, gateway, settings)


@app.post("/generate-from-document", response_model=GenerateOut, responses=_ERROR_RESPONSES)
async def generate_from_document(
    http_request: Request,
    document: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: GenerationGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> GenerateOut | JSONResponse:
    return await _generate_from_upload(AttachmentKind.DOCUMENT, document, http_request, gateway, settings)


@app.post("/generate-from-audio", response_model=GenerateOut, responses=_ERROR_RESPONSES)
async def generate_from_audio(
    http_request: Request,
    audio: UploadFile | None = File(None),
    prompt: str | None = Form(None),
    gateway: GenerationGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
) -> GenerateOut | JSONResponse:
    return await _generate_from_upload(AttachmentKind.AUDIO, audio, http_request, gateway, settings)
