from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

import genai_gateway.serve.fastapi_app as app_mod
from genai_gateway.serve.gateway import GenerationGateway


class FakeResponse:
    def __init__(self, text: str | None) -> None:
        self.text = text


class FakeModels:
    """Stands in for ``client.aio.models``; echoes the text parts back."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.error: Exception | None = None
        self.reply: str | None = None
        self.empty = False
        self.delays: dict[str, float] = {}

    async def generate_content(self, *, model: str, contents: list[Any]) -> FakeResponse:
        self.calls.append({"model": model, "contents": contents})
        texts = [p.text for p in contents if getattr(p, "text", None) is not None]
        await asyncio.sleep(self.delays.get(texts[0] if texts else "", 0))
        if self.error is not None:
            raise self.error
        if self.empty:
            return FakeResponse(None)
        return FakeResponse(self.reply if self.reply is not None else " | ".join(texts))


class FakeAio:
    def __init__(self, models: FakeModels) -> None:
        self.models = models


class FakeGenaiClient:
    def __init__(self) -> None:
        self.aio = FakeAio(FakeModels())


@pytest.fixture
def fake_client() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def fake_models(fake_client: FakeGenaiClient) -> FakeModels:
    return fake_client.aio.models


@pytest.fixture
def client(fake_client: FakeGenaiClient):
    gateway = GenerationGateway(fake_client, "test-model")
    app_mod.app.dependency_overrides[app_mod.get_gateway] = lambda: gateway
    with TestClient(app_mod.app) as c:
        yield c
    app_mod.app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
