"""Process configuration: environment variables with an optional YAML overlay."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from genai_gateway.common.schema import AttachmentKind

LOGGER = logging.getLogger("genai_gateway.settings")

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_CONFIG_PATH = "configs/gateway.yaml"

# Sent upstream when the caller omits a prompt; image requests have no fallback.
DEFAULT_PROMPTS: dict[AttachmentKind, str | None] = {
    AttachmentKind.IMAGE: None,
    AttachmentKind.DOCUMENT: "Tolong buat ringkasan dari dokumen berikut menggunakan bahasa inggris: ",
    AttachmentKind.AUDIO: "Tolong buatkan transkrip dari rekaman berikut",
}


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    default_prompts: Mapping[AttachmentKind, str | None] = field(
        default_factory=lambda: dict(DEFAULT_PROMPTS)
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_prompts", MappingProxyType(dict(self.default_prompts)))

    def default_prompt(self, kind: AttachmentKind) -> str | None:
        return self.default_prompts.get(kind)


def load_cfg(path: str) -> dict[str, Any]:
    """
    Load a YAML config file.

    Args:
        path: Path to the YAML file. A missing file yields an empty mapping.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def _merge_prompts(overrides: Mapping[str, Any] | None) -> dict[AttachmentKind, str | None]:
    prompts = dict(DEFAULT_PROMPTS)
    for key, value in (overrides or {}).items():
        try:
            kind = AttachmentKind(key)
        except ValueError:
            LOGGER.warning("Ignoring default prompt for unknown kind %r", key)
            continue
        prompts[kind] = value
    return prompts


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from the environment, overlaid on the YAML config file.

    Environment variables win over the file for the model id.

    Args:
        env: Mapping to read instead of ``os.environ`` (used by tests).
    """
    env = os.environ if env is None else env
    cfg = load_cfg(env.get("GATEWAY_CONFIG", DEFAULT_CONFIG_PATH))
    return Settings(
        api_key=env.get("GEMINI_API_KEY") or None,
        model=env.get("GEMINI_MODEL") or cfg.get("model") or DEFAULT_MODEL,
        host=env.get("HOST", "0.0.0.0"),
        port=int(env.get("PORT", "3000")),
        log_level=env.get("LOG_LEVEL", "INFO"),
        default_prompts=_merge_prompts(cfg.get("default_prompts")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
