from __future__ import annotations

import logging
from typing import Literal, Mapping

from pydantic import BaseModel

logger = logging.getLogger(__name__)

Capability = Literal[
    "chat",
    "completion",
    "streaming",
    "vision",
    "embedding",
    "image",
    "audio",
    "function_calling",
]


class ModelConfig(BaseModel):
    id: str
    name: str
    provider: Literal["openai", "anthropic", "meta", "xai", "google"]
    capabilities: list[Capability]
    max_tokens: int
    cost_per_1k_tokens: float | None = None
    description: str


AVAILABLE_MODELS: dict[str, ModelConfig] = {
    "gpt4o": ModelConfig(
        id="openai/gpt-4o",
        name="GPT-4o",
        provider="openai",
        capabilities=["chat", "completion", "function_calling", "streaming", "vision"],
        max_tokens=8192,
        cost_per_1k_tokens=0.015,
        description="Most capable model from OpenAI",
    ),
    "gpt4o_mini": ModelConfig(
        id="openai/gpt-4o-mini",
        name="GPT-4o Mini",
        provider="openai",
        capabilities=["chat", "completion", "function_calling", "streaming"],
        max_tokens=4096,
        cost_per_1k_tokens=0.005,
        description="Lightweight version of GPT-4o, optimized for speed and cost",
    ),
    "claude_sonnet": ModelConfig(
        id="anthropic/claude-3.5-sonnet",
        name="Claude 3.5 Sonnet",
        provider="anthropic",
        capabilities=["chat", "completion", "function_calling", "streaming"],
        max_tokens=8192,
        cost_per_1k_tokens=0.018,
        description="Claude 3.5 Sonnet model from Anthropic",
    ),
}

DEFAULT_MODEL_CONFIG: ModelConfig = AVAILABLE_MODELS["gpt4o"]


def find_model(
    name: str, catalog: Mapping[str, ModelConfig] = AVAILABLE_MODELS
) -> ModelConfig | None:
    """Look a model up by catalog key or provider id."""
    if name in catalog:
        return catalog[name]
    for config in catalog.values():
        if config.id == name:
            return config
    return None


def resolve_model_id(
    name: str, catalog: Mapping[str, ModelConfig] = AVAILABLE_MODELS
) -> str:
    config = find_model(name, catalog)
    return config.id if config else name


def supports_function_calling(
    name: str, catalog: Mapping[str, ModelConfig] = AVAILABLE_MODELS
) -> bool:
    # Models outside the catalog are trusted; the provider rejects them if not.
    config = find_model(name, catalog)
    return config is None or "function_calling" in config.capabilities


def select_model(
    requested: str,
    fallback: str,
    catalog: Mapping[str, ModelConfig] = AVAILABLE_MODELS,
) -> str:
    """Resolve ``requested`` to a provider id able to call tools.

    A catalogued model without function calling is replaced by ``fallback``.
    """
    if supports_function_calling(requested, catalog):
        return resolve_model_id(requested, catalog)
    logger.warning(
        "Model %s does not support function calling; using fallback %s",
        requested,
        fallback,
    )
    return resolve_model_id(fallback, catalog)
