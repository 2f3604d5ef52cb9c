# -*- coding: utf-8 -*-
"""Pydantic data models for providers, models and validation results."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..constant import (
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_MAX_TOKENS,
    OPENAI_COMPLETIONS_API,
)
from .errors import FailureKind


class ModelCost(BaseModel):
    """Per-token pricing of a model (zero when unknown)."""

    model_config = {"populate_by_name": True}

    input: float = 0
    output: float = 0
    cache_read: float = Field(default=0, alias="cacheRead")
    cache_write: float = Field(default=0, alias="cacheWrite")


class ModelSpec(BaseModel):
    """A single model offered by a provider, keyed by ``id``."""

    model_config = {"populate_by_name": True}

    id: str = Field(..., description="Model identifier used in API calls")
    name: str = Field(..., description="Human-readable model name")
    reasoning: bool = Field(
        default=False,
        description="Whether the model supports reasoning",
    )
    input: List[str] = Field(
        default_factory=lambda: ["text"],
        description="Accepted input modalities",
    )
    cost: ModelCost = Field(default_factory=ModelCost)
    context_window: int = Field(
        default=DEFAULT_CONTEXT_WINDOW,
        alias="contextWindow",
    )
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, alias="maxTokens")


class ModelProviderConfig(BaseModel):
    """Persisted definition of one provider under ``models.providers``."""

    model_config = {"populate_by_name": True}

    base_url: str = Field(..., alias="baseUrl", description="API base URL")
    api: str = Field(
        default=OPENAI_COMPLETIONS_API,
        description="Wire protocol spoken by the provider",
    )
    api_key: Optional[str] = Field(
        default=None,
        alias="apiKey",
        description="API key, possibly containing ${VAR} placeholders",
    )
    models: List[ModelSpec] = Field(..., min_length=1)


class ProviderCandidate(BaseModel):
    """A provider about to be validated. Never persisted."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    base_url: str
    model_id: str
    api_key: Optional[str] = None


class ValidationOutcome(BaseModel):
    """Result of validating a provider: ok, or failed with a reason."""

    model_config = {"frozen": True}

    ok: bool
    reason: Optional[str] = None
    kind: Optional[FailureKind] = None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return cls(ok=True)

    @classmethod
    def failure(
        cls,
        reason: str,
        kind: FailureKind = FailureKind.UNCLASSIFIED,
    ) -> "ValidationOutcome":
        return cls(ok=False, reason=reason, kind=kind)


class ModelCatalogEntry(BaseModel):
    """A model the gateway can route to, as returned by ``models.list``."""

    model_config = {"populate_by_name": True}

    id: str
    name: str
    provider: str
    context_window: Optional[int] = Field(default=None, alias="contextWindow")
    reasoning: Optional[bool] = None


class ProviderEntry(BaseModel):
    """Provider info returned to clients (stored config, key masked)."""

    model_config = {"populate_by_name": True}

    id: str
    base_url: str = Field(alias="baseUrl")
    api: str = OPENAI_COMPLETIONS_API
    models: List[ModelSpec]
    has_api_key: bool = Field(
        default=False,
        alias="hasApiKey",
        description="Whether apiKey is configured",
    )
    current_api_key: str = Field(
        default="",
        alias="currentApiKey",
        description="Currently configured API key (masked)",
    )
    default_model: Optional[str] = Field(
        default=None,
        alias="defaultModel",
        description="Model id of this provider that is the gateway default",
    )
