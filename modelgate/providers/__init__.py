# -*- coding: utf-8 -*-
"""Provider validation: models, secret resolution, probe and catalog."""

from .catalog import build_model_catalog
from .errors import (
    CatalogUnavailableError,
    ConfigUnreadableError,
    FailureKind,
    MissingEnvVarError,
    ModelGateError,
    NotFoundError,
    ParameterError,
    ProbeError,
    ProviderNotFoundError,
    ProviderValidationError,
    SecretResolutionError,
    TimedOutError,
    UnauthorizedError,
    UnclassifiedProbeError,
    UnreachableError,
)
from .models import (
    ModelCatalogEntry,
    ModelCost,
    ModelProviderConfig,
    ModelSpec,
    ProviderCandidate,
    ProviderEntry,
    ValidationOutcome,
)
from .probe import (
    ChatCompletionClient,
    ChatCompletionError,
    OpenAIChatClient,
    classify_probe_error,
    normalize_base_url,
    probe,
)
from .secrets import mask_api_key, resolve_api_key, substitute_env_vars
from .validation import ProviderValidator, validate_model_provider

__all__ = [
    # catalog
    "build_model_catalog",
    # errors
    "CatalogUnavailableError",
    "ConfigUnreadableError",
    "FailureKind",
    "MissingEnvVarError",
    "ModelGateError",
    "NotFoundError",
    "ParameterError",
    "ProbeError",
    "ProviderNotFoundError",
    "ProviderValidationError",
    "SecretResolutionError",
    "TimedOutError",
    "UnauthorizedError",
    "UnclassifiedProbeError",
    "UnreachableError",
    # models
    "ModelCatalogEntry",
    "ModelCost",
    "ModelProviderConfig",
    "ModelSpec",
    "ProviderCandidate",
    "ProviderEntry",
    "ValidationOutcome",
    # probe
    "ChatCompletionClient",
    "ChatCompletionError",
    "OpenAIChatClient",
    "classify_probe_error",
    "normalize_base_url",
    "probe",
    # secrets
    "mask_api_key",
    "resolve_api_key",
    "substitute_env_vars",
    # validation
    "ProviderValidator",
    "validate_model_provider",
]
