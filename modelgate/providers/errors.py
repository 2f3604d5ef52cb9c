# -*- coding: utf-8 -*-
"""Exceptions raised while validating and managing model providers.

Every failure that can end a validation call maps to one of these:

- ``ParameterError``: a required field is missing or blank (no I/O done)
- ``SecretResolutionError``: the credential could not be resolved (no I/O done)
- ``ProbeError`` and its subclasses: the single probe request failed
- ``CatalogUnavailableError``: the gateway's own model catalog failed to load
- ``ConfigUnreadableError``: config.json could not be parsed
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Machine-readable classification of a failed validation."""

    PARAMETER = "parameter"
    SECRET = "secret"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    TIMED_OUT = "timed_out"
    UNCLASSIFIED = "unclassified"


class ModelGateError(Exception):
    """Base class for all errors raised by this package."""


class ParameterError(ModelGateError, ValueError):
    """A required parameter is missing or blank."""


class SecretResolutionError(ModelGateError):
    """A credential string could not be resolved."""

    kind = FailureKind.SECRET


class MissingEnvVarError(SecretResolutionError):
    """A ``${NAME}`` placeholder references an unset or empty variable."""

    def __init__(self, var_name: str):
        self.var_name = var_name
        super().__init__(f'Missing env var "{var_name}"')


class ProbeError(ModelGateError):
    """The probe request failed; ``str(err)`` is safe to display."""

    kind = FailureKind.UNCLASSIFIED


class UnauthorizedError(ProbeError):
    kind = FailureKind.UNAUTHORIZED

    def __init__(self, message: str = "Invalid API key or unauthorized"):
        super().__init__(message)


class NotFoundError(ProbeError):
    kind = FailureKind.NOT_FOUND

    def __init__(self, message: str = "Model or endpoint not found"):
        super().__init__(message)


class UnreachableError(ProbeError):
    kind = FailureKind.UNREACHABLE

    def __init__(self, message: str = "Cannot connect to base URL"):
        super().__init__(message)


class TimedOutError(ProbeError):
    kind = FailureKind.TIMED_OUT

    def __init__(self, message: str = "Connection timed out"):
        super().__init__(message)


class UnclassifiedProbeError(ProbeError):
    kind = FailureKind.UNCLASSIFIED


class CatalogUnavailableError(ModelGateError):
    """Loading the gateway model catalog failed."""


class ConfigUnreadableError(ModelGateError):
    """config.json exists but is not a JSON object.

    Raised instead of treating the file as empty, so a patch is never
    written over a document that could not be read.
    """

    def __init__(self, path, detail: str):
        self.path = path
        super().__init__(f"Config {path} is unreadable: {detail}")


class ProviderValidationError(ModelGateError):
    """Raised by the provider manager when the live probe rejects a provider.

    Carries the failed ``ValidationOutcome`` so callers can show its reason.
    """

    def __init__(self, outcome):
        self.outcome = outcome
        super().__init__(outcome.reason or "Provider validation failed")


class ProviderNotFoundError(ModelGateError, LookupError):
    """No provider with this id is configured."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Provider '{provider_id}' not found")
