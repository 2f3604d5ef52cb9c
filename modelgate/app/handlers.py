# -*- coding: utf-8 -*-
"""Gateway RPC handlers for ``models.validate`` and ``models.list``.

Handlers never raise: every call ends in a ``RpcResponse`` envelope that
is either ``ok`` with a payload or carries an ``{code, message}`` error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..config.store import ConfigStore
from ..providers import (
    CatalogUnavailableError,
    ConfigUnreadableError,
    ModelCatalogEntry,
    ProviderValidator,
    build_model_catalog,
)

logger = logging.getLogger(__name__)


class ErrorCodes:
    INVALID_REQUEST = "INVALID_REQUEST"
    UNAVAILABLE = "UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


class ErrorShape(BaseModel):
    code: str
    message: str


class RpcResponse(BaseModel):
    ok: bool
    payload: Optional[Any] = None
    error: Optional[ErrorShape] = None


def error_shape(code: str, message: str) -> ErrorShape:
    return ErrorShape(code=code, message=message)


def respond_ok(payload: Any) -> RpcResponse:
    return RpcResponse(ok=True, payload=payload)


def respond_error(code: str, message: str) -> RpcResponse:
    return RpcResponse(ok=False, error=error_shape(code, message))


def format_validation_errors(exc: ValidationError) -> str:
    """Render pydantic errors as ``"<loc>: <msg>; ..."``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "params"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# Param schemas
# ---------------------------------------------------------------------------


class ModelsValidateParams(BaseModel):
    model_config = {"extra": "forbid", "protected_namespaces": ()}

    base_url: str = Field(..., alias="baseUrl", min_length=1)
    model_id: str = Field(..., alias="modelId", min_length=1)
    api_key: Optional[str] = Field(default=None, alias="apiKey")


class ModelsListParams(BaseModel):
    model_config = {"extra": "forbid"}


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

CatalogLoader = Callable[[], Awaitable[List[ModelCatalogEntry]]]


def store_catalog_loader(store: ConfigStore) -> CatalogLoader:
    """Catalog loader reading the providers configured in *store*."""

    async def _load() -> List[ModelCatalogEntry]:
        try:
            document = store.load()
        except OSError as exc:
            raise CatalogUnavailableError(
                f"cannot read config {store.path}: {exc.strerror or exc}",
            ) from exc
        except ConfigUnreadableError as exc:
            raise CatalogUnavailableError(str(exc)) from exc
        return build_model_catalog(document)

    return _load


@dataclass
class GatewayContext:
    """Collaborators the handlers depend on."""

    load_model_catalog: CatalogLoader
    validator: ProviderValidator = field(default_factory=ProviderValidator)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def handle_models_validate(
    params: Any,
    context: GatewayContext,
) -> RpcResponse:
    try:
        parsed = ModelsValidateParams.model_validate(params or {})
    except ValidationError as exc:
        return respond_error(
            ErrorCodes.INVALID_REQUEST,
            "invalid models.validate params: "
            f"{format_validation_errors(exc)}",
        )
    outcome = await context.validator.validate(
        parsed.base_url,
        parsed.model_id,
        parsed.api_key,
    )
    if outcome.ok:
        return respond_ok({"ok": True})
    return respond_error(ErrorCodes.INVALID_REQUEST, outcome.reason or "")


async def handle_models_list(
    params: Any,
    context: GatewayContext,
) -> RpcResponse:
    try:
        ModelsListParams.model_validate(params or {})
    except ValidationError as exc:
        return respond_error(
            ErrorCodes.INVALID_REQUEST,
            f"invalid models.list params: {format_validation_errors(exc)}",
        )
    try:
        models = await context.load_model_catalog()
    except Exception as exc:  # catalog failures are reported, not raised
        logger.warning("Model catalog unavailable: %s", exc)
        return respond_error(ErrorCodes.UNAVAILABLE, str(exc) or "unavailable")
    return respond_ok(
        {
            "models": [
                m.model_dump(by_alias=True, exclude_none=True) for m in models
            ],
        },
    )


Handler = Callable[[Any, GatewayContext], Awaitable[RpcResponse]]

MODELS_HANDLERS: Dict[str, Handler] = {
    "models.validate": handle_models_validate,
    "models.list": handle_models_list,
}


async def dispatch(
    method: str,
    params: Any,
    context: GatewayContext,
) -> RpcResponse:
    """Route *method* to its handler."""
    handler = MODELS_HANDLERS.get(method)
    if handler is None:
        return respond_error(
            ErrorCodes.NOT_FOUND,
            f"unknown method: {method}",
        )
    try:
        return await handler(params, context)
    except Exception:
        logger.exception("Handler for %s failed", method)
        return respond_error(ErrorCodes.INTERNAL, f"{method} failed")
