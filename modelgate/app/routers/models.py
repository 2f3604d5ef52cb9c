# -*- coding: utf-8 -*-
"""API routes for model providers, the default model and gateway RPC."""

from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Request
from pydantic import BaseModel, Field

from ...config.manager import ProviderManager
from ...providers import (
    ModelCatalogEntry,
    ParameterError,
    ProviderEntry,
    ProviderNotFoundError,
    ProviderValidationError,
)
from ..handlers import GatewayContext, RpcResponse, dispatch

router = APIRouter(prefix="/models", tags=["models"])
rpc_router = APIRouter(tags=["rpc"])


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ProviderConfigRequest(BaseModel):
    """Request body for adding or editing a provider."""

    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    model_id: str = Field(..., alias="modelId", description="Model id")
    model_name: str = Field(
        default="",
        alias="modelName",
        description="Display name (defaults to the model id)",
    )
    base_url: str = Field(..., alias="baseUrl", description="API base URL")
    api_key: Optional[str] = Field(
        default=None,
        alias="apiKey",
        description="API key; may reference ${VAR}. Blank keeps the stored key",
    )
    set_as_default: bool = Field(default=False, alias="setAsDefault")


class NewProviderRequest(ProviderConfigRequest):
    provider_id: str = Field(..., alias="providerId", description="Provider")


class DefaultModelRequest(BaseModel):
    """Request body for setting the default model."""

    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    provider_id: str = Field(..., alias="providerId")
    model_id: str = Field(..., alias="modelId")


class DefaultModelInfo(BaseModel):
    primary: Optional[str] = None


class ValidateRequest(BaseModel):
    model_config = {"populate_by_name": True, "protected_namespaces": ()}

    base_url: str = Field(..., alias="baseUrl")
    model_id: str = Field(..., alias="modelId")
    api_key: Optional[str] = Field(default=None, alias="apiKey")


class RpcRequest(BaseModel):
    method: str = Field(..., description="RPC method, e.g. models.validate")
    params: Any = None


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_manager(request: Request) -> ProviderManager:
    return request.app.state.manager


def get_context(request: Request) -> GatewayContext:
    return request.app.state.gateway_context


def _find_entry(manager: ProviderManager, provider_id: str) -> ProviderEntry:
    for entry in manager.list_providers():
        if entry.id == provider_id:
            return entry
    raise HTTPException(
        status_code=404,
        detail=f"Provider '{provider_id}' not found",
    )


# ---------------------------------------------------------------------------
# Endpoints: provider CRUD
# ---------------------------------------------------------------------------


@router.get(
    "/providers",
    response_model=List[ProviderEntry],
    summary="List configured providers",
)
async def list_all_providers(
    manager: ProviderManager = Depends(get_manager),
) -> List[ProviderEntry]:
    return manager.list_providers()


@router.post(
    "/providers",
    response_model=ProviderEntry,
    status_code=201,
    summary="Add a provider",
    description="Probe the provider, then persist it to config.json.",
)
async def add_provider(
    body: NewProviderRequest = Body(..., description="Provider to add"),
    manager: ProviderManager = Depends(get_manager),
) -> ProviderEntry:
    try:
        await manager.add_provider(
            body.provider_id,
            body.model_id,
            body.base_url,
            model_name=body.model_name,
            api_key=body.api_key,
            set_as_default=body.set_as_default,
        )
    except (ParameterError, ProviderValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _find_entry(manager, body.provider_id.strip())


@router.put(
    "/providers/{provider_id}",
    response_model=ProviderEntry,
    summary="Edit a provider",
    description="Probe the provider, then rewrite its config. "
    "A blank apiKey keeps the stored key.",
)
async def update_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    body: ProviderConfigRequest = Body(..., description="New settings"),
    manager: ProviderManager = Depends(get_manager),
) -> ProviderEntry:
    try:
        await manager.update_provider(
            provider_id,
            body.model_id,
            body.base_url,
            model_name=body.model_name,
            api_key=body.api_key,
            set_as_default=body.set_as_default,
        )
    except ProviderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ParameterError, ProviderValidationError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _find_entry(manager, provider_id.strip())


@router.delete(
    "/providers/{provider_id}",
    summary="Delete a provider",
)
async def delete_provider(
    provider_id: str = Path(..., description="Provider identifier"),
    manager: ProviderManager = Depends(get_manager),
) -> dict:
    try:
        manager.delete_provider(provider_id)
    except ParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"deleted": provider_id}


# ---------------------------------------------------------------------------
# Endpoints: default model
# ---------------------------------------------------------------------------


@router.get(
    "/default",
    response_model=DefaultModelInfo,
    summary="Get the default model",
)
async def get_default_model(
    manager: ProviderManager = Depends(get_manager),
) -> DefaultModelInfo:
    return DefaultModelInfo(primary=manager.get_default_model_ref())


@router.put(
    "/default",
    response_model=DefaultModelInfo,
    summary="Set the default model",
)
async def set_default_model(
    body: DefaultModelRequest = Body(..., description="Model to use"),
    manager: ProviderManager = Depends(get_manager),
) -> DefaultModelInfo:
    try:
        manager.set_default_model(body.provider_id, body.model_id)
    except ParameterError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return DefaultModelInfo(primary=manager.get_default_model_ref())


# ---------------------------------------------------------------------------
# Endpoints: validation + catalog
# ---------------------------------------------------------------------------


@router.post("/validate", summary="Probe a provider without saving it")
async def validate_provider(
    body: ValidateRequest = Body(...),
    context: GatewayContext = Depends(get_context),
) -> dict:
    outcome = await context.validator.validate(
        body.base_url,
        body.model_id,
        body.api_key,
    )
    if not outcome.ok:
        raise HTTPException(status_code=400, detail=outcome.reason)
    return {"ok": True}


@router.get(
    "/catalog",
    response_model=List[ModelCatalogEntry],
    response_model_exclude_none=True,
    summary="List models the gateway can route to",
)
async def get_catalog(
    context: GatewayContext = Depends(get_context),
) -> List[ModelCatalogEntry]:
    try:
        return await context.load_model_catalog()
    except Exception as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@rpc_router.post("/rpc", response_model=RpcResponse)
async def rpc(
    body: RpcRequest = Body(...),
    context: GatewayContext = Depends(get_context),
) -> RpcResponse:
    return await dispatch(body.method, body.params, context)
