# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config.manager import ProviderManager
from ..config.store import ConfigStore
from ..constant import DOCS_ENABLED
from ..providers import ConfigUnreadableError, ProviderValidator
from .handlers import GatewayContext, store_catalog_loader
from .routers.models import router as models_router
from .routers.models import rpc_router


def create_app(
    store: Optional[ConfigStore] = None,
    validator: Optional[ProviderValidator] = None,
) -> FastAPI:
    """Build the gateway API around one config store."""
    store = store if store is not None else ConfigStore()
    validator = validator if validator is not None else ProviderValidator()

    app = FastAPI(
        title="modelgate",
        docs_url="/docs" if DOCS_ENABLED else None,
        redoc_url="/redoc" if DOCS_ENABLED else None,
        openapi_url="/openapi.json" if DOCS_ENABLED else None,
    )
    app.state.manager = ProviderManager(store=store, validator=validator)
    app.state.gateway_context = GatewayContext(
        load_model_catalog=store_catalog_loader(store),
        validator=validator,
    )
    app.include_router(models_router, prefix="/api")
    app.include_router(rpc_router, prefix="/api")

    @app.exception_handler(ConfigUnreadableError)
    async def _config_unreadable(
        request: Request,
        exc: ConfigUnreadableError,
    ) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    return app
