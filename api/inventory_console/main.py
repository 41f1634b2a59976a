# inventory_console/main.py
# Inventory Console API - one storage backend behind a generic collection API
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .settings import Settings, settings
from .models import BackendKind, HealthOut
from .connection import ConnectionManagers
from .errors import (
    StorageError, InsertFailure, UpdateFailure, DeleteFailure, ConnectionFailure, PersistenceFailure,
)
from .registry import build_registry

from inventory_console.routers.collections import router as collections_router
from inventory_console.routers.dashboard import router as dashboard_router

# ---------------------------------------------------------
# Logging setup
# ---------------------------------------------------------
from inventory_console.logging_setup import setup_logging
setup_logging(settings)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------
# Lifespan: backend connect / registry / disconnect
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    cfg: Settings = app.state.settings
    managers: ConnectionManagers = app.state.managers
    kind = cfg.backend_kind

    manager = managers[kind]
    app.state.fallback_error = None
    if not await manager.connect(cfg.backend_config(kind)):
        logger.warning("%s backend unavailable (%s), falling back to memory", kind.value, manager.last_error)
        app.state.fallback_error = manager.last_error
        manager = managers[BackendKind.memory]
        await manager.connect(cfg.backend_config(BackendKind.memory))

    app.state.manager = manager
    app.state.registry = build_registry(manager, timeout=cfg.DB_TIMEOUT)
    yield
    await managers.disconnect_all()


# ---------------------------------------------------------
# Storage failures -> HTTP
# ---------------------------------------------------------
def status_for(exc: StorageError) -> int:
    if isinstance(exc, PersistenceFailure):
        return 507
    if isinstance(exc, (InsertFailure, UpdateFailure, DeleteFailure)):
        # pydantic ValidationError is a ValueError too
        return 400 if isinstance(exc.cause, ValueError) else 503
    if isinstance(exc, ConnectionFailure):
        return 503
    return 500


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    code = status_for(exc)
    logger.error("%s %s -> %d: %s", request.method, request.url.path, code, exc)
    body = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, PersistenceFailure) and exc.record is not None:
        body["record"] = exc.record
    return JSONResponse(status_code=code, content=body)


# ---------------------------------------------------------
# FastAPI app + CORS
# ---------------------------------------------------------
def create_app(cfg: Optional[Settings] = None, managers: Optional[ConnectionManagers] = None) -> FastAPI:
    cfg = cfg or settings
    app = FastAPI(
        title="Inventory Console API",
        version="1.0.0",
        description="Products, customers, orders, payments, warehouses and expenses over a pluggable store",
        lifespan=lifespan,
    )
    app.state.settings = cfg
    app.state.managers = managers or ConnectionManagers(
        connect_timeout=cfg.CONNECT_TIMEOUT, data_root=cfg.INVENTORY_DATA_ROOT,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:8000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StorageError, storage_error_handler)
    app.include_router(collections_router)
    app.include_router(dashboard_router)

    @app.get("/health", response_model=HealthOut)
    async def health(request: Request) -> HealthOut:
        """Backend in use, its connection state, and the last connect error."""
        state = request.app.state
        manager = state.manager
        degraded = not manager.is_connected or state.fallback_error is not None
        return HealthOut(
            status="degraded" if degraded else "ok",
            backend=manager.kind,
            connection=manager.state.value,
            last_error=manager.last_error or state.fallback_error,
        )

    return app


app = create_app()
