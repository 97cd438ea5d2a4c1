from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from bathttp.backend.errors import BathttpError
from bathttp.backend.executor import RequestExecutor, create_http_client
from bathttp.backend.locator import data_dir_from_settings
from bathttp.backend.log import setup_logging
from bathttp.backend.managers.workspaces import WorkspaceSyncManager
from bathttp.backend.settings import get_settings
from bathttp.backend.store.local import LocalPersistenceStore


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level)

    data_dir = data_dir_from_settings(settings)
    logger.info("BATHTTP backend starting (host={}, port={})", settings.host, settings.port)
    logger.info("Data directory: {}", data_dir)

    store = LocalPersistenceStore(data_dir)
    _app.state.store = store
    _app.state.workspace_manager = WorkspaceSyncManager(store)

    # One client for every executed request (keeps TLS sessions and pooled connections).
    http_client = create_http_client(settings.max_redirects)
    _app.state.http_client = http_client
    _app.state.executor = RequestExecutor(http_client)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("BATHTTP backend shutting down")
    await http_client.aclose()


app = FastAPI(title="BATHTTP Backend", lifespan=lifespan)


@app.exception_handler(BathttpError)
async def bathttp_error_handler(_request: Request, exc: BathttpError) -> JSONResponse:
    """Return domain errors as ``{"error": kind, "details": detail}``."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


# ---------------------------------------------------------------------------
# API router -- all backend commands live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from bathttp.backend.routers.http import router as http_router  # noqa: E402
from bathttp.backend.routers.requests import router as requests_router  # noqa: E402
from bathttp.backend.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(http_router)
api.include_router(requests_router)
api.include_router(workspaces_router)

app.include_router(api)
