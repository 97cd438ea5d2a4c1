"""HTTP execution endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from bathttp.backend.deps import Executor
from bathttp.backend.models.http import HttpRequest, HttpResponse

router = APIRouter(prefix="/http", tags=["http"])


@router.post("/execute", response_model=HttpResponse)
async def execute_http_request(body: HttpRequest, executor: Executor) -> HttpResponse:
    """Send one HTTP request and return the normalized response."""
    return await executor.execute(body)
