"""Saved request endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from bathttp.backend.deps import Store
from bathttp.backend.models.requests import RequestsData

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("/load", response_model=RequestsData)
async def load_requests(store: Store) -> RequestsData:
    return await store.load_requests()


@router.post("/save", status_code=status.HTTP_204_NO_CONTENT)
async def save_requests(body: RequestsData, store: Store) -> None:
    """Overwrite the saved requests document."""
    await store.save_requests(body)
