"""Saved request models.

A saved request is one user-authored entry of a collection.  Its ``id`` is
assigned by the caller (the UI uses a millisecond timestamp); uniqueness
inside a collection is the caller's responsibility.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(UTC).isoformat()


class SavedRequest(BaseModel):
    id: int
    name: str = "Untitled Request"
    method: str = "GET"
    url: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""
    params: dict[str, str] = Field(default_factory=dict)
    favorite: bool = False
    created_at: str = Field(default_factory=utc_timestamp)

    @classmethod
    def blank(cls, request_id: int) -> SavedRequest:
        """The template the UI starts a new request from."""
        return cls(id=request_id, headers={"Content-Type": "application/json"})


class RequestsData(BaseModel):
    """Contents of ``requests.json``.

    ``selected_request_id`` should reference an entry of ``requests`` but this
    is not validated: a dangling id is stored and returned as-is.
    """

    requests: list[SavedRequest] = Field(default_factory=list)
    selected_request_id: int | None = None

    def selected_request(self) -> SavedRequest | None:
        """Return the selected request, or ``None`` if unset or dangling."""
        if self.selected_request_id is None:
            return None
        return next((r for r in self.requests if r.id == self.selected_request_id), None)
