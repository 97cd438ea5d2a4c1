"""Request/response shapes of the HTTP executor."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bathttp.backend.models.enums import HttpMethod


class HttpRequest(BaseModel):
    """One outgoing call as described by the UI.

    ``method`` is kept as a free string: unsupported values are rejected by
    the executor with ``UnsupportedMethodError`` rather than by validation.
    """

    url: str
    method: str = HttpMethod.GET
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None
    params: dict[str, str] = Field(default_factory=dict, description="Query params; empty values are skipped.")
    timeout: float | None = Field(default=None, description="Seconds; None disables the timeout.")


class HttpResponse(BaseModel):
    status: int
    status_text: str
    headers: dict[str, str]
    body: str
    time_ms: int
    size: int
