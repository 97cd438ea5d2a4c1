"""Shared enumerations."""

from __future__ import annotations

from enum import StrEnum


class HttpMethod(StrEnum):
    """Methods the executor will send."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
