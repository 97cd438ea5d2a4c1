"""HTTP request executor.

Sends one request described by an ``HttpRequest`` and normalizes the reply
into an ``HttpResponse``.  The executor keeps no state between calls apart
from the ``httpx.AsyncClient`` it sends through.

Client ownership::

    # Shared client (service): created once at startup, closed at shutdown.
    executor = RequestExecutor(app.state.http_client)

    # Owned client (CLI, scripts): closed when the block exits.
    async with RequestExecutor() as executor:
        response = await executor.execute(request)

No retries are attempted and no timeout is imposed unless the caller sets
``HttpRequest.timeout``.  Redirects are followed (up to ``max_redirects``).
"""

from __future__ import annotations

import time
from types import TracebackType

import httpx
from loguru import logger

from bathttp.backend.errors import BodyReadError, SendError, UnsupportedMethodError
from bathttp.backend.models.enums import HttpMethod
from bathttp.backend.models.http import HttpRequest, HttpResponse

SUPPORTED_METHODS = frozenset(HttpMethod)


def create_http_client(max_redirects: int = 10) -> httpx.AsyncClient:
    """Build the client the executor sends through: redirects on, no timeout."""
    return httpx.AsyncClient(timeout=None, follow_redirects=True, max_redirects=max_redirects)


class RequestExecutor:
    """Performs single HTTP calls.  Safe to share across concurrent tasks."""

    def __init__(self, client: httpx.AsyncClient | None = None, *, max_redirects: int = 10) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else create_http_client(max_redirects)

    async def __aenter__(self) -> RequestExecutor:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the client if this executor created it."""
        if self._owns_client:
            await self._client.aclose()

    async def execute(self, request: HttpRequest) -> HttpResponse:
        """Send ``request`` and return the normalized response.

        Raises ``UnsupportedMethodError`` (nothing sent), ``SendError`` or
        ``BodyReadError``.
        """
        method = request.method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(request.method)

        try:
            outgoing = self._client.build_request(
                method,
                _build_url(request.url, request.params),
                headers=_build_headers(request.headers),
                content=request.body.encode("utf-8") if request.body else None,
                timeout=request.timeout if request.timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except (httpx.InvalidURL, httpx.HTTPError, UnicodeEncodeError) as exc:
            raise SendError(_describe(exc)) from exc

        start = time.perf_counter()
        try:
            response = await self._client.send(outgoing, stream=True)
        except httpx.HTTPError as exc:
            raise SendError(_describe(exc)) from exc

        try:
            await response.aread()
            body = response.text
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise BodyReadError(_describe(exc)) from exc
        finally:
            await response.aclose()
        time_ms = int((time.perf_counter() - start) * 1000)

        result = HttpResponse(
            status=response.status_code,
            status_text=httpx.codes.get_reason_phrase(response.status_code) or "Unknown",
            headers=_decode_headers(response.headers),
            body=body,
            time_ms=time_ms,
            size=len(body.encode("utf-8")),
        )
        logger.debug("{} {} -> {} ({} ms, {} bytes)", method, outgoing.url, result.status, time_ms, result.size)
        return result


def _build_headers(headers: dict[str, str]) -> httpx.Headers:
    """Attach headers in iteration order; a repeated name (any case) replaces the earlier value."""
    built = httpx.Headers()
    for key, value in headers.items():
        built[key] = value
    return built


def _build_url(url: str, params: dict[str, str]) -> httpx.URL:
    """Append non-empty params after any query the URL already carries.

    Keys repeated between the URL and ``params`` are kept twice.
    """
    built = httpx.URL(url)
    for key, value in params.items():
        if value:
            built = built.copy_add_param(key, value)
    return built


def _decode_headers(headers: httpx.Headers) -> dict[str, str]:
    decoded: dict[str, str] = {}
    for raw_key, raw_value in headers.raw:
        try:
            value = raw_value.decode("utf-8")
        except UnicodeDecodeError:
            value = ""
        decoded[raw_key.decode("latin-1").lower()] = value
    return decoded


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
