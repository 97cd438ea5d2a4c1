import json

import click


@click.group()
def main() -> None:
    """BATHTTP - HTTP request builder/runner backend."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from BATHTTP_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: from BATHTTP_PORT or 8765).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the backend service the UI talks to."""
    import uvicorn

    from bathttp.backend.settings import get_settings

    settings = get_settings()

    uvicorn.run(
        "bathttp.backend.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


def _parse_pairs(values: tuple[str, ...], sep: str, what: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw in values:
        key, found, value = raw.partition(sep)
        if not found:
            msg = f"Invalid {what} '{raw}', expected KEY{sep}VALUE"
            raise click.BadParameter(msg)
        pairs[key.strip()] = value.strip()
    return pairs


@main.command()
@click.argument("method")
@click.argument("url")
@click.option("-H", "--header", "headers", multiple=True, help="Request header as 'Name: value'. Repeatable.")
@click.option("-p", "--param", "params", multiple=True, help="Query param as 'key=value'. Repeatable.")
@click.option("-d", "--data", "body", default=None, help="Request body.")
@click.option("--timeout", default=None, type=float, help="Timeout in seconds (default: none).")
def send(
    method: str,
    url: str,
    headers: tuple[str, ...],
    params: tuple[str, ...],
    body: str | None,
    timeout: float | None,
) -> None:
    """Execute one HTTP request and print the normalized response as JSON."""
    import asyncio

    from bathttp.backend.errors import BathttpError
    from bathttp.backend.executor import RequestExecutor
    from bathttp.backend.log import setup_logging
    from bathttp.backend.models.http import HttpRequest
    from bathttp.backend.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level, cli=True)

    request = HttpRequest(
        url=url,
        method=method,
        headers=_parse_pairs(headers, ":", "header"),
        params=_parse_pairs(params, "=", "param"),
        body=body,
        timeout=timeout,
    )

    async def _run() -> str:
        async with RequestExecutor(max_redirects=settings.max_redirects) as executor:
            response = await executor.execute(request)
        return response.model_dump_json(indent=2)

    try:
        click.echo(asyncio.run(_run()))
    except BathttpError as exc:
        click.echo(json.dumps(exc.to_payload(), indent=2), err=True)
        raise SystemExit(1) from None


@main.command("data-dir")
def data_dir() -> None:
    """Print the data directory, creating it if needed."""
    from bathttp.backend.errors import BathttpError
    from bathttp.backend.locator import data_dir_from_settings
    from bathttp.backend.settings import get_settings

    try:
        click.echo(str(data_dir_from_settings(get_settings())))
    except BathttpError as exc:
        click.echo(json.dumps(exc.to_payload(), indent=2), err=True)
        raise SystemExit(1) from None


@main.command()
def workspaces() -> None:
    """List the workspaces in the registry (the current one is starred)."""
    import asyncio

    from bathttp.backend.errors import BathttpError
    from bathttp.backend.locator import data_dir_from_settings
    from bathttp.backend.settings import get_settings
    from bathttp.backend.store.local import LocalPersistenceStore

    try:
        store = LocalPersistenceStore(data_dir_from_settings(get_settings()))
        data = asyncio.run(store.load_workspaces())
    except BathttpError as exc:
        click.echo(json.dumps(exc.to_payload(), indent=2), err=True)
        raise SystemExit(1) from None

    for ws in data.workspaces:
        marker = "*" if ws.id == data.current_workspace_id else " "
        count = len(data.requests_by_workspace.get(ws.id, []))
        sync = f"  -> {ws.sync_path}" if ws.sync_path else ""
        click.echo(f"{marker} {ws.id}  {ws.name}  ({count} requests){sync}")


if __name__ == "__main__":
    main()
