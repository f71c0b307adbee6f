"""CLI principal (Typer).

Sin subcomando: carga la configuración (flags > entorno), configura logging
en stderr y sirve MCP por stdio. `doctor` agrupa diagnósticos y setup.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.vendor_portal import VendorPortalClient
from cli import doctor
from cli.ui_components import error_text
from core import __version__
from core.config import AppSettings, load_settings
from core.errors import ConfigError
from core.logging_config import configure_logging, get_logger
from core.services.portal import PortalService
from server.app import build_server

app = typer.Typer(
    name="replicated-mcp-server",
    help="MCP server exposing Replicated Vendor Portal applications, releases, channels and customers.",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)
logger = get_logger("cli")


async def serve(settings: AppSettings) -> None:
    """Un único cliente HTTP por proceso; se cierra al terminar el transporte stdio."""

    async with VendorPortalClient(settings) as client:
        mcp = build_server(PortalService(client))
        logger.info("Serving MCP over stdio")
        await mcp.run_async(transport="stdio", show_banner=False)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"replicated-mcp-server {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    api_token: str | None = typer.Option(
        None, "--api-token", help="Vendor Portal API token (overrides REPLICATED_API_TOKEN)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="fatal | error | info | debug | trace (overrides REPLICATED_LOG_LEVEL)."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-request timeout in seconds, 1-300 (overrides REPLICATED_TIMEOUT_SECONDS)."
    ),
    endpoint: str | None = typer.Option(None, "--endpoint", hidden=True),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    overrides = {
        "api_token": api_token,
        "log_level": log_level,
        "timeout_seconds": timeout,
        "endpoint": endpoint,
    }
    ctx.obj = overrides
    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = load_settings(**overrides)
        settings.require_api_token()
    except ConfigError as exc:
        _err_console.print(error_text(str(exc)), soft_wrap=True)
        raise typer.Exit(code=1) from exc

    configure_logging(settings.log_level)
    logger.info("Starting replicated-mcp-server %s with %s", __version__, settings.describe())
    asyncio.run(serve(settings))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
