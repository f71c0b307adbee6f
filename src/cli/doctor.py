"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console

from adapters.vendor_portal import VendorPortalClient
from cli.ui_components import add_check, build_checks_table, error_text, print_banner
from core.config import DEFAULT_ENDPOINT, AppSettings, load_settings, write_user_env_vars
from core.errors import ConfigError, VendorPortalError
from core.services.portal import PortalService

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def check_api(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Sonda real: `list_applications` con limit=1."""

    try:
        async with VendorPortalClient(settings, transport=transport) as client:
            page = await PortalService(client).list_applications(1, 0)
    except VendorPortalError as exc:
        return False, str(exc)
    return True, f"{page.total_count or len(page.data)} application(s) visible"


def _overrides(ctx: typer.Context) -> dict[str, object]:
    parent = ctx.find_root()
    return dict(parent.obj or {})


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings(**_overrides(ctx))
    except ConfigError as exc:
        _console.print(error_text(str(exc)), soft_wrap=True)
        raise typer.Exit(code=1) from exc

    print_banner(_console)
    table = build_checks_table("replicated-mcp-server doctor")

    if settings.api_token:
        add_check(table, "API token", "OK", "Token configured")
    else:
        add_check(table, "API token", "MISSING", "Set REPLICATED_API_TOKEN or run `doctor setup-token`")
    add_check(table, "Endpoint", "OK", settings.endpoint)
    add_check(table, "Timeout", "OK", f"{settings.timeout_seconds:g}s")
    add_check(table, "Log level", "OK", settings.log_level)
    add_check(
        table,
        "Validation",
        "INFO",
        "strict (invalid entities fail)" if settings.strict_validation else "advisory (warnings only)",
    )
    add_check(table, "Retries", "INFO", str(settings.max_retries))

    if settings.api_token:
        ok, detail = asyncio.run(check_api(settings))
        add_check(table, "API connectivity", "OK" if ok else "FAIL", detail)
    else:
        add_check(table, "API connectivity", "SKIPPED", "No API token")

    _console.print(table)


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive token setup (stores config in the user config .env)."""

    api_token = typer.prompt("Vendor Portal API token", hide_input=True).strip()
    endpoint = typer.prompt("API endpoint", default=DEFAULT_ENDPOINT, show_default=True).strip()

    if not api_token:
        raise typer.BadParameter("API token cannot be empty")

    env_path = write_user_env_vars(
        {
            "REPLICATED_API_TOKEN": api_token,
            "REPLICATED_ENDPOINT": endpoint or DEFAULT_ENDPOINT,
        }
    )
    _console.print(f"[green]Saved Vendor Portal config to:[/green] {env_path}")
