"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Nunca se imprimen en stdout mientras el servidor MCP está activo.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

STATUS_STYLES = {
    "OK": "green",
    "MISSING": "red",
    "FAIL": "red",
    "SKIPPED": "yellow",
    "INFO": "cyan",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en comandos interactivos)."""

    title = Text("replicated-mcp-server", style="bold cyan")
    subtitle = Text("Vendor Portal • MCP tools & resources", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Details", style="dim")
    return table


def add_check(table: Table, check: str, status: str, details: str) -> None:
    table.add_row(check, Text(status, style=STATUS_STYLES.get(status, "white")), details)


def error_text(message: str) -> Text:
    return Text.assemble(("Error: ", "bold red"), message)
