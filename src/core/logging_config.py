"""Logging del proceso.

Por qué en el Core:
- stdout es del protocolo MCP (stdio); cualquier log ahí corrompe el canal.
  Todo sale por stderr con `RichHandler`.
- Los niveles del proyecto (trace/debug/info/error/fatal) se mapean aquí
  a niveles de `logging` una sola vez.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "replicated_mcp"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(logging.CRITICAL, "FATAL")

_LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}


def parse_log_level(name: str | None) -> int:
    """Nombre -> nivel numérico. Desconocido => fatal (lo más restrictivo)."""

    return _LEVELS.get((name or "").strip().lower(), logging.CRITICAL)


def level_name(level: int) -> str:
    for name, value in _LEVELS.items():
        if value == level:
            return name
    return "unknown"


def get_logger(name: str = "") -> logging.Logger:
    """Logger hijo de la jerarquía `replicated_mcp` (p.ej. `replicated_mcp.client`)."""

    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def configure_logging(level: str | None, *, console: Console | None = None) -> logging.Logger:
    """Instala un único `RichHandler` en stderr para la jerarquía del proyecto.

    Llamarlo de nuevo reemplaza el handler anterior (no duplica salidas).
    """

    logger = get_logger()
    numeric = parse_log_level(level)
    logger.setLevel(numeric)

    for handler in list(logger.handlers):
        if getattr(handler, "_replicated_mcp", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setLevel(numeric)
    handler._replicated_mcp = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
