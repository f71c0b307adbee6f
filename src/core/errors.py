"""Taxonomía de errores del Core.

Por qué aquí:
- Los adaptadores (HTTP) y la capa de protocolo (MCP) comparten los mismos
  tipos, así que el servidor puede traducirlos sin conocer detalles de httpx.
- Cada clase corresponde a un tipo de fallo distinto: argumentos, red,
  respuesta HTTP, JSON y validación de entidades.
"""

from __future__ import annotations


class VendorPortalError(Exception):
    """Base de todos los errores propios del proyecto."""


class ConfigError(VendorPortalError):
    """Configuración de proceso inválida o incompleta."""


class ArgumentError(VendorPortalError, ValueError):
    """Argumentos ausentes o mal formados, detectados antes de cualquier I/O."""


class TransportError(VendorPortalError):
    """Fallo de red, timeout o conexión al hablar con la API."""

    def __init__(self, operation: str, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"failed to {operation}: {cause}")


class APIError(VendorPortalError):
    """Respuesta HTTP no exitosa (status >= 400)."""

    def __init__(self, status_code: int, message: str, details: str = "") -> None:
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.details:
            return f"API error (status {self.status_code}): {self.message} - {self.details}"
        return f"API error (status {self.status_code}): {self.message}"


class DecodeError(VendorPortalError):
    """El cuerpo de la respuesta no es JSON válido o no tiene la forma esperada."""

    def __init__(self, operation: str, cause: Exception | str) -> None:
        self.operation = operation
        super().__init__(f"failed to parse JSON response for {operation}: {cause}")


class EntityValidationError(VendorPortalError):
    """Una entidad viola uno o más invariantes.

    Guarda la lista completa de reglas violadas (no corta en la primera).
    """

    def __init__(self, kind: str, violations: list[str]) -> None:
        self.kind = kind
        self.violations = list(violations)
        joined = "\n  - ".join(self.violations)
        super().__init__(f"{kind} validation errors:\n  - {joined}")
