"""Cliente HTTP del Vendor Portal.

Responsabilidades:
- Ejecutar GETs sobre un único `httpx.AsyncClient` compartido.
- Convertir fallos en la taxonomía de `core.errors` (red, HTTP, JSON).
- Reintentos opcionales con backoff exponencial (desactivados por defecto).
- Aplicar la política de validación de entidades (aviso o error).
"""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import httpx

from adapters.http_client import build_async_client
from adapters.vendor_portal.applications import ApplicationService
from adapters.vendor_portal.channels import ChannelService
from adapters.vendor_portal.customers import CustomerService
from adapters.vendor_portal.releases import ReleaseService
from core.config import AppSettings
from core.domain.models import VendorEntity
from core.errors import APIError, DecodeError, EntityValidationError, TransportError
from core.logging_config import TRACE, get_logger

logger = get_logger("client")

E = TypeVar("E", bound=VendorEntity)

HTTP_ERROR_THRESHOLD = 400
RETRYABLE_STATUS = frozenset({429, 502, 503, 504})

Sleep = Callable[[float], Awaitable[None]]


def _safe_retry_after_seconds(response: httpx.Response | None) -> float | None:
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def convert_http_error(response: httpx.Response) -> APIError | None:
    """Respuesta >= 400 -> `APIError`; si no, None.

    El mensaje por defecto es el reason phrase; `message`/`details` del cuerpo
    JSON lo sustituyen cuando existen.
    """

    if response.status_code < HTTP_ERROR_THRESHOLD:
        return None

    message = response.reason_phrase or "Unknown Error"
    details = ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if isinstance(body.get("message"), str) and body["message"]:
            message = body["message"]
        if isinstance(body.get("details"), str):
            details = body["details"]
    return APIError(response.status_code, message, details)


class VendorPortalClient:
    """Punto de entrada a la API: transporte + los cuatro servicios."""

    def __init__(
        self,
        settings: AppSettings,
        *,
        http: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._owns_http = http is None
        self._http = http or build_async_client(settings, transport=transport)
        self._sleep = sleep

        self.applications = ApplicationService(self)
        self.releases = ReleaseService(self)
        self.channels = ChannelService(self)
        self.customers = CustomerService(self)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> VendorPortalClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _backoff_seconds(self, attempt: int, response: httpx.Response | None) -> float:
        retry_after = _safe_retry_after_seconds(response)
        if retry_after is not None:
            return retry_after
        base = self._settings.backoff_base_seconds
        return base * (2**attempt) + random.uniform(0.0, base)

    async def get_json(
        self,
        path: str,
        *,
        operation: str,
        params: Mapping[str, str | int] | None = None,
    ) -> Any:
        """GET + comprobación de status + JSON.

        Lanza `TransportError`, `APIError` o `DecodeError`. La cancelación
        (`asyncio.CancelledError`) se propaga sin envolver.
        """

        max_retries = self._settings.max_retries
        attempt = 0
        while True:
            logger.debug("Making API request: GET %s params=%s", path, dict(params or {}))
            started = time.perf_counter()
            try:
                response = await self._http.get(path, params=params)
            except httpx.TransportError as exc:
                elapsed_ms = (time.perf_counter() - started) * 1000
                if attempt < max_retries:
                    delay = self._backoff_seconds(attempt, None)
                    logger.debug("Retrying %s after %s (attempt %d, %.2fs)", operation, exc, attempt + 1, delay)
                    await self._sleep(delay)
                    attempt += 1
                    continue
                logger.error("API request failed: GET %s (%.0fms): %s", path, elapsed_ms, exc)
                raise TransportError(operation, exc) from exc

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug(
                "API request completed: GET %s status=%d (%.0fms)", path, response.status_code, elapsed_ms
            )

            if response.status_code in RETRYABLE_STATUS and attempt < max_retries:
                delay = self._backoff_seconds(attempt, response)
                logger.debug(
                    "Retrying %s after HTTP %d (attempt %d, %.2fs)",
                    operation,
                    response.status_code,
                    attempt + 1,
                    delay,
                )
                await self._sleep(delay)
                attempt += 1
                continue

            api_error = convert_http_error(response)
            if api_error is not None:
                logger.error("%s failed: %s", operation, api_error)
                raise api_error

            logger.log(TRACE, "Response body for %s: %s", operation, response.text)
            try:
                return response.json()
            except ValueError as exc:
                raise DecodeError(operation, exc) from exc

    def check_entity(self, entity: E) -> E:
        """Ejecuta los invariantes sobre una entidad recién decodificada.

        - Modo por defecto (fail-open): se registra un warning y se devuelve la entidad.
        - `strict_validation=True`: se lanza `EntityValidationError`.
        """

        violations = entity.violations()
        if not violations:
            return entity
        if self._settings.strict_validation:
            raise EntityValidationError(entity.kind, violations)
        logger.warning(
            "%s %r failed validation (%d issues): %s",
            entity.kind,
            getattr(entity, "id", ""),
            len(violations),
            "; ".join(violations),
        )
        return entity
