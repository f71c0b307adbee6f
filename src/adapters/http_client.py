"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout, headers de autenticación y base URL.
- Facilita testeo: se inyecta un `httpx.MockTransport` sin tocar servicios.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_auth_headers(settings: AppSettings) -> dict[str, str]:
    """Headers de cada petición saliente.

    El Vendor Portal espera el token *tal cual* en `Authorization` (sin `Bearer`).
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.api_token:
        headers["Authorization"] = settings.api_token
    return headers


def build_async_client(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando al endpoint configurado.

    Por qué un builder:
    - Un único cliente por proceso, compartido por los cuatro servicios.
    - `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    headers = build_auth_headers(settings)
    return httpx.AsyncClient(
        base_url=settings.endpoint,
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
