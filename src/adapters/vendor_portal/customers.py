"""Clientes (licencias) de una aplicación.

La búsqueda mira más campos que en releases/canales: email, tipo, estado,
licencia y nombre del canal, además del nombre.
"""

from __future__ import annotations

from collections.abc import Iterable

from adapters.vendor_portal.base import AppScopedService
from core.domain.models import Customer


class CustomerService(AppScopedService[Customer]):
    model = Customer
    plural = "customers"
    singular = "customer"

    def search_fields(self, entity: Customer) -> Iterable[str]:
        return (
            entity.name,
            entity.email,
            entity.type,
            entity.status,
            entity.license_id,
            entity.license_type,
            entity.channel_name,
        )
