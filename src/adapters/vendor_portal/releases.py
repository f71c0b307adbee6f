"""Releases de una aplicación."""

from __future__ import annotations

from collections.abc import Iterable

from adapters.vendor_portal.base import AppScopedService
from core.domain.models import Release


class ReleaseService(AppScopedService[Release]):
    model = Release
    plural = "releases"
    singular = "release"

    def search_fields(self, entity: Release) -> Iterable[str]:
        return (entity.version, entity.status, entity.notes)
