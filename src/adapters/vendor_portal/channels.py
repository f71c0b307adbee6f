"""Canales de distribución de una aplicación."""

from __future__ import annotations

from collections.abc import Iterable

from adapters.vendor_portal.base import AppScopedService
from core.domain.models import Channel


class ChannelService(AppScopedService[Channel]):
    model = Channel
    plural = "channels"
    singular = "channel"

    def search_fields(self, entity: Channel) -> Iterable[str]:
        return (entity.name, entity.channel_slug, entity.description)
