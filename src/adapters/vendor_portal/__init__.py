"""Adaptador HTTP del Vendor Portal (cliente + servicios por entidad)."""

from adapters.vendor_portal.client import VendorPortalClient, convert_http_error

__all__ = ["VendorPortalClient", "convert_http_error"]
