"""Adaptadores de infraestructura (HTTP, serialización)."""
