"""Servicios de aplicación del Core."""
