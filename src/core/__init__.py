"""Core: dominio, configuración, logging y contratos (sin I/O de red)."""

__version__ = "0.1.0"
