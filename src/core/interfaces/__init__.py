"""Contratos del Core.

`VendorAPI` es lo único que ve la capa MCP; el adaptador httpx lo implementa
y los tests lo sustituyen por un doble en memoria.
"""
