"""Entidades del Vendor Portal (aplicaciones, releases, canales, clientes).

Modelos Pydantic v2 inmutables, sus invariantes y los tipos de paginación.
Nada aquí hace I/O.
"""
