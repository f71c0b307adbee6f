"""Capa de protocolo MCP.

Por qué separada del Core:
- Solo traduce llamadas de herramienta / URIs de recurso a operaciones de
  `VendorAPI` y resultados a texto JSON.
"""
