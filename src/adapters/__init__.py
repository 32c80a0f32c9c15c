"""Adaptadores de infraestructura (proveedor IA, persistencia, exportación).

Cada módulo implementa o consume contratos de `core.interfaces`.
"""
