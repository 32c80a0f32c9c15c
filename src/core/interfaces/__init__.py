"""Contratos que el Core espera de la infraestructura (cliente de modelo)."""
