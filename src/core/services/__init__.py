"""Servicios del Core (orquestación de casos de uso)."""
