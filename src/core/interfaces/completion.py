"""Contrato del cliente de modelo generativo.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El orquestador recibe el cliente explícitamente (o `None` si no hay
  credenciales), así el camino sin IA es trivial de testear con un fake.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class CompletionError(RuntimeError):
    """Transport failure or empty completion from the model provider."""


@runtime_checkable
class CompletionClient(Protocol):
    """Contrato mínimo para un proveedor de completions.

    Reglas de diseño:
    - `complete` es asíncrono: es el único punto de I/O de cada operación.
    - Devuelve un único texto no vacío o lanza `CompletionError`.
    """

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        ...
