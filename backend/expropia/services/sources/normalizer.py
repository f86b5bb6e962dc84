"""Normalización de respuestas

Las fuentes devuelven formas distintas para lo mismo:
- lista directa: [...]
- sobre: {"data": [...]}
- paginado: {"results": [...]}
El resultado siempre es una lista plana.
"""

from __future__ import annotations

from typing import Any

# Claves de sobre, por prioridad
ENVELOPE_KEYS: tuple[str, ...] = ("data", "results")


class UnrecognizedResponseError(ValueError):
    """La respuesta no es una lista ni un sobre conocido"""


def unwrap_records(payload: Any) -> list[Any]:
    """Desenvuelve la respuesta. Forma desconocida → UnrecognizedResponseError."""
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return list(value)
    raise UnrecognizedResponseError(
        f"Respuesta no reconocida: {type(payload).__name__}"
    )


def normalize_response(payload: Any) -> list[Any]:
    """Como unwrap_records, pero una forma desconocida da lista vacía"""
    try:
        return unwrap_records(payload)
    except UnrecognizedResponseError:
        return []
