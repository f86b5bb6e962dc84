"""Clasificador de actas

Asigna a cada acta exactamente una etapa (o ninguna) según los match_values del registro de etapas (DEED_TYPE_RULES).
Se prueba primero `tipo_acta` y, si no coincide con ningún alias, `tipo`.
Un acta sin coincidencia se descarta (no cuenta para ninguna etapa).
"""

from __future__ import annotations

import logging

from expropia.models.records import Deed
from expropia.services.progress.stages import DEED_TYPE_FIELDS, DEED_TYPE_RULES

logger = logging.getLogger(__name__)


def build_alias_index(
    rules: list[tuple[str, tuple[str, ...]]],
) -> dict[str, str]:
    """Tabla de reglas → índice valor de tipo → clave de etapa

    Un mismo valor en dos etapas haría la clasificación ambigua.
    """
    index: dict[str, str] = {}
    for stage_key, values in rules:
        for value in values:
            if value in index and index[value] != stage_key:
                raise ValueError(
                    f"Alias '{value}' asignado a dos etapas: "
                    f"{index[value]}, {stage_key}"
                )
            index[value] = stage_key
    return index


class DeedClassifier:
    """Acta → clave de etapa"""

    def __init__(
        self,
        rules: list[tuple[str, tuple[str, ...]]] | None = None,
        fields: tuple[str, ...] = DEED_TYPE_FIELDS,
    ) -> None:
        self._index = build_alias_index(rules if rules is not None else DEED_TYPE_RULES)
        self._fields = fields

    def classify(self, deed: Deed) -> str | None:
        """Clave de etapa del acta, o None si no está clasificada"""
        for field in self._fields:
            value = getattr(deed, field, None)
            if value is None:
                continue
            stage_key = self._index.get(value)
            if stage_key is not None:
                return stage_key
        logger.debug(
            "Acta sin clasificar [finca %s, id %s]: tipo_acta=%r, tipo=%r",
            deed.case_id, deed.record_id, deed.tipo_acta, deed.tipo,
        )
        return None
