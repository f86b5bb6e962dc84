"""Registros de origen (solo lectura)

Fichas de campo y actas tal como las devuelven los servicios externos,
ya normalizadas a tipos internos. El agregador nunca las persiste.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SourceName(str, Enum):
    """Fuentes de datos de una finca"""

    FICHAS_PARCELA = "fichas_parcela"
    FICHAS_CONSTRUCCIONES = "fichas_construcciones"
    ACTAS = "actas"


class SurveyKind(str, Enum):
    """Tipo de ficha de campo"""

    PARCEL = "parcel"  # Ficha de campo de la parcela
    CONSTRUCTION = "construction"  # Ficha de campo de construcciones


class SurveyRecord(BaseModel):
    """Ficha de campo (parcela o construcciones)"""

    case_id: str
    kind: SurveyKind
    record_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)  # Respuesta original completa


class Deed(BaseModel):
    """Acta firmada de una finca

    El tipo puede llegar en `tipo_acta` o en el campo heredado `tipo`.
    """

    case_id: str
    record_id: str | None = None
    tipo_acta: str | None = None
    tipo: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
