"""Registro de etapas del expediente de expropiación

Orden fijo de etapas (el ordinal es solo para mostrar, no hay secuencia obligatoria).
- Etapas contadas: entran en el denominador del porcentaje de avance.
- Etapa comodín (acta_comparecencia): se sigue su completitud pero no cuenta.

Cada etapa de acta lleva sus valores de tipo (match_values); DEED_TYPE_RULES
se deriva del registro. Un alias nuevo es un dato, no un cambio de código.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

FICHA_CAMPO = "ficha_campo"
ACTA_PREVIA = "acta_previa"
ACTA_OCUPACION = "acta_ocupacion"
ACTA_JUSTIPRECIO = "acta_justiprecio"
ACTA_COMPARECENCIA = "acta_comparecencia"

# Sub-checklists de ficha_campo
FICHA_PARCELA = "ficha_parcela"
FICHA_CONSTRUCCIONES = "ficha_construcciones"


class StageSource(str, Enum):
    """De dónde se deduce la completitud de una etapa"""

    SURVEY = "survey"  # Fichas de campo (parcela o construcciones)
    DEED = "deed"  # Actas clasificadas por tipo


class Stage(BaseModel):
    """Definición estática de una etapa"""

    model_config = {"frozen": True}

    key: str
    ordinal: int | None  # None = comodín, sin número en la vista
    label: str
    description: str = ""
    counted: bool = True
    source: StageSource = StageSource.DEED
    match_values: tuple[str, ...] = ()  # Valores de tipo de acta que completan la etapa


STAGES: tuple[Stage, ...] = (
    Stage(
        key=FICHA_CAMPO,
        ordinal=1,
        label="Ficha de Campo",
        description="Parcela y/o Construcciones",
        source=StageSource.SURVEY,
    ),
    Stage(
        key=ACTA_PREVIA,
        ordinal=2,
        label="Acta Previa",
        description="Acta previa a la ocupación",
        match_values=("previa",),
    ),
    Stage(
        key=ACTA_OCUPACION,
        ordinal=3,
        label="Acta de Ocupación",
        description="Acta de ocupación de fincas",
        match_values=("ocupacion",),
    ),
    Stage(
        key=ACTA_JUSTIPRECIO,
        ordinal=4,
        label="Mutuo Acuerdo",
        description="Acta de justiprecio por mutuo acuerdo",
        # justiprecio y mutuo_acuerdo son dos vocabularios del mismo instrumento legal
        match_values=("justiprecio", "mutuo_acuerdo"),
    ),
    Stage(
        key=ACTA_COMPARECENCIA,
        ordinal=None,
        label="Acta de Comparecencia",
        description="Acta de comparecencia de titulares (comodín)",
        counted=False,
        match_values=("comparecencia",),
    ),
)

# Campos del acta que llevan el tipo, por prioridad
DEED_TYPE_FIELDS: tuple[str, ...] = ("tipo_acta", "tipo")


def deed_type_rules(
    stages: tuple[Stage, ...] = STAGES,
) -> list[tuple[str, tuple[str, ...]]]:
    """Tabla de clasificación: (clave de etapa, valores de tipo aceptados)"""
    return [
        (stage.key, stage.match_values)
        for stage in stages
        if stage.source == StageSource.DEED
    ]


DEED_TYPE_RULES = deed_type_rules()


def stage_keys(stages: tuple[Stage, ...] = STAGES) -> list[str]:
    return [stage.key for stage in stages]


def counted_stages(stages: tuple[Stage, ...] = STAGES) -> list[Stage]:
    """Etapas que entran en el porcentaje de avance"""
    return [stage for stage in stages if stage.counted]


def get_stage(key: str, stages: tuple[Stage, ...] = STAGES) -> Stage:
    for stage in stages:
        if stage.key == key:
            return stage
    raise KeyError(f"Etapa desconocida: {key}")
