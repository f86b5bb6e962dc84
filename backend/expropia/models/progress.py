"""Modelos de completitud y avance por finca

CompletionRecord: estado de cada etapa del registro (siempre todas las claves).
ProgressResult: resumen numérico sobre las etapas que cuentan para el avance.
CaseProgress: ambos juntos, más las fuentes degradadas en esta lectura.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from expropia.models.records import Deed, SourceName, SurveyRecord


class FichaCampoReference(BaseModel):
    """Referencia compuesta de la etapa ficha_campo

    La etapa tiene dos sub-checklists independientes (parcela y construcciones)
    que se agregan en una sola etapa para el cálculo de avance.
    """

    model_config = ConfigDict(extra="forbid")

    parcela: SurveyRecord | None = None
    construcciones: SurveyRecord | None = None


class StageCompletion(BaseModel):
    """Estado de una etapa"""

    key: str
    completed: bool = False
    reference: FichaCampoReference | Deed | None = None
    # Solo ficha_campo: {"ficha_parcela": bool, "ficha_construcciones": bool}
    sub_items: dict[str, bool] = Field(default_factory=dict)


class CompletionRecord(BaseModel):
    """Mapa clave de etapa → estado, en el orden del registro de etapas"""

    stages: dict[str, StageCompletion] = Field(default_factory=dict)

    def __getitem__(self, key: str) -> StageCompletion:
        return self.stages[key]

    def is_completed(self, key: str) -> bool:
        stage = self.stages.get(key)
        return bool(stage and stage.completed)

    def as_flags(self) -> dict[str, bool]:
        """{clave: completada} para badges Completada/Pendiente"""
        return {key: stage.completed for key, stage in self.stages.items()}


class ProgressResult(BaseModel):
    """Avance de una finca sobre las etapas contadas"""

    completed_count: int = 0
    total_count: int = 0
    percentage: int = 0  # 0~100, redondeo half-up


class CaseProgress(BaseModel):
    """Resultado completo de una finca (detalle + avance)"""

    case_id: str
    completion: CompletionRecord
    progress: ProgressResult
    unavailable_sources: list[SourceName] = Field(default_factory=list)
