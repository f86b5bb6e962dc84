"""Resolución de completitud por etapa

Fichas de parcela + fichas de construcciones + actas → CompletionRecord.
- ficha_campo: completada si existe al menos una ficha de cualquiera de los dos tipos.
  La referencia lleva ambas fichas para distinguir qué sub-checklist existe.
- Etapas de acta: completadas si alguna acta se clasifica en la etapa.
  La referencia es la primera acta coincidente en el orden de la fuente.
- Todas las etapas del registro aparecen en el resultado, completadas o no.
"""

from __future__ import annotations

from expropia.models.progress import (
    CompletionRecord,
    FichaCampoReference,
    StageCompletion,
)
from expropia.models.records import Deed, SurveyRecord
from expropia.services.progress.classifier import DeedClassifier
from expropia.services.progress.stages import (
    FICHA_CONSTRUCCIONES,
    FICHA_PARCELA,
    STAGES,
    Stage,
    StageSource,
    deed_type_rules,
)


class CompletionResolver:
    """Listas normalizadas de una finca → CompletionRecord"""

    def __init__(
        self,
        classifier: DeedClassifier | None = None,
        stages: tuple[Stage, ...] = STAGES,
    ) -> None:
        self._classifier = classifier or DeedClassifier(deed_type_rules(stages))
        self._stages = stages

    def resolve(
        self,
        parcel_surveys: list[SurveyRecord],
        construction_surveys: list[SurveyRecord],
        deeds: list[Deed],
    ) -> CompletionRecord:
        first_deeds = self._first_deed_per_stage(deeds)

        stages: dict[str, StageCompletion] = {}
        for stage in self._stages:
            if stage.source == StageSource.SURVEY:
                stages[stage.key] = self._resolve_survey_stage(
                    stage, parcel_surveys, construction_surveys,
                )
            else:
                deed = first_deeds.get(stage.key)
                stages[stage.key] = StageCompletion(
                    key=stage.key,
                    completed=deed is not None,
                    reference=deed,
                )
        return CompletionRecord(stages=stages)

    # --- private helpers ---

    def _first_deed_per_stage(self, deeds: list[Deed]) -> dict[str, Deed]:
        """Primera acta por etapa (orden de la fuente, sin ordenar)"""
        first: dict[str, Deed] = {}
        for deed in deeds:
            stage_key = self._classifier.classify(deed)
            if stage_key is not None and stage_key not in first:
                first[stage_key] = deed
        return first

    @staticmethod
    def _resolve_survey_stage(
        stage: Stage,
        parcel_surveys: list[SurveyRecord],
        construction_surveys: list[SurveyRecord],
    ) -> StageCompletion:
        # Con varias fichas del mismo tipo, la primera de la lista manda
        parcela = parcel_surveys[0] if parcel_surveys else None
        construcciones = construction_surveys[0] if construction_surveys else None
        completed = parcela is not None or construcciones is not None

        return StageCompletion(
            key=stage.key,
            completed=completed,
            reference=(
                FichaCampoReference(parcela=parcela, construcciones=construcciones)
                if completed else None
            ),
            sub_items={
                FICHA_PARCELA: parcela is not None,
                FICHA_CONSTRUCCIONES: construcciones is not None,
            },
        )
