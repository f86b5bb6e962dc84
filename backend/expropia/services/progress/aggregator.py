"""Agregador de completitud de etapas

Punto único para las tres vistas que necesitan el avance de una finca
(detalle, progreso, listado del proyecto).

Flujo por finca:
  1. Fichas de parcela + fichas de construcciones + actas, en paralelo
     (se espera a las tres; un fallo individual no corta a las demás)
  2. Fallo de fuente → política de fallos (por defecto, lista vacía)
  3. CompletionResolver → CompletionRecord
  4. ProgressCalculator → ProgressResult

Por lotes: todas las fincas se calculan en paralelo (tope opcional BATCH_MAX_CONCURRENCY);
una finca que falla entera vale el avance vacío, sin abortar a las demás.
Nada se cachea: cada llamada relee las fuentes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from expropia.config import settings
from expropia.models.progress import CaseProgress, ProgressResult
from expropia.services.progress.calculator import ProgressCalculator
from expropia.services.progress.resolver import CompletionResolver
from expropia.services.sources.client import ExpropiacionesApiClient
from expropia.services.sources.policy import SourceFailurePolicy
from expropia.services.sources.readers import (
    CaseLister,
    ConstructionSurveyReader,
    DeedReader,
    ParcelSurveyReader,
    SourceRead,
    SourceReader,
)

logger = logging.getLogger(__name__)


class StageCompletionAggregator:
    """Avance de fincas a partir de fichas de campo y actas"""

    def __init__(
        self,
        parcel_reader: SourceReader | None = None,
        construction_reader: SourceReader | None = None,
        deed_reader: SourceReader | None = None,
        case_lister: CaseLister | None = None,
        resolver: CompletionResolver | None = None,
        calculator: ProgressCalculator | None = None,
        *,
        client: ExpropiacionesApiClient | None = None,
        policy: SourceFailurePolicy | None = None,
        case_deadline: float | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        client = client or ExpropiacionesApiClient()
        policy = policy or SourceFailurePolicy()
        self._parcel_reader = parcel_reader or ParcelSurveyReader(client, policy)
        self._construction_reader = (
            construction_reader or ConstructionSurveyReader(client, policy)
        )
        self._deed_reader = deed_reader or DeedReader(client, policy)
        self._case_lister = case_lister or CaseLister(client)
        self._resolver = resolver or CompletionResolver()
        self._calculator = calculator or ProgressCalculator()
        self._case_deadline = (
            case_deadline if case_deadline is not None else settings.CASE_DEADLINE
        )
        self._max_concurrency = (
            max_concurrency if max_concurrency is not None
            else settings.BATCH_MAX_CONCURRENCY
        )

    async def get_case_progress(self, case_id: str) -> CaseProgress:
        """Detalle por etapa + avance de una finca"""
        reads = await asyncio.gather(
            self._read(self._parcel_reader, case_id),
            self._read(self._construction_reader, case_id),
            self._read(self._deed_reader, case_id),
            return_exceptions=True,
        )
        # Solo la política que expone errores llega aquí con excepciones
        for read in reads:
            if isinstance(read, BaseException):
                raise read
        parcel, construction, deeds = reads

        completion = self._resolver.resolve(
            parcel_surveys=parcel.records,
            construction_surveys=construction.records,
            deeds=deeds.records,
        )
        progress = self._calculator.calculate(completion)
        unavailable = [
            reader.source
            for reader, read in zip(
                (self._parcel_reader, self._construction_reader, self._deed_reader),
                reads,
            )
            if read.error is not None
        ]

        logger.debug(
            "Avance [finca %s]: %d/%d (%d%%)",
            case_id, progress.completed_count, progress.total_count, progress.percentage,
        )
        return CaseProgress(
            case_id=case_id,
            completion=completion,
            progress=progress,
            unavailable_sources=unavailable,
        )

    async def get_batch_progress(
        self, case_ids: Iterable[str]
    ) -> dict[str, ProgressResult]:
        """Avance de muchas fincas en paralelo, indexado por id de finca"""
        unique_ids = list(dict.fromkeys(case_ids))
        if not unique_ids:
            return {}

        limit = self._max_concurrency if self._max_concurrency > 0 else len(unique_ids)
        semaphore = asyncio.Semaphore(limit)

        async def _one(case_id: str) -> ProgressResult:
            async with semaphore:
                try:
                    result = await self.get_case_progress(case_id)
                except Exception as e:
                    logger.error("Cálculo de avance fallido [finca %s]: %s", case_id, e)
                    return self.default_progress()
                return result.progress

        results = await asyncio.gather(*(_one(case_id) for case_id in unique_ids))
        progress_map = dict(zip(unique_ids, results))

        logger.info(
            "Avance por lotes: %d fincas, %d al 100%%",
            len(progress_map),
            sum(1 for p in progress_map.values() if p.percentage == 100),
        )
        return progress_map

    async def get_project_progress(self, project_id: str) -> dict[str, ProgressResult]:
        """Avance de todas las fincas de un proyecto"""
        case_ids = await self._case_lister.list_case_ids(project_id)
        return await self.get_batch_progress(case_ids)

    def default_progress(self) -> ProgressResult:
        """Avance con todas las etapas pendientes"""
        return self._calculator.empty()

    # --- private helpers ---

    async def _read(self, reader: SourceReader, case_id: str) -> SourceRead:
        """Lectura con plazo opcional; plazo agotado → política de fallos"""
        if self._case_deadline <= 0:
            return await reader.read_with_status(case_id)
        try:
            return await asyncio.wait_for(
                reader.read_with_status(case_id), timeout=self._case_deadline,
            )
        except asyncio.TimeoutError as e:
            return reader.downgrade(case_id, e)
