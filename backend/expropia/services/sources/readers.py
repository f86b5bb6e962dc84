"""Lectores de fuentes por finca

Un adaptador tipado por fuente: llama al cliente, desenvuelve el sobre y
convierte cada elemento en SurveyRecord / Deed. Los fallos pasan por la
SourceFailurePolicy inyectada, nunca por un try/except silencioso.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, NamedTuple

from expropia.models.records import Deed, SourceName, SurveyKind, SurveyRecord
from expropia.services.sources.client import ExpropiacionesApiClient
from expropia.services.sources.normalizer import normalize_response, unwrap_records
from expropia.services.sources.policy import SourceFailurePolicy

logger = logging.getLogger(__name__)


class SourceRead(NamedTuple):
    """Resultado de una lectura: registros + fallo degradado (si lo hubo)"""

    records: list
    error: BaseException | None = None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class SourceReader(ABC):
    """Lector de una fuente, acotado por id de finca"""

    source: SourceName

    def __init__(
        self,
        client: ExpropiacionesApiClient | None = None,
        policy: SourceFailurePolicy | None = None,
    ) -> None:
        self._client = client or ExpropiacionesApiClient()
        self._policy = policy or SourceFailurePolicy()

    async def read_with_status(
        self, case_id: str, filters: dict[str, Any] | None = None
    ) -> SourceRead:
        """Registros de la finca (fallo → lo que decida la política) + fallo degradado"""
        try:
            payload = await self._fetch(case_id, filters)
            items = unwrap_records(payload)
        except Exception as e:
            return self.downgrade(case_id, e)
        return SourceRead(records=self._parse_items(case_id, items))

    def downgrade(self, case_id: str, exc: BaseException) -> SourceRead:
        """Aplica la política de fallos (también usada al agotar el plazo)"""
        records = self._policy.handle(self.source, case_id, exc)
        return SourceRead(records=records, error=exc)

    def _parse_items(self, case_id: str, items: list[Any]) -> list:
        records = []
        for item in items:
            if not isinstance(item, dict):
                logger.debug(
                    "Elemento descartado en %s [finca %s]: %r",
                    self.source.value, case_id, item,
                )
                continue
            records.append(self._parse_item(case_id, item))
        return records

    @abstractmethod
    async def _fetch(self, case_id: str, filters: dict[str, Any] | None) -> Any:
        """Respuesta cruda de la fuente"""
        ...

    @abstractmethod
    def _parse_item(self, case_id: str, item: dict[str, Any]) -> Any:
        ...


class ParcelSurveyReader(SourceReader):
    """Fichas de campo de parcela"""

    source = SourceName.FICHAS_PARCELA

    async def _fetch(self, case_id: str, filters: dict[str, Any] | None) -> Any:
        return await self._client.list_fichas_parcela(case_id, filters)

    def _parse_item(self, case_id: str, item: dict[str, Any]) -> SurveyRecord:
        return SurveyRecord(
            case_id=case_id,
            kind=SurveyKind.PARCEL,
            record_id=_as_text(item.get("id")),
            payload=item,
        )


class ConstructionSurveyReader(SourceReader):
    """Fichas de campo de construcciones"""

    source = SourceName.FICHAS_CONSTRUCCIONES

    async def _fetch(self, case_id: str, filters: dict[str, Any] | None) -> Any:
        return await self._client.list_fichas_construcciones(case_id, filters)

    def _parse_item(self, case_id: str, item: dict[str, Any]) -> SurveyRecord:
        return SurveyRecord(
            case_id=case_id,
            kind=SurveyKind.CONSTRUCTION,
            record_id=_as_text(item.get("id")),
            payload=item,
        )


class DeedReader(SourceReader):
    """Actas de la finca (tipo en `tipo_acta` o en el campo heredado `tipo`)"""

    source = SourceName.ACTAS

    async def _fetch(self, case_id: str, filters: dict[str, Any] | None) -> Any:
        return await self._client.list_actas(case_id, filters)

    def _parse_item(self, case_id: str, item: dict[str, Any]) -> Deed:
        return Deed(
            case_id=case_id,
            record_id=_as_text(item.get("id")),
            tipo_acta=_as_text(item.get("tipo_acta")),
            tipo=_as_text(item.get("tipo")),
            payload=item,
        )


class CaseLister:
    """Ids de las fincas de un proyecto

    No es fuente de etapas: un fallo aquí se propaga al llamador.
    """

    def __init__(self, client: ExpropiacionesApiClient | None = None) -> None:
        self._client = client or ExpropiacionesApiClient()

    async def list_case_ids(self, project_id: str) -> list[str]:
        payload = await self._client.list_fincas(project_id)
        case_ids: list[str] = []
        for item in normalize_response(payload):
            if isinstance(item, dict) and item.get("id") is not None:
                case_ids.append(str(item["id"]))
        logger.info("Proyecto %s: %d fincas", project_id, len(case_ids))
        return case_ids
