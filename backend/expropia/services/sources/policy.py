"""Política de fallos de las fuentes

Un fallo de proveedor (HTTP, transporte, JSON inválido, forma desconocida,
plazo agotado) se degrada a "sin registros" por defecto: la etapa aparece
pendiente y el resto de la finca se sigue calculando.
Con surface_errors=True el fallo se eleva como SourceUnavailableError.
"""

from __future__ import annotations

import logging

from expropia.config import settings
from expropia.models.records import SourceName

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):
    """Fuente no disponible (solo con la política que expone errores)"""

    def __init__(
        self,
        source: SourceName,
        case_id: str,
        cause: BaseException | None = None,
    ) -> None:
        self.source = source
        self.case_id = case_id
        self.cause = cause
        super().__init__(f"Fuente {source.value} no disponible [finca {case_id}]: {cause}")


class SourceFailurePolicy:
    """Qué hacer cuando una fuente falla"""

    def __init__(self, surface_errors: bool | None = None) -> None:
        if surface_errors is None:
            surface_errors = settings.SURFACE_SOURCE_ERRORS
        self.surface_errors = surface_errors

    def handle(
        self,
        source: SourceName,
        case_id: str,
        exc: BaseException,
    ) -> list:
        """Fallo → lista vacía, o SourceUnavailableError si se exponen errores"""
        if self.surface_errors:
            raise SourceUnavailableError(source, case_id, exc) from exc
        logger.warning(
            "Fuente %s degradada a vacía [finca %s]: %s: %s",
            source.value, case_id, type(exc).__name__, exc,
        )
        return []
