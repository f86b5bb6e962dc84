"""Router de avance de expedientes

Endpoints:
- GET  /api/fincas/{finca_id}/progreso       : detalle por etapa + avance
- POST /api/fincas/progreso                  : avance de varias fincas
- GET  /api/proyectos/{proyecto_id}/progreso : avance de las fincas de un proyecto
"""

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from expropia.api.dependencies import get_aggregator
from expropia.api.schemas import (
    BatchProgressRequest,
    BatchProgressResponse,
    to_batch_response,
)
from expropia.models.progress import CaseProgress
from expropia.services.progress.aggregator import StageCompletionAggregator
from expropia.services.sources.policy import SourceUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["progreso"])


# ── POST /api/fincas/progreso ─────────────────────────────────


@router.post("/fincas/progreso", response_model=BatchProgressResponse)
async def get_batch_progress(
    request: BatchProgressRequest,
    aggregator: StageCompletionAggregator = Depends(get_aggregator),
):
    """Avance de varias fincas (listados)

    Una finca con fuentes caídas aparece con su avance parcial o vacío.
    """
    progress = await aggregator.get_batch_progress(request.finca_ids)
    return to_batch_response(progress)


# ── GET /api/fincas/{finca_id}/progreso ───────────────────────


@router.get("/fincas/{finca_id}/progreso", response_model=CaseProgress)
async def get_case_progress(
    finca_id: str,
    aggregator: StageCompletionAggregator = Depends(get_aggregator),
):
    """Detalle por etapa + avance de una finca"""
    try:
        return await aggregator.get_case_progress(finca_id)
    except SourceUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e


# ── GET /api/proyectos/{proyecto_id}/progreso ─────────────────


@router.get("/proyectos/{proyecto_id}/progreso", response_model=BatchProgressResponse)
async def get_project_progress(
    proyecto_id: str,
    aggregator: StageCompletionAggregator = Depends(get_aggregator),
):
    """Avance de todas las fincas de un proyecto"""
    try:
        progress = await aggregator.get_project_progress(proyecto_id)
    except httpx.HTTPError as e:
        logger.error("Listado de fincas fallido [proyecto %s]: %s", proyecto_id, e)
        raise HTTPException(
            status_code=502, detail=f"No se pudo listar las fincas: {e}"
        ) from e
    return to_batch_response(progress)
