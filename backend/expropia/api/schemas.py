"""Esquemas de petición/respuesta de la API de avance"""

from __future__ import annotations

from pydantic import BaseModel, Field

from expropia.models.progress import ProgressResult


class BatchProgressRequest(BaseModel):
    """Avance de varias fincas"""

    finca_ids: list[str] = Field(..., min_length=1)


class BatchProgressResponse(BaseModel):
    """Avance indexado por id de finca"""

    total: int
    progress: dict[str, ProgressResult]


def to_batch_response(progress: dict[str, ProgressResult]) -> BatchProgressResponse:
    return BatchProgressResponse(total=len(progress), progress=progress)
