"""Cliente de la API REST de expropiaciones

Lectura de fichas de campo, actas y fincas de un proyecto.
- Bearer token opcional (EXPROPIACIONES_API_TOKEN)
- Devuelve el JSON tal cual: lista o sobre {"data": [...]} / {"results": [...]}.
  La normalización es responsabilidad de los lectores.
- Errores HTTP se propagan (httpx.HTTPStatusError / httpx.TransportError).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from expropia.config import settings

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "fichas_parcela": "/api/fichas-campo-parcela/",
    "fichas_construcciones": "/api/fichas-campo-construcciones/",
    "actas_finca": "/api/fincas/{finca_id}/actas/",
    "fincas": "/api/fincas/",
}


class ExpropiacionesApiClient:
    """Cliente asíncrono de la API de expropiaciones

    Con `http_client` se reutiliza su pool de conexiones; sin él, cada
    petición abre y cierra su propio httpx.AsyncClient.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.EXPROPIACIONES_API_URL).rstrip("/")
        self._token = token if token is not None else settings.EXPROPIACIONES_API_TOKEN
        self._timeout = timeout if timeout is not None else settings.SOURCE_TIMEOUT
        self._http = http_client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET común → JSON decodificado"""
        url = f"{self._base_url}{path}"
        if self._http is not None:
            response = await self._http.get(url, params=params, headers=self._headers())
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params, headers=self._headers())
        response.raise_for_status()
        return response.json()

    # === Fichas de campo ===

    async def list_fichas_parcela(
        self, finca_id: str, filters: dict[str, Any] | None = None
    ) -> Any:
        """Fichas de campo de parcela de una finca"""
        logger.debug("Fichas de parcela: finca %s", finca_id)
        params = {**(filters or {}), "finca_id": finca_id}
        return await self._get(ENDPOINTS["fichas_parcela"], params)

    async def list_fichas_construcciones(
        self, finca_id: str, filters: dict[str, Any] | None = None
    ) -> Any:
        """Fichas de campo de construcciones de una finca"""
        logger.debug("Fichas de construcciones: finca %s", finca_id)
        params = {**(filters or {}), "finca_id": finca_id}
        return await self._get(ENDPOINTS["fichas_construcciones"], params)

    # === Actas ===

    async def list_actas(
        self, finca_id: str, filters: dict[str, Any] | None = None
    ) -> Any:
        """Actas firmadas de una finca"""
        logger.debug("Actas: finca %s", finca_id)
        return await self._get(
            ENDPOINTS["actas_finca"].format(finca_id=finca_id), filters or None,
        )

    # === Fincas ===

    async def list_fincas(self, proyecto_id: str) -> Any:
        """Fincas de un proyecto"""
        logger.debug("Fincas del proyecto %s", proyecto_id)
        return await self._get(ENDPOINTS["fincas"], {"proyecto": proyecto_id})
