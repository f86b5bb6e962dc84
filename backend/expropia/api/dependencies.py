"""Inyección de dependencias de FastAPI

El pool HTTP, el cliente de la API y el agregador se gestionan como singletons.
El pool se cierra en el apagado de la aplicación (lifespan de main.py).
Sin .env funciona con los valores por defecto (entorno de tests).
"""

from functools import lru_cache

import httpx

from expropia.config import settings
from expropia.services.progress.aggregator import StageCompletionAggregator
from expropia.services.sources.client import ExpropiacionesApiClient


@lru_cache()
def get_http_client() -> httpx.AsyncClient:
    """Pool de conexiones compartido con la API de expropiaciones"""
    return httpx.AsyncClient(timeout=settings.SOURCE_TIMEOUT)


@lru_cache()
def get_api_client() -> ExpropiacionesApiClient:
    """Instancia singleton de ExpropiacionesApiClient (sobre el pool compartido)"""
    return ExpropiacionesApiClient(http_client=get_http_client())


@lru_cache()
def get_aggregator() -> StageCompletionAggregator:
    """Instancia singleton de StageCompletionAggregator"""
    return StageCompletionAggregator(client=get_api_client())


async def close_http_client() -> None:
    """Cierra el pool compartido y descarta los singletons que lo usan"""
    if get_http_client.cache_info().currsize:
        await get_http_client().aclose()
    get_aggregator.cache_clear()
    get_api_client.cache_clear()
    get_http_client.cache_clear()
