"""Punto de entrada de la aplicación FastAPI

Ejecución: uvicorn expropia.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from expropia.api.dependencies import close_http_client, get_http_client
from expropia.api.progress import router as progress_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Arranque: abre el pool HTTP compartido. Apagado: lo cierra."""
    get_http_client()
    logger.info("Pool HTTP de la API de expropiaciones abierto")
    yield
    await close_http_client()
    logger.info("Pool HTTP de la API de expropiaciones cerrado")


app = FastAPI(
    title="Expropiaciones: API de avance de fincas",
    version="0.1.0",
    description="Completitud por etapa y porcentaje de avance de expedientes de expropiación",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Desarrollo local
        "http://localhost:5173",  # Vite
    ],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(progress_router)


@app.get("/health")
def health_check():
    """Comprobación de estado"""
    return {"status": "ok"}
