"""Configuración de la aplicación

Todas las variables de entorno se gestionan desde el fichero .env. Nada hardcodeado.
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Raíz del proyecto: directorio padre de backend/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Carga de variables de entorno"""

    # API REST de expropiaciones (propietaria de fincas, fichas de campo y actas)
    EXPROPIACIONES_API_URL: str = "http://127.0.0.1:8000"
    EXPROPIACIONES_API_TOKEN: str = ""  # Bearer token (vacío = sin cabecera Authorization)

    # Lectura de fuentes
    SOURCE_TIMEOUT: float = 30.0  # Timeout por petición HTTP (segundos)
    CASE_DEADLINE: float = 0.0    # Plazo por finca (segundos, 0 = sin plazo)

    # Orquestación por lotes
    # Fincas calculadas en paralelo como máximo (0 = sin tope: todas a la vez)
    BATCH_MAX_CONCURRENCY: int = 0

    # Política de fallos: False → fuente caída = lista vacía; True → SourceUnavailableError
    SURFACE_SOURCE_ERRORS: bool = False

    model_config = {
        "env_file": str(_PROJECT_ROOT / ".env"),
        "env_file_encoding": "utf-8",
    }


# Instancia singleton
settings = Settings()
