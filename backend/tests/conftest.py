"""Fixtures comunes

Ningún test llama a la API real: las fuentes se sustituyen por mocks.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from expropia.services.sources.policy import SourceFailurePolicy
from factories import make_api_client


@pytest.fixture
def api_client() -> MagicMock:
    """Cliente mock sin registros para ninguna finca"""
    return make_api_client()


@pytest.fixture
def downgrade_policy() -> SourceFailurePolicy:
    """Política por defecto: fuente caída → lista vacía"""
    return SourceFailurePolicy(surface_errors=False)


@pytest.fixture
def surfacing_policy() -> SourceFailurePolicy:
    """Política que expone los fallos como SourceUnavailableError"""
    return SourceFailurePolicy(surface_errors=True)
