"""Normalización de respuestas: lista directa, {"data"}, {"results"}"""

import pytest

from expropia.services.sources.normalizer import (
    UnrecognizedResponseError,
    normalize_response,
    unwrap_records,
)


class TestUnwrapRecords:
    """unwrap_records (estricto)"""

    def test_bare_list(self):
        assert unwrap_records([{"id": 1}, {"id": 2}]) == [{"id": 1}, {"id": 2}]

    def test_data_envelope(self):
        assert unwrap_records({"data": [{"id": 1}], "count": 1}) == [{"id": 1}]

    def test_results_envelope(self):
        """Respuesta paginada"""
        payload = {"count": 1, "next": None, "results": [{"id": 3}]}
        assert unwrap_records(payload) == [{"id": 3}]

    def test_data_has_priority(self):
        assert unwrap_records({"data": [1], "results": [2]}) == [1]

    def test_data_not_list_falls_back_to_results(self):
        assert unwrap_records({"data": {"id": 1}, "results": [2]}) == [2]

    def test_returns_copy(self):
        original = [{"id": 1}]
        unwrapped = unwrap_records(original)
        unwrapped.append({"id": 2})
        assert original == [{"id": 1}]

    @pytest.mark.parametrize(
        "payload",
        [None, "texto", 42, {"detail": "No encontrado."}, {"data": None}],
    )
    def test_unrecognized(self, payload):
        with pytest.raises(UnrecognizedResponseError):
            unwrap_records(payload)


class TestNormalizeResponse:
    """normalize_response (forma desconocida → [])"""

    def test_empty_list(self):
        assert normalize_response([]) == []

    @pytest.mark.parametrize("payload", [None, "texto", {"detail": "x"}])
    def test_unrecognized_is_empty(self, payload):
        assert normalize_response(payload) == []
