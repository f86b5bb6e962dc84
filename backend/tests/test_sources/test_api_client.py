"""ExpropiacionesApiClient (httpx.MockTransport, sin red)"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from expropia.services.sources.client import ExpropiacionesApiClient


def _make_client(handler, token: str = "tok-123") -> ExpropiacionesApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExpropiacionesApiClient(
        base_url="http://api.test/",
        token=token,
        timeout=5,
        http_client=http,
    )


class TestRequests:
    """Forma de las peticiones"""

    @pytest.mark.asyncio
    async def test_fichas_parcela(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": [{"id": 1}]})

        payload = await _make_client(handler).list_fichas_parcela("12")

        assert payload == {"data": [{"id": 1}]}
        assert seen[0].url.path == "/api/fichas-campo-parcela/"
        assert seen[0].url.params["finca_id"] == "12"
        assert seen[0].headers["Authorization"] == "Bearer tok-123"

    @pytest.mark.asyncio
    async def test_fichas_construcciones_with_filters(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _make_client(handler).list_fichas_construcciones("12", {"search": "nave"})

        assert seen[0].url.path == "/api/fichas-campo-construcciones/"
        assert seen[0].url.params["finca_id"] == "12"
        assert seen[0].url.params["search"] == "nave"

    @pytest.mark.asyncio
    async def test_actas(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": 3, "tipo": "previa"}])

        payload = await _make_client(handler).list_actas("12")

        assert payload == [{"id": 3, "tipo": "previa"}]
        assert seen[0].url.path == "/api/fincas/12/actas/"
        assert not seen[0].url.params

    @pytest.mark.asyncio
    async def test_fincas(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"results": []})

        await _make_client(handler).list_fincas("3")

        assert seen[0].url.path == "/api/fincas/"
        assert seen[0].url.params["proyecto"] == "3"

    @pytest.mark.asyncio
    async def test_no_token_no_authorization(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _make_client(handler, token="").list_actas("12")

        assert "Authorization" not in seen[0].headers


class TestErrors:
    """Errores HTTP se propagan al lector"""

    @pytest.mark.asyncio
    async def test_http_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "interno"})

        with pytest.raises(httpx.HTTPStatusError):
            await _make_client(handler).list_actas("12")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>login</html>")

        with pytest.raises(ValueError):
            await _make_client(handler).list_actas("12")


class TestPerRequestClient:
    """Sin http_client: un httpx.AsyncClient por petición"""

    @pytest.mark.asyncio
    @patch("expropia.services.sources.client.httpx.AsyncClient")
    async def test_opens_own_client(self, mock_client_cls):
        mock_response = MagicMock()
        mock_response.json.return_value = [{"id": 1}]
        mock_response.raise_for_status = MagicMock()
        mock_http = mock_client_cls.return_value.__aenter__.return_value
        mock_http.get = AsyncMock(return_value=mock_response)

        client = ExpropiacionesApiClient(base_url="http://api.test", token="", timeout=7)
        payload = await client.list_fichas_parcela("12")

        assert payload == [{"id": 1}]
        mock_client_cls.assert_called_once_with(timeout=7)
        mock_http.get.assert_awaited_once()
        assert mock_http.get.call_args.args[0] == "http://api.test/api/fichas-campo-parcela/"

    def test_defaults_from_settings(self):
        with patch("expropia.services.sources.client.settings") as mock_settings:
            mock_settings.EXPROPIACIONES_API_URL = "http://backend.local/"
            mock_settings.EXPROPIACIONES_API_TOKEN = "abc"
            mock_settings.SOURCE_TIMEOUT = 12.0
            client = ExpropiacionesApiClient()

        assert client._base_url == "http://backend.local"
        assert client._headers()["Authorization"] == "Bearer abc"
        assert client._timeout == 12.0
