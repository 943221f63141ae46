"""Tests for MeteoChileClient against a mocked httpx transport."""

from __future__ import annotations

import httpx
import pytest

from meteomcp.config import UpstreamSettings
from meteomcp.operations.client import MeteoChileClient
from meteomcp.operations.errors import OperationError
from meteomcp.operations.provider import WeatherOperations

BASE = "https://meteo.example.cl/servicios/"


def _client(handler) -> MeteoChileClient:
    return MeteoChileClient(UpstreamSettings(base_url=BASE), transport=httpx.MockTransport(handler))


class _Recorder:
    def __init__(self, payload: object = None, status: int = 200) -> None:
        self.payload = payload if payload is not None else {"ok": True}
        self.status = status
        self.paths: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.paths.append(request.url.raw_path.decode())
        return httpx.Response(self.status, json=self.payload)


_ENDPOINT_CASES = [
    ("get_weather_stations", (), "getCatastroEstaciones"),
    ("get_station_metadata", ("330020",), "getMetadatosEstacion/330020"),
    ("get_recent_data_all_stations", (), "getDatosRecientesEstaciones"),
    ("get_station_recent_data", ("330020",), "getDatosRecientesEstacion/330020"),
    (
        "get_station_monthly_data",
        ("330020", 2024, 3),
        "getDatosMensualesEstacion/330020/2024/3",
    ),
    ("get_uv_index_data", (), "getIndiceUV"),
    ("get_daily_summary_all_stations", (), "getResumenDiarioEstaciones"),
    ("get_station_daily_summary", ("330020",), "getResumenDiarioEstacion/330020"),
    ("get_climatological_bulletin", (), "getBoletinClimatologico"),
    (
        "get_historical_temperature_monthly",
        ("330020",),
        "getHistorialTemperaturaMensual/330020",
    ),
    (
        "get_historical_temperature_daily",
        ("330020", 2020),
        "getHistorialTemperaturaDiaria/330020/2020",
    ),
    (
        "get_historical_precipitation_monthly",
        ("330020",),
        "getHistorialPrecipitacionMensual/330020",
    ),
    (
        "get_historical_precipitation_daily",
        ("330020", 2020),
        "getHistorialPrecipitacionDiaria/330020/2020",
    ),
    ("get_historical_pressure_monthly", ("330020",), "getHistorialPresionMensual/330020"),
    (
        "get_historical_pressure_daily",
        ("330020", 2020),
        "getHistorialPresionDiaria/330020/2020",
    ),
]


class TestEndpoints:
    @pytest.mark.parametrize(("method", "args", "endpoint"), _ENDPOINT_CASES)
    async def test_operation_hits_endpoint(self, method: str, args: tuple, endpoint: str) -> None:
        recorder = _Recorder(payload={"datos": [1, 2]})
        async with _client(recorder) as client:
            result = await getattr(client, method)(*args)

        assert result == {"datos": [1, 2]}
        assert recorder.paths == [f"/servicios/{endpoint}"]

    async def test_station_code_is_a_single_segment(self) -> None:
        recorder = _Recorder()
        async with _client(recorder) as client:
            await client.get_station_metadata("../a b")

        assert recorder.paths == ["/servicios/getMetadatosEstacion/..%2Fa%20b"]

    async def test_payload_passed_through_untouched(self) -> None:
        payload = [{"momento_medicion": "2024-01-01 00:00", "temperatura": "21.5 °C"}]
        async with _client(_Recorder(payload=payload)) as client:
            assert await client.get_recent_data_all_stations() == payload

    def test_satisfies_weather_operations(self) -> None:
        assert isinstance(MeteoChileClient(UpstreamSettings()), WeatherOperations)


class TestFailures:
    async def test_non_success_status(self) -> None:
        async with _client(_Recorder(status=503)) as client:
            with pytest.raises(OperationError) as info:
                await client.get_uv_index_data()

        assert info.value.endpoint == "getIndiceUV"
        assert "503" in str(info.value)

    async def test_not_found_status(self) -> None:
        async with _client(_Recorder(status=404)) as client:
            with pytest.raises(OperationError, match="getMetadatosEstacion/nope"):
                await client.get_station_metadata("nope")

    async def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>maintenance</html>")

        async with _client(handler) as client:
            with pytest.raises(OperationError, match="invalid JSON"):
                await client.get_weather_stations()

    async def test_non_utf8_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b'{"a": "\xc3\x28"}')

        async with _client(handler) as client:
            with pytest.raises(OperationError, match="invalid JSON"):
                await client.get_weather_stations()

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(OperationError, match="connection refused"):
                await client.get_weather_stations()

    async def test_requires_context_manager(self) -> None:
        client = MeteoChileClient(UpstreamSettings(base_url=BASE))
        with pytest.raises(RuntimeError, match="async context manager"):
            await client.get_weather_stations()

    async def test_closed_after_exit(self) -> None:
        client = _client(_Recorder())
        async with client:
            pass
        with pytest.raises(RuntimeError):
            await client.get_uv_index_data()


class TestOperationError:
    def test_message_with_detail(self) -> None:
        exc = OperationError("getIndiceUV", "timed out")
        assert str(exc) == "Upstream call failed: getIndiceUV: timed out"
        assert exc.detail == "timed out"

    def test_message_without_detail(self) -> None:
        assert str(OperationError("getIndiceUV")) == "Upstream call failed: getIndiceUV"
