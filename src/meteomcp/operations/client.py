"""MeteoChileClient: httpx implementation of :class:`WeatherOperations`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from meteomcp.operations.errors import OperationError

if TYPE_CHECKING:
    from meteomcp.config import UpstreamSettings

logger = logging.getLogger(__name__)


class MeteoChileClient:
    """Calls the MeteoChile climatology web service.

    Satisfies the :class:`~meteomcp.operations.provider.WeatherOperations` protocol.

    Usage::

        async with MeteoChileClient(settings.meteochile) as client:
            stations = await client.get_weather_stations()
    """

    def __init__(
        self,
        settings: UpstreamSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> MeteoChileClient:
        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "MeteoChileClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def get_weather_stations(self) -> Any:
        return await self._get("getCatastroEstaciones")

    async def get_station_metadata(self, station_code: str) -> Any:
        return await self._get(f"getMetadatosEstacion/{_segment(station_code)}")

    async def get_recent_data_all_stations(self) -> Any:
        return await self._get("getDatosRecientesEstaciones")

    async def get_station_recent_data(self, station_code: str) -> Any:
        return await self._get(f"getDatosRecientesEstacion/{_segment(station_code)}")

    async def get_station_monthly_data(self, station_code: str, year: int, month: int) -> Any:
        return await self._get(
            f"getDatosMensualesEstacion/{_segment(station_code)}/{year}/{month}"
        )

    async def get_uv_index_data(self) -> Any:
        return await self._get("getIndiceUV")

    async def get_daily_summary_all_stations(self) -> Any:
        return await self._get("getResumenDiarioEstaciones")

    async def get_station_daily_summary(self, station_code: str) -> Any:
        return await self._get(f"getResumenDiarioEstacion/{_segment(station_code)}")

    async def get_climatological_bulletin(self) -> Any:
        return await self._get("getBoletinClimatologico")

    async def get_historical_temperature_monthly(self, station_code: str) -> Any:
        return await self._get(f"getHistorialTemperaturaMensual/{_segment(station_code)}")

    async def get_historical_temperature_daily(self, station_code: str, year: int) -> Any:
        return await self._get(f"getHistorialTemperaturaDiaria/{_segment(station_code)}/{year}")

    async def get_historical_precipitation_monthly(self, station_code: str) -> Any:
        return await self._get(f"getHistorialPrecipitacionMensual/{_segment(station_code)}")

    async def get_historical_precipitation_daily(self, station_code: str, year: int) -> Any:
        return await self._get(
            f"getHistorialPrecipitacionDiaria/{_segment(station_code)}/{year}"
        )

    async def get_historical_pressure_monthly(self, station_code: str) -> Any:
        return await self._get(f"getHistorialPresionMensual/{_segment(station_code)}")

    async def get_historical_pressure_daily(self, station_code: str, year: int) -> Any:
        return await self._get(f"getHistorialPresionDiaria/{_segment(station_code)}/{year}")

    async def _get(self, endpoint: str) -> Any:
        """GET *endpoint* relative to the base URL and decode the JSON body."""
        client = self._http()
        logger.info("Calling MeteoChile API: %s%s", client.base_url, endpoint)
        try:
            response = await client.get(endpoint)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            logger.exception("Error calling MeteoChile API endpoint: %s", endpoint)
            raise OperationError(endpoint, str(exc)) from exc
        except ValueError as exc:
            logger.exception("Invalid JSON from MeteoChile API endpoint: %s", endpoint)
            raise OperationError(endpoint, f"invalid JSON payload: {exc}") from exc


def _segment(value: str) -> str:
    """Escape *value* so it stays a single URL path segment."""
    return quote(value, safe="")
