"""WeatherOperations protocol: the fixed catalogue of weather-data operations.

Both front ends (the stdio tool server and the REST API) call through this
interface, so either can run against the real MeteoChile client or a test
double.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WeatherOperations(Protocol):
    """Fetches weather data from an external provider.

    Every method returns the decoded JSON payload unchanged, or raises
    :class:`~meteomcp.operations.errors.OperationError`.
    """

    async def get_weather_stations(self) -> Any: ...

    async def get_station_metadata(self, station_code: str) -> Any: ...

    async def get_recent_data_all_stations(self) -> Any: ...

    async def get_station_recent_data(self, station_code: str) -> Any: ...

    async def get_station_monthly_data(self, station_code: str, year: int, month: int) -> Any: ...

    async def get_uv_index_data(self) -> Any: ...

    async def get_daily_summary_all_stations(self) -> Any: ...

    async def get_station_daily_summary(self, station_code: str) -> Any: ...

    async def get_climatological_bulletin(self) -> Any: ...

    async def get_historical_temperature_monthly(self, station_code: str) -> Any: ...

    async def get_historical_temperature_daily(self, station_code: str, year: int) -> Any: ...

    async def get_historical_precipitation_monthly(self, station_code: str) -> Any: ...

    async def get_historical_precipitation_daily(self, station_code: str, year: int) -> Any: ...

    async def get_historical_pressure_monthly(self, station_code: str) -> Any: ...

    async def get_historical_pressure_daily(self, station_code: str, year: int) -> Any: ...
