"""The fixed catalogue of weather tools and their typed arguments."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import Field

from meteomcp.protocol.registry import ToolArguments, ToolRegistry

if TYPE_CHECKING:
    from meteomcp.operations.provider import WeatherOperations


class ToolName(StrEnum):
    GET_WEATHER_STATIONS = "get_weather_stations"
    GET_STATION_METADATA = "get_station_metadata"
    GET_RECENT_DATA_ALL_STATIONS = "get_recent_data_all_stations"
    GET_STATION_RECENT_DATA = "get_station_recent_data"
    GET_STATION_MONTHLY_DATA = "get_station_monthly_data"
    GET_UV_INDEX_DATA = "get_uv_index_data"
    GET_DAILY_SUMMARY_ALL_STATIONS = "get_daily_summary_all_stations"
    GET_STATION_DAILY_SUMMARY = "get_station_daily_summary"
    GET_CLIMATOLOGICAL_BULLETIN = "get_climatological_bulletin"
    GET_HISTORICAL_TEMPERATURE_MONTHLY = "get_historical_temperature_monthly"
    GET_HISTORICAL_TEMPERATURE_DAILY = "get_historical_temperature_daily"
    GET_HISTORICAL_PRECIPITATION_MONTHLY = "get_historical_precipitation_monthly"
    GET_HISTORICAL_PRECIPITATION_DAILY = "get_historical_precipitation_daily"
    GET_HISTORICAL_PRESSURE_MONTHLY = "get_historical_pressure_monthly"
    GET_HISTORICAL_PRESSURE_DAILY = "get_historical_pressure_daily"


# ---------------------------------------------------------------------------
# Argument models
# ---------------------------------------------------------------------------


class NoArguments(ToolArguments):
    pass


class StationArguments(ToolArguments):
    station_code: str = Field(description="Weather station code")


class StationYearArguments(StationArguments):
    year: int = Field(description="Year (e.g. 2024)")


class StationMonthArguments(StationYearArguments):
    month: int = Field(description="Month (1-12)")


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ToolSpec:
    name: ToolName
    description: str
    arguments: type[ToolArguments]
    call: Callable[[WeatherOperations, Any], Awaitable[Any]]


CATALOGUE: tuple[ToolSpec, ...] = (
    ToolSpec(
        ToolName.GET_WEATHER_STATIONS,
        "List the registry of available weather stations",
        NoArguments,
        lambda ops, _: ops.get_weather_stations(),
    ),
    ToolSpec(
        ToolName.GET_STATION_METADATA,
        "Get the metadata of a specific station",
        StationArguments,
        lambda ops, a: ops.get_station_metadata(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_RECENT_DATA_ALL_STATIONS,
        "Get minute data for the most recent 12 hours from all automatic stations",
        NoArguments,
        lambda ops, _: ops.get_recent_data_all_stations(),
    ),
    ToolSpec(
        ToolName.GET_STATION_RECENT_DATA,
        "Get minute data for the most recent 12 hours from a specific station",
        StationArguments,
        lambda ops, a: ops.get_station_recent_data(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_STATION_MONTHLY_DATA,
        "Get 15-minute data from a station for a specific month",
        StationMonthArguments,
        lambda ops, a: ops.get_station_monthly_data(a.station_code, a.year, a.month),
    ),
    ToolSpec(
        ToolName.GET_UV_INDEX_DATA,
        "Get ultraviolet radiation index data from the national network",
        NoArguments,
        lambda ops, _: ops.get_uv_index_data(),
    ),
    ToolSpec(
        ToolName.GET_DAILY_SUMMARY_ALL_STATIONS,
        "Get the daily summary of all automatic stations",
        NoArguments,
        lambda ops, _: ops.get_daily_summary_all_stations(),
    ),
    ToolSpec(
        ToolName.GET_STATION_DAILY_SUMMARY,
        "Get the daily summary of a specific station",
        StationArguments,
        lambda ops, a: ops.get_station_daily_summary(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_CLIMATOLOGICAL_BULLETIN,
        "Get the daily climatological bulletin for the main stations",
        NoArguments,
        lambda ops, _: ops.get_climatological_bulletin(),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_TEMPERATURE_MONTHLY,
        "Get historical monthly and yearly temperature data",
        StationArguments,
        lambda ops, a: ops.get_historical_temperature_monthly(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_TEMPERATURE_DAILY,
        "Get historical daily temperature data for a specific year",
        StationYearArguments,
        lambda ops, a: ops.get_historical_temperature_daily(a.station_code, a.year),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_PRECIPITATION_MONTHLY,
        "Get historical monthly and yearly precipitation data",
        StationArguments,
        lambda ops, a: ops.get_historical_precipitation_monthly(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_PRECIPITATION_DAILY,
        "Get historical daily precipitation data for a specific year",
        StationYearArguments,
        lambda ops, a: ops.get_historical_precipitation_daily(a.station_code, a.year),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_PRESSURE_MONTHLY,
        "Get historical monthly and yearly sea-level pressure data",
        StationArguments,
        lambda ops, a: ops.get_historical_pressure_monthly(a.station_code),
    ),
    ToolSpec(
        ToolName.GET_HISTORICAL_PRESSURE_DAILY,
        "Get historical daily sea-level pressure data for a specific year",
        StationYearArguments,
        lambda ops, a: ops.get_historical_pressure_daily(a.station_code, a.year),
    ),
)


def build_registry(operations: WeatherOperations) -> ToolRegistry:
    """Register every catalogue tool against *operations* and seal the registry."""
    registry = ToolRegistry(operations)
    for spec in CATALOGUE:
        registry.register(spec.name.value, spec.description, spec.arguments, spec.call)
    registry.seal()
    return registry
