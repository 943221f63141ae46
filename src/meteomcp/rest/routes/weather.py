"""Current and recent weather routes under ``/api/weather``."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from meteomcp.operations.provider import WeatherOperations
from meteomcp.rest.deps import get_operations, valid_month, valid_year

router = APIRouter(prefix="/api/weather", tags=["weather"])

Operations = Annotated[WeatherOperations, Depends(get_operations)]


@router.get("/stations")
async def get_weather_stations(ops: Operations) -> Any:
    """List the registry of available weather stations.

    Each entry carries the station code, name, geographic location and altitude.
    """
    return await ops.get_weather_stations()


@router.get("/stations/recent-data")
async def get_recent_data_all_stations(ops: Operations) -> Any:
    """Minute data for the last 12 hours from every automatic station."""
    return await ops.get_recent_data_all_stations()


@router.get("/stations/daily-summary")
async def get_daily_summary_all_stations(ops: Operations) -> Any:
    """Daily summary of every automatic station."""
    return await ops.get_daily_summary_all_stations()


@router.get("/stations/{station_code}/metadata")
async def get_station_metadata(station_code: str, ops: Operations) -> Any:
    """Metadata of a single station."""
    return await ops.get_station_metadata(station_code)


@router.get("/stations/{station_code}/recent-data")
async def get_station_recent_data(station_code: str, ops: Operations) -> Any:
    """Minute data for the last 12 hours from one station."""
    return await ops.get_station_recent_data(station_code)


@router.get("/stations/{station_code}/monthly-data/{year}/{month}")
async def get_station_monthly_data(
    station_code: str,
    year: Annotated[int, Depends(valid_year)],
    month: Annotated[int, Depends(valid_month)],
    ops: Operations,
) -> Any:
    """15-minute data from one station for a given month."""
    return await ops.get_station_monthly_data(station_code, year, month)


@router.get("/stations/{station_code}/daily-summary")
async def get_station_daily_summary(station_code: str, ops: Operations) -> Any:
    """Daily summary of one station."""
    return await ops.get_station_daily_summary(station_code)


@router.get("/uv-index")
async def get_uv_index_data(ops: Operations) -> Any:
    """Ultraviolet index readings from the national network."""
    return await ops.get_uv_index_data()


@router.get("/climatological-bulletin")
async def get_climatological_bulletin(ops: Operations) -> Any:
    """Daily climatological bulletin for the main stations."""
    return await ops.get_climatological_bulletin()
