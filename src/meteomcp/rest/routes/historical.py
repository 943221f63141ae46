"""Historical series routes under ``/api/historical``."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from meteomcp.operations.provider import WeatherOperations
from meteomcp.rest.deps import get_operations, valid_year

router = APIRouter(prefix="/api/historical", tags=["historical"])

Operations = Annotated[WeatherOperations, Depends(get_operations)]
Year = Annotated[int, Depends(valid_year)]


@router.get("/temperature/monthly/{station_code}")
async def get_historical_temperature_monthly(station_code: str, ops: Operations) -> Any:
    return await ops.get_historical_temperature_monthly(station_code)


@router.get("/temperature/daily/{station_code}/{year}")
async def get_historical_temperature_daily(station_code: str, year: Year, ops: Operations) -> Any:
    return await ops.get_historical_temperature_daily(station_code, year)


@router.get("/precipitation/monthly/{station_code}")
async def get_historical_precipitation_monthly(station_code: str, ops: Operations) -> Any:
    return await ops.get_historical_precipitation_monthly(station_code)


@router.get("/precipitation/daily/{station_code}/{year}")
async def get_historical_precipitation_daily(
    station_code: str, year: Year, ops: Operations
) -> Any:
    return await ops.get_historical_precipitation_daily(station_code, year)


@router.get("/pressure/monthly/{station_code}")
async def get_historical_pressure_monthly(station_code: str, ops: Operations) -> Any:
    """Sea-level pressure, monthly and yearly."""
    return await ops.get_historical_pressure_monthly(station_code)


@router.get("/pressure/daily/{station_code}/{year}")
async def get_historical_pressure_daily(station_code: str, year: Year, ops: Operations) -> Any:
    """Sea-level pressure, daily, for one year."""
    return await ops.get_historical_pressure_daily(station_code, year)
