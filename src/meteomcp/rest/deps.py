"""Shared route dependencies: the operation set and path validators."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import HTTPException, Request, status

from meteomcp.operations.provider import WeatherOperations

MIN_YEAR = 1900


def get_operations(request: Request) -> WeatherOperations:
    return request.app.state.operations


def valid_year(year: int) -> int:
    """Accept years from 1900 up to next year."""
    if year < MIN_YEAR or year > datetime.now(UTC).year + 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid year")
    return year


def valid_month(month: int) -> int:
    if month < 1 or month > 12:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Month must be between 1 and 12"
        )
    return month
