"""Health check endpoint."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Report that the server is up.

    Returns:
        ``{"status": "healthy", "timestamp": "<UTC ISO-8601>"}``
    """
    return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}
