"""meteomcp: MeteoChile weather data as stdio tools and a REST API."""

from __future__ import annotations

__version__ = "1.0.0"
