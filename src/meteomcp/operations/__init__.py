"""Operation set: weather-data operations backed by the MeteoChile API."""

from meteomcp.operations.client import MeteoChileClient
from meteomcp.operations.errors import OperationError
from meteomcp.operations.provider import WeatherOperations

__all__ = [
    "MeteoChileClient",
    "OperationError",
    "WeatherOperations",
]
