"""Shared fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from meteomcp.operations.client import MeteoChileClient
from meteomcp.protocol.catalogue import build_registry
from meteomcp.protocol.handler import MessageHandler
from meteomcp.protocol.registry import ToolRegistry


@pytest.fixture
def operations() -> MagicMock:
    """A stand-in operation set; every operation is an ``AsyncMock``."""
    return MagicMock(spec=MeteoChileClient)


@pytest.fixture
def registry(operations: MagicMock) -> ToolRegistry:
    return build_registry(operations)


@pytest.fixture
def handler(registry: ToolRegistry) -> MessageHandler:
    return MessageHandler(registry)
