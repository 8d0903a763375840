from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from bridge_api.core.state import SensorContext
from common.config import Settings


class FakeClock:
    """Reloj manual en milisegundos."""

    def __init__(self, now_ms: int = 1_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


def make_websocket(ready: bool = True) -> MagicMock:
    """WebSocket simulado con send_text asíncrono."""
    ws = MagicMock()
    state = WebSocketState.CONNECTED if ready else WebSocketState.DISCONNECTED
    ws.client_state = state
    ws.application_state = state
    ws.send_text = AsyncMock()
    return ws


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def context(clock) -> SensorContext:
    return SensorContext(capacity=20, max_age_ms=25000, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(serial_port="/dev/ttyTEST0")


@pytest.fixture
def websocket_factory():
    return make_websocket


_ENV_VARS = [
    "SERIAL_PORT",
    "SERIAL_BAUD_RATE",
    "SERIAL_LINE_DELIMITER",
    "BRIDGE_HOST",
    "BRIDGE_PORT",
    "CORS_ALLOWED_ORIGIN",
    "WINDOW_CAPACITY",
    "WINDOW_MAX_AGE_MS",
    "WINDOW_ZERO_AS_EMPTY",
    "EVICTION_SWEEP_SECONDS",
    "BRIDGE_LOG_LEVEL",
    "HYGROMETER_WARNING_MIN",
    "HYGROMETER_WARNING_MAX",
    "FLOW_RATE_WARNING_MIN",
    "FLOW_RATE_WARNING_MAX",
    "WATER_LEVEL_WARNING_MIN",
    "WATER_LEVEL_WARNING_MAX",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Entorno sin variables del bridge y sin .env."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("BRIDGE_ENV_FILE", str(tmp_path / "missing.env"))
    return monkeypatch
