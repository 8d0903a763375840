"""Métricas Prometheus del bridge (registro global del proceso)."""

from __future__ import annotations

from prometheus_client import Counter, Gauge

BRIDGE_LINES = Counter(
    "bridge_lines_total",
    "Serial lines handled by the bridge",
    ["outcome"],  # parsed, ignored, malformed
)
BRIDGE_PUSHES = Counter(
    "bridge_pushes_total",
    "Snapshot pushes per subscriber",
    ["status"],  # sent, skipped, failed
)
BRIDGE_SUBSCRIBERS = Gauge(
    "bridge_subscribers",
    "Currently registered WebSocket subscribers",
)
