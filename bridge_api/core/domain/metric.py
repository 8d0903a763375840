"""Métricas que publica el dispositivo y sus prefijos de línea."""

from __future__ import annotations

from enum import Enum


class MetricKind(str, Enum):
    """Tipo de métrica reconocida en el protocolo de líneas del Arduino."""

    HYGROMETER = "hygrometer"
    FLOW_RATE = "flow_rate"
    WATER_LEVEL = "water_level"

    @property
    def prefix(self) -> str:
        return LINE_PREFIXES[self]

    @property
    def is_integer(self) -> bool:
        """Hygrometer y water level llegan como enteros; flow rate como decimal."""
        return self is not MetricKind.FLOW_RATE


# Orden de evaluación al clasificar (el primero que coincide gana).
LINE_PREFIXES = {
    MetricKind.HYGROMETER: "Hygrometer Value:",
    MetricKind.WATER_LEVEL: "Water Level:",
    MetricKind.FLOW_RATE: "Flow Rate:",
}
