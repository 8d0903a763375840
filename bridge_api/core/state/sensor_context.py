"""Estado en memoria de una conexión serie.

FUENTE ÚNICA DE VERDAD para las ventanas de muestras y el nivel de agua.
Se construye una vez por conexión serie y se pasa explícitamente al bridge
y a los endpoints; no hay estado a nivel de módulo.

Todas las mutaciones de ``ingest_line`` son síncronas: dentro del event loop
una consulta pull nunca observa un snapshot a medio escribir.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ..domain import MetricKind, Number
from ..parsing import LineParseResult, parse_line
from ..window import SampleWindow, ScalarState
from ...schemas import SnapshotOut

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class SensorContext:
    """Ventanas de hygrometer y flow rate + escalar de water level."""

    def __init__(
        self,
        capacity: int = 20,
        max_age_ms: int = 25000,
        *,
        zero_as_empty: bool = False,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._clock = clock
        self.hygrometer = SampleWindow(capacity, max_age_ms, zero_as_empty=zero_as_empty)
        self.flow_rate = SampleWindow(capacity, max_age_ms, zero_as_empty=zero_as_empty)
        self.water_level = ScalarState()

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "SensorContext":
        return cls(
            capacity=settings.window_capacity,
            max_age_ms=settings.max_sample_age_ms,
            zero_as_empty=settings.zero_as_empty,
            **kwargs,
        )

    def now_ms(self) -> int:
        return self._clock()

    def ingest_line(self, line: str, now_ms: Optional[int] = None) -> LineParseResult:
        """Parsea una línea y, si es válida, actualiza el estado.

        Líneas ignoradas o malformadas no tocan el estado.
        """
        result = parse_line(line)
        if result.valid:
            self.apply(result.kind, result.value, now_ms)
        return result

    def apply(self, kind: MetricKind, value: Number, now_ms: Optional[int] = None) -> None:
        """Escribe un valor y ejecuta la pasada de expiración sobre ambas ventanas."""
        now = self._clock() if now_ms is None else int(now_ms)

        if kind is MetricKind.HYGROMETER:
            self.hygrometer.write(value, now)
        elif kind is MetricKind.FLOW_RATE:
            self.flow_rate.write(value, now)
        else:
            self.water_level.write(value)

        logger.debug("[CONTEXT] %s=%s at %d", kind.value, value, now)
        self.evict_expired(now)

    def evict_expired(self, now_ms: Optional[int] = None) -> int:
        now = self._clock() if now_ms is None else int(now_ms)
        evicted = self.hygrometer.evict_expired(now) + self.flow_rate.evict_expired(now)
        if evicted:
            logger.debug("[CONTEXT] Evicted %d expired samples", evicted)
        return evicted

    def snapshot(self) -> SnapshotOut:
        return SnapshotOut(
            hygrometer=self.hygrometer.values(),
            flow_rate=self.flow_rate.values(),
            water_level=self.water_level.value,
        )
