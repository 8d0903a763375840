"""Bridge serie → WebSocket.

Conecta las líneas del dispositivo con los suscriptores del dashboard:
    línea → clasificar → parsear → ventana → expiración → snapshot → push

GARANTÍAS:
- Un solo event loop; cada línea se procesa completa (incluido el push)
  antes de leer la siguiente, así que el orden de pushes sigue al de líneas.
- Líneas ignoradas o malformadas no mutan estado ni disparan push.
- Sin reintentos: si la lectura serie falla, el bucle termina y /health
  lo refleja.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import AsyncIterable, Optional

from .core.monitoring import BridgeStats
from .core.monitoring.metrics import BRIDGE_LINES
from .core.parsing import LineOutcome, LineParseResult
from .core.state import SensorContext
from .transports.websocket import SubscriberHub

logger = logging.getLogger(__name__)


class SensorBridge:
    """Orquesta contexto de sensores, hub de suscriptores y estadísticas.

    Uso:
        bridge = SensorBridge(SensorContext())
        await bridge.run(source.lines())
    """

    def __init__(
        self,
        context: SensorContext,
        *,
        hub: Optional[SubscriberHub] = None,
        stats: Optional[BridgeStats] = None,
    ) -> None:
        self.context = context
        self.stats = stats if stats is not None else BridgeStats()
        self.hub = hub if hub is not None else SubscriberHub(context, self.stats)
        self.running = False

    async def handle_line(self, line: str) -> LineParseResult:
        """Procesa una línea serie y hace push si cambió el estado."""
        self.stats.lines_received += 1
        self.stats.last_line_at = time.time()
        logger.debug("[BRIDGE] Received: %r", line)

        result = self.context.ingest_line(line)
        BRIDGE_LINES.labels(outcome=result.outcome.value).inc()

        if result.outcome is LineOutcome.IGNORED:
            self.stats.lines_ignored += 1
            return result
        if result.outcome is LineOutcome.MALFORMED:
            self.stats.lines_malformed += 1
            return result

        self.stats.lines_parsed += 1
        logger.debug("[BRIDGE] Parsed %s=%s", result.kind.value, result.value)
        await self.hub.broadcast()
        return result

    async def run(self, lines: AsyncIterable[str]) -> None:
        """Consume líneas hasta EOF o error de lectura."""
        self.running = True
        try:
            async for line in lines:
                await self.handle_line(line)
            logger.warning("[BRIDGE] Line source ended")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("[BRIDGE] Line source failed: %s", e)
        finally:
            self.running = False
            logger.info("[BRIDGE] Stopped. %s", self.stats)

    async def sweep(self) -> int:
        """Pasada de expiración fuera de ingesta; push solo si se vació algo."""
        evicted = self.context.evict_expired()
        if evicted:
            await self.hub.broadcast()
        return evicted

    async def sweep_forever(self, interval_seconds: float) -> None:
        logger.info("[BRIDGE] Periodic eviction sweep every %.1fs", interval_seconds)
        while True:
            await asyncio.sleep(interval_seconds)
            await self.sweep()
