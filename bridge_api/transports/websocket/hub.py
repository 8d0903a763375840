"""Fan-out de snapshots a los suscriptores WebSocket.

Entrega best-effort, at-most-once por push:
- Solo se envía a conexiones en estado CONNECTED; el resto se salta.
- Sin reintentos ni colas por suscriptor.
- Un envío que falla desregistra al suscriptor (equivale a desconexión).
"""

from __future__ import annotations

import logging
from typing import List, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from ...core.monitoring import BridgeStats
from ...core.monitoring.metrics import BRIDGE_PUSHES, BRIDGE_SUBSCRIBERS
from ...core.state import SensorContext

logger = logging.getLogger(__name__)


def is_ready(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


class SubscriberHub:
    """Conjunto de suscriptores abiertos para una conexión serie."""

    def __init__(self, context: SensorContext, stats: BridgeStats | None = None) -> None:
        self._context = context
        self._stats = stats if stats is not None else BridgeStats()
        self._subscribers: Set[WebSocket] = set()

    @property
    def subscribers(self) -> List[WebSocket]:
        return list(self._subscribers)

    def __len__(self) -> int:
        return len(self._subscribers)

    async def register(self, websocket: WebSocket) -> None:
        """Registra un suscriptor ya aceptado y le envía el snapshot actual."""
        self._subscribers.add(websocket)
        self._update_gauge()
        logger.info("[WebSocket] Client connected (subscribers=%d)", len(self._subscribers))

        await self._send(websocket, self._context.snapshot().to_message())

    def unregister(self, websocket: WebSocket) -> None:
        if websocket in self._subscribers:
            self._subscribers.discard(websocket)
            self._update_gauge()
            logger.info("[WebSocket] Client disconnected (subscribers=%d)", len(self._subscribers))

    async def broadcast(self) -> int:
        """Serializa el snapshot una vez y lo envía a cada suscriptor listo.

        Returns:
            Número de suscriptores a los que se entregó el mensaje.
        """
        message = self._context.snapshot().to_message()
        delivered = 0

        # Copia: register/unregister pueden ocurrir durante los awaits.
        for websocket in list(self._subscribers):
            if await self._send(websocket, message):
                delivered += 1

        return delivered

    async def _send(self, websocket: WebSocket, message: str) -> bool:
        if not is_ready(websocket):
            self._stats.pushes_skipped += 1
            BRIDGE_PUSHES.labels(status="skipped").inc()
            return False

        try:
            await websocket.send_text(message)
        except Exception as e:
            logger.info("[WebSocket] Send failed, dropping subscriber: %s", type(e).__name__)
            self._stats.pushes_failed += 1
            BRIDGE_PUSHES.labels(status="failed").inc()
            self.unregister(websocket)
            return False

        self._stats.pushes_sent += 1
        BRIDGE_PUSHES.labels(status="sent").inc()
        return True

    def _update_gauge(self) -> None:
        self._stats.subscribers = len(self._subscribers)
        BRIDGE_SUBSCRIBERS.set(len(self._subscribers))
