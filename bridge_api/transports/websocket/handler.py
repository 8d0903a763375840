"""WebSocket handler para suscriptores del dashboard.

Protocolo:
1. Cliente abre la conexión (sin handshake de aplicación).
2. Server → snapshot actual inmediatamente.
3. Server → snapshot tras cada línea serie parseada.

Los frames que envíe el cliente se leen y se descartan.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from .hub import SubscriberHub

logger = logging.getLogger(__name__)


async def websocket_subscribe(websocket: WebSocket):
    """Endpoint WebSocket: registra al cliente en el hub hasta que se desconecte."""
    hub: SubscriberHub = websocket.app.state.bridge.hub

    await websocket.accept()

    try:
        await hub.register(websocket)

        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception("[WebSocket] Session error: %s", e)
    finally:
        hub.unregister(websocket)
