from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common.config import Settings

from .bridge import SensorBridge
from .core.state import SensorContext
from .core.warnings import rules_from_settings
from .endpoints import data_router, health_router
from .transports.serial import SerialLineSource
from .transports.websocket import websocket_subscribe

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    *,
    context: Optional[SensorContext] = None,
    serial_enabled: bool = True,
) -> FastAPI:
    """Construye la app con un contexto de sensores propio.

    Con ``serial_enabled=False`` no se abre el puerto (tests, dashboards de
    prueba alimentados a mano).
    """
    bridge = SensorBridge(context if context is not None else SensorContext.from_settings(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        tasks: List[asyncio.Task] = []
        source: Optional[SerialLineSource] = None

        if serial_enabled:
            source = SerialLineSource(settings)
            try:
                await source.open()
            except Exception as e:
                logger.error("[SERIAL] Cannot open %s: %s", settings.serial_port, e)
                raise
            tasks.append(asyncio.create_task(bridge.run(source.lines())))

        if settings.eviction_sweep_seconds > 0:
            tasks.append(asyncio.create_task(bridge.sweep_forever(settings.eviction_sweep_seconds)))

        app.state.serial_source = source
        try:
            yield
        finally:
            for task in tasks:
                task.cancel()
            for task in tasks:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            if source is not None:
                source.close()

    app = FastAPI(title="Leak Monitor Bridge", version="0.1.0", lifespan=lifespan)
    app.state.bridge = bridge
    app.state.settings = settings
    app.state.threshold_rules = rules_from_settings(settings.thresholds)
    app.state.serial_source = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST"],
    )

    app.include_router(data_router)
    app.include_router(health_router)

    # Los dashboards existentes conectan a la raíz del servidor.
    app.add_api_websocket_route("/", websocket_subscribe)
    app.add_api_websocket_route("/ws", websocket_subscribe)

    return app
