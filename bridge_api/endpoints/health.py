"""Health and metrics endpoints."""

from fastapi import APIRouter, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..schemas import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(request: Request):
    """Liveness probe: ok mientras el proceso vive; informa del bucle serie."""
    bridge = request.app.state.bridge
    source = request.app.state.serial_source
    # Conectado = puerto abierto sin EOF y bucle de líneas activo.
    serial_connected = bridge.running and source is not None and source.is_connected
    return HealthOut(
        status="ok",
        serial_connected=serial_connected,
        stats=bridge.stats.to_dict(),
    )


@router.get("/metrics")
def metrics():
    """Exposición Prometheus de contadores del bridge."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
