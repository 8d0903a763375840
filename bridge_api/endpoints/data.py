"""Consultas pull del estado actual."""

from fastapi import APIRouter, Request

from ..core.warnings import evaluate_warnings
from ..schemas import SnapshotOut, WarningsOut

router = APIRouter(tags=["data"])


@router.get("/data", response_model=SnapshotOut)
def get_data(request: Request):
    """Snapshot actual; siempre responde (vacío antes de la primera línea)."""
    return request.app.state.bridge.context.snapshot()


@router.get("/warnings", response_model=WarningsOut)
def get_warnings(request: Request):
    """Advertencias por umbral sobre el último valor de cada métrica."""
    state = request.app.state
    return WarningsOut(warnings=evaluate_warnings(state.bridge.context, state.threshold_rules))
