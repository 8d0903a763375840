from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class SnapshotOut(BaseModel):
    """Proyección JSON del estado actual (pull /data y push por WebSocket)."""

    hygrometer: List[int] = Field(default_factory=list)
    flow_rate: List[float] = Field(default_factory=list, alias="flowRate")
    water_level: int = Field(default=0, alias="waterLevel")

    class Config:
        populate_by_name = True

    def to_message(self) -> str:
        return self.model_dump_json(by_alias=True)


class ThresholdWarningOut(BaseModel):
    metric: str
    value: float
    bound: str  # "min" | "max"
    limit: float
    message: str


class WarningsOut(BaseModel):
    warnings: List[ThresholdWarningOut] = Field(default_factory=list)


class HealthOut(BaseModel):
    status: str = "ok"
    serial_connected: bool = False
    stats: Optional[dict] = None
