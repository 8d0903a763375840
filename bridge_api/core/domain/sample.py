"""Modelo de dominio para muestras de sensor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

Number = Union[int, float]


@dataclass(frozen=True)
class Sample:
    """Muestra efímera: se crea al parsear y se descarta al expirar o sobrescribirse."""

    value: Number
    captured_at_ms: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.captured_at_ms

    def is_expired(self, now_ms: int, max_age_ms: int) -> bool:
        return self.age_ms(now_ms) > max_age_ms
