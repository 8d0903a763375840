"""Estadísticas de procesamiento del bridge."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BridgeStats:
    """Contadores de líneas y pushes desde el arranque."""

    lines_received: int = 0
    lines_parsed: int = 0
    lines_ignored: int = 0
    lines_malformed: int = 0
    pushes_sent: int = 0
    pushes_skipped: int = 0
    pushes_failed: int = 0
    subscribers: int = 0
    last_line_at: float = 0
    started_at: datetime = field(default_factory=_utcnow)

    def __str__(self) -> str:
        return (
            f"Stats: received={self.lines_received} parsed={self.lines_parsed} "
            f"ignored={self.lines_ignored} malformed={self.lines_malformed}"
        )

    def to_dict(self) -> dict:
        """Convierte a diccionario."""
        return {
            "lines_received": self.lines_received,
            "lines_parsed": self.lines_parsed,
            "lines_ignored": self.lines_ignored,
            "lines_malformed": self.lines_malformed,
            "pushes_sent": self.pushes_sent,
            "pushes_skipped": self.pushes_skipped,
            "pushes_failed": self.pushes_failed,
            "subscribers": self.subscribers,
            "last_line_at": self.last_line_at,
            "started_at": self.started_at.isoformat(),
            "parse_rate": self._parse_rate(),
        }

    def _parse_rate(self) -> float:
        """Proporción de líneas reconocidas que se parsearon bien."""
        total = self.lines_parsed + self.lines_malformed
        if total == 0:
            return 1.0
        return self.lines_parsed / total

    def reset(self):
        """Reinicia estadísticas (no toca el número de suscriptores)."""
        self.lines_received = 0
        self.lines_parsed = 0
        self.lines_ignored = 0
        self.lines_malformed = 0
        self.pushes_sent = 0
        self.pushes_skipped = 0
        self.pushes_failed = 0
        self.last_line_at = 0
        self.started_at = _utcnow()
