"""Clasificación y parseo de líneas del dispositivo serie.

Formato de línea (texto plano, una por evento):
    Hygrometer Value: 512
    Water Level: 15
    Flow Rate: 2.35

Las líneas que no empiezan por ningún prefijo conocido se ignoran (logs de
arranque del Arduino, etc.). Un prefijo conocido con payload no numérico se
descarta: nunca llega a las ventanas.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..domain import LINE_PREFIXES, MetricKind, Number

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class LineOutcome(Enum):
    PARSED = "parsed"
    IGNORED = "ignored"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LineParseResult:
    """Resultado de parsear una línea."""

    outcome: LineOutcome
    kind: Optional[MetricKind] = None
    value: Optional[Number] = None
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.outcome is LineOutcome.PARSED


def classify_line(line: str) -> Optional[MetricKind]:
    """Devuelve la métrica cuyo prefijo abre la línea, o None."""
    for kind, prefix in LINE_PREFIXES.items():
        if line.startswith(prefix):
            return kind
    return None


def parse_value(kind: MetricKind, raw: str) -> Number:
    """Parsea el payload según el tipo de la métrica.

    Raises:
        ValueError: payload vacío, no numérico, no finito o decimal donde
            se espera un entero.
    """
    text = raw.strip()
    if kind.is_integer:
        if not _INT_RE.match(text):
            raise ValueError(f"expected integer, got {text!r}")
        return int(text)

    if not _FLOAT_RE.match(text):
        raise ValueError(f"expected number, got {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"value is not finite: {text!r}")
    return value


def parse_line(line: str) -> LineParseResult:
    """Clasifica la línea por prefijo y parsea su valor numérico."""
    line = line.rstrip("\r\n")
    kind = classify_line(line)
    if kind is None:
        return LineParseResult(outcome=LineOutcome.IGNORED)

    try:
        value = parse_value(kind, line[len(kind.prefix):])
    except ValueError as e:
        logger.warning("[PARSER] Malformed %s line dropped: %r (%s)", kind.value, line, e)
        return LineParseResult(outcome=LineOutcome.MALFORMED, kind=kind, error=str(e))

    return LineParseResult(outcome=LineOutcome.PARSED, kind=kind, value=value)
