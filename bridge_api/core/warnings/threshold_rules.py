"""Reglas de umbral para advertencias simples sobre el último valor.

Cada métrica puede tener ``warning_min`` y/o ``warning_max`` (configuración
por entorno). Se evalúa solo el último valor presente:
- hygrometer / flow rate: última muestra escrita si no ha expirado
- water level: escalar actual, solo tras la primera lectura recibida
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from ..domain import MetricKind, Number
from ..state import SensorContext
from ...schemas import ThresholdWarningOut


@dataclass(frozen=True)
class ThresholdRule:
    """Límites de advertencia de una métrica."""

    kind: MetricKind
    warning_min: Optional[float] = None
    warning_max: Optional[float] = None

    def check(self, value: Number) -> Optional[ThresholdWarningOut]:
        if self.warning_min is not None and value < self.warning_min:
            return ThresholdWarningOut(
                metric=self.kind.value,
                value=float(value),
                bound="min",
                limit=self.warning_min,
                message=f"{self.kind.value} below {self.warning_min:g} (value={value})",
            )
        if self.warning_max is not None and value > self.warning_max:
            return ThresholdWarningOut(
                metric=self.kind.value,
                value=float(value),
                bound="max",
                limit=self.warning_max,
                message=f"{self.kind.value} above {self.warning_max:g} (value={value})",
            )
        return None


def rules_from_settings(
    thresholds: Mapping[str, Tuple[Optional[float], Optional[float]]],
) -> Dict[MetricKind, ThresholdRule]:
    rules: Dict[MetricKind, ThresholdRule] = {}
    for name, (low, high) in thresholds.items():
        kind = MetricKind(name)
        rules[kind] = ThresholdRule(kind=kind, warning_min=low, warning_max=high)
    return rules


def _latest_value(context: SensorContext, kind: MetricKind) -> Optional[Number]:
    if kind is MetricKind.WATER_LEVEL:
        scalar = context.water_level
        return scalar.value if scalar.has_value else None
    window = context.hygrometer if kind is MetricKind.HYGROMETER else context.flow_rate
    sample = window.latest()
    return sample.value if sample is not None else None


def evaluate_warnings(
    context: SensorContext,
    rules: Mapping[MetricKind, ThresholdRule],
) -> List[ThresholdWarningOut]:
    warnings: List[ThresholdWarningOut] = []
    for kind in MetricKind:
        rule = rules.get(kind)
        if rule is None:
            continue
        value = _latest_value(context, kind)
        if value is None:
            continue
        warning = rule.check(value)
        if warning is not None:
            warnings.append(warning)
    return warnings
