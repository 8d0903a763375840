"""Domain layer - Modelos de métricas y muestras."""

from .metric import LINE_PREFIXES, MetricKind
from .sample import Number, Sample

__all__ = ["LINE_PREFIXES", "MetricKind", "Number", "Sample"]
