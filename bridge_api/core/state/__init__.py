"""State layer - Contexto de sensores por conexión."""

from .sensor_context import SensorContext

__all__ = ["SensorContext"]
