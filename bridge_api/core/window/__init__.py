"""Window layer - Buffers de muestras en memoria."""

from .sample_window import SampleWindow
from .scalar_state import ScalarState

__all__ = ["SampleWindow", "ScalarState"]
