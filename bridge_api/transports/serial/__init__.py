"""Serial transport - Líneas del dispositivo de sensores."""

from .line_reader import SerialLineSource, read_lines

__all__ = ["SerialLineSource", "read_lines"]
