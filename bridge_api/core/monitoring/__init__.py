"""Monitoring layer - Métricas y observabilidad."""

from .stats import BridgeStats

__all__ = ["BridgeStats"]
