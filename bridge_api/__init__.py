"""Leak monitor bridge: sensores serie → dashboards WebSocket."""
