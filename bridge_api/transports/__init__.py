"""Transportes de entrada (serie) y salida (WebSocket)."""
