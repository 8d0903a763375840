"""WebSocket transport - Fan-out a dashboards."""

from .handler import websocket_subscribe
from .hub import SubscriberHub, is_ready

__all__ = ["SubscriberHub", "is_ready", "websocket_subscribe"]
