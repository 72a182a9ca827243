"""HTTP/1.x headers, connection and body type resolution, and WebSocket upgrade helpers."""

__version__ = "0.1.0"
__all__ = ["connection", "headers", "methods", "ws"]