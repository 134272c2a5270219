"""Helpers for testing code that sends requests with webclient."""

import socket

from .server import RecordedRequest, Route, Server

__all__ = [
    "RecordedRequest",
    "Route",
    "Server",
    "closed_port_url",
]


def closed_port_url() -> str:
    """Returns the URL of a local port that nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    (host, port) = sock.getsockname()
    sock.close()
    return f"http://{host}:{port}/"
