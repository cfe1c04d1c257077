"""Two-person TCP chat: a relay server, a terminal client, colour and line-reading helpers."""

__version__ = "0.1.0"
__all__ = ["paint", "textutil", "server", "client"]