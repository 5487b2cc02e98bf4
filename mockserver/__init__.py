"""Mock multiplayer game server: session lifecycle over HTTP and WebSocket."""

__version__ = "0.2.0"
