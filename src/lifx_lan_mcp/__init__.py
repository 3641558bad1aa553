"""LIFX LAN protocol packet codec with an MCP tool surface."""

__version__ = "0.1.0"
