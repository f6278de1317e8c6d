"""
usb2snes protocol layer.

Provides async WebSocket communication with a usb2snes bridge.
"""

from usb2snes_cli.api.ws_client import AsyncWebSocketClient, Opcode, build_request, parse_results

__all__ = ["AsyncWebSocketClient", "Opcode", "build_request", "parse_results"]
