"""Memory protocol calls."""

from usb2snes_cli.api.ws_client import AsyncWebSocketClient, Opcode


async def get_address(ws: AsyncWebSocketClient, address: int, size: int) -> bytes:
    """
    Read ``size`` bytes of device memory starting at ``address``.

    Range checks are left to the bridge.
    """
    return await ws.request_download(Opcode.GET_ADDRESS, [f"{address:X}", f"{size:X}"], size)
