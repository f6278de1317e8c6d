"""Device-related protocol calls (enumeration, attach, info)."""

from usb2snes_cli.api.ws_client import AsyncWebSocketClient, Opcode


async def get_device_list(ws: AsyncWebSocketClient) -> list[str]:
    """Get the names of the devices known to the bridge, in bridge order."""
    return await ws.request(Opcode.DEVICE_LIST) or []


async def attach(ws: AsyncWebSocketClient, device: str) -> None:
    """
    Bind the connection to a device.

    The bridge does not answer Attach; an unknown device makes it drop the
    connection, which surfaces on the next call.
    """
    await ws.request(Opcode.ATTACH, [device], expect_reply=False)


async def get_info(ws: AsyncWebSocketClient) -> list[str]:
    """Get the attached device's info strings (firmware, version, ROM, flags)."""
    return await ws.request(Opcode.INFO) or []
