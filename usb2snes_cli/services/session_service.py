"""
Session establishment.

Opens the connection to the bridge, picks the device to use and attaches to it.
"""

import sys
from typing import TextIO

import structlog

from usb2snes_cli.client import Usb2SnesClient
from usb2snes_cli.exceptions import (
    AttachFailedError,
    ConnectionFailedError,
    EnumerationFailedError,
    NoDevicesFoundError,
    Usb2SnesError,
)

logger = structlog.get_logger(__name__)


async def establish(
    client: Usb2SnesClient,
    requested_device: str | None = None,
    *,
    output: TextIO | None = None,
) -> str:
    """
    Connect to the bridge and attach to a device.

    Without ``requested_device`` the first device reported by the bridge is
    used. A requested device is attached as-is; the bridge rejects unknown ones.

    Args:
        client: Unconnected client.
        requested_device: Device name from --device, if any.
        output: Operator-facing stream. Defaults to stdout.

    Returns:
        The attached device name.

    Raises:
        ConnectionFailedError: If the bridge cannot be reached.
        EnumerationFailedError: If the device list cannot be fetched.
        NoDevicesFoundError: If no device was requested and none is available.
        AttachFailedError: If attaching fails.
    """
    out = output or sys.stdout

    try:
        await client.connect()
    except Usb2SnesError as e:
        msg = f"Cannot connect to bridge: {e.message}"
        raise ConnectionFailedError(msg, url=client.url) from e

    device = requested_device
    if device is None:
        device = await _first_device(client)

    print(f"Attaching to {device}.", file=out)
    try:
        await client.attach(device)
    except Usb2SnesError as e:
        msg = f"Cannot attach to device: {e.message}"
        raise AttachFailedError(msg, device=device) from e

    logger.info("Session established", device=device, url=client.url)
    return device


async def _first_device(client: Usb2SnesClient) -> str:
    try:
        devices = await client.device_list()
    except Usb2SnesError as e:
        msg = f"Cannot list devices: {e.message}"
        raise EnumerationFailedError(msg) from e

    if not devices:
        raise NoDevicesFoundError()
    logger.debug("Selecting first device", devices=devices)
    return devices[0]
