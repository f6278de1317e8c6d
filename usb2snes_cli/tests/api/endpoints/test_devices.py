from unittest.mock import AsyncMock, Mock

import pytest

from usb2snes_cli.api.endpoints.devices import attach, get_device_list, get_info
from usb2snes_cli.api.ws_client import Opcode


@pytest.mark.asyncio
async def test_get_device_list_keeps_bridge_order(mock_ws: Mock) -> None:
    mock_ws.request = AsyncMock(return_value=["SD2SNES COM4", "SD2SNES COM3"])

    devices = await get_device_list(mock_ws)

    assert devices == ["SD2SNES COM4", "SD2SNES COM3"]
    mock_ws.request.assert_awaited_once_with(Opcode.DEVICE_LIST)


@pytest.mark.asyncio
async def test_get_device_list_empty(mock_ws: Mock) -> None:
    assert await get_device_list(mock_ws) == []


@pytest.mark.asyncio
async def test_attach_sends_device_without_waiting_for_reply(mock_ws: Mock) -> None:
    await attach(mock_ws, "SD2SNES COM3")

    mock_ws.request.assert_awaited_once_with(Opcode.ATTACH, ["SD2SNES COM3"], expect_reply=False)


@pytest.mark.asyncio
async def test_get_info_returns_strings(mock_ws: Mock) -> None:
    mock_ws.request = AsyncMock(return_value=["1.10.3", "USB v1.10.3", "/sd2snes/menu.bin"])

    info = await get_info(mock_ws)

    assert info == ["1.10.3", "USB v1.10.3", "/sd2snes/menu.bin"]
    mock_ws.request.assert_awaited_once_with(Opcode.INFO)
