"""
usb2snes session facade.

A Usb2SnesClient is one connection to the bridge, bound to at most one device.
Device calls are refused until attach() has been called.
"""

from typing import Self

import structlog

from usb2snes_cli.api.endpoints import devices, files, memory
from usb2snes_cli.api.ws_client import AsyncWebSocketClient, ConnectionFactory
from usb2snes_cli.config import Usb2SnesConfig
from usb2snes_cli.exceptions import NotAttachedError
from usb2snes_cli.models.files import RemoteEntry
from usb2snes_cli.models.session import SessionState

logger = structlog.get_logger(__name__)


class Usb2SnesClient:
    """
    Async client for a usb2snes bridge.

    Example:
        ```python
        async with Usb2SnesClient() as client:
            devices = await client.device_list()
            await client.attach(devices[0])
            for entry in await client.list_files(""):
                print(entry.display_name)
        ```

    Args:
        config: Client configuration. Uses defaults if not provided.
        connection_factory: Optional WebSocket factory for testing.
    """

    def __init__(
        self,
        config: Usb2SnesConfig | None = None,
        *,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self._config = config or Usb2SnesConfig()
        self._ws = AsyncWebSocketClient(self._config, connection_factory=connection_factory)
        self._state = SessionState.CREATED
        self._device: str | None = None

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.close()

    @property
    def url(self) -> str:
        """Bridge endpoint."""
        return self._config.url

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def device(self) -> str | None:
        """Attached device, or None before attach()."""
        return self._device

    async def connect(self) -> None:
        """
        Open the connection to the bridge.

        Raises:
            TransportError: If the bridge cannot be reached.
        """
        await self._ws.connect()

    async def close(self) -> None:
        """Close the connection."""
        await self._ws.close()

    async def device_list(self) -> list[str]:
        """
        List the devices known to the bridge.

        Returns:
            Device names in the order the bridge returned them.
        """
        return await devices.get_device_list(self._ws)

    async def attach(self, device: str) -> None:
        """
        Bind the session to a device.

        Args:
            device: Device name, as reported by device_list().

        Raises:
            RuntimeError: If the session is already attached.
            TransportError: If the request cannot be sent.
        """
        if self._state != SessionState.CREATED:
            msg = f"Session already attached to {self._device}"
            raise RuntimeError(msg)
        await devices.attach(self._ws, device)
        self._device = device
        self._state = SessionState.ATTACHED
        logger.debug("Attached", device=device)

    async def get_info(self) -> list[str]:
        """Get the device info strings."""
        self._require_attached()
        return await devices.get_info(self._ws)

    async def list_files(self, path: str) -> list[RemoteEntry]:
        """
        List a remote directory.

        Args:
            path: Remote directory; "" lists the bridge's default directory.
        """
        self._require_attached()
        return await files.list_files(self._ws, path)

    async def put_file(self, path: str, data: bytes) -> None:
        """
        Upload a file.

        Note:
            The bridge may still be writing when this returns. Issue another
            round trip (e.g. list_files("")) before relying on the file.
        """
        self._require_attached()
        await files.put_file(self._ws, path, data)

    async def remove(self, path: str) -> None:
        """Remove a remote file."""
        self._require_attached()
        await files.remove(self._ws, path)

    async def read_memory(self, address: int, into: bytearray) -> None:
        """
        Read device memory into a buffer.

        Args:
            address: Start address in the SNES address space.
            into: Buffer to fill; its length is the number of bytes read.
        """
        self._require_attached()
        into[:] = await memory.get_address(self._ws, address, len(into))

    def _require_attached(self) -> None:
        if self._state == SessionState.CREATED:
            raise NotAttachedError()
        self._state = SessionState.IN_USE
