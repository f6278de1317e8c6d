"""
Async WebSocket client for the usb2snes protocol.

Wraps a blocking websocket-client connection so that each protocol round trip
is awaitable, and guarantees that at most one request is in flight at a time.
"""

import asyncio
import json
from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Any

import structlog
import websocket

from usb2snes_cli.config import Usb2SnesConfig
from usb2snes_cli.exceptions import ProtocolError, TransportError

logger = structlog.get_logger(__name__)

ConnectionFactory = Callable[..., websocket.WebSocket]


class Opcode(StrEnum):
    """usb2snes opcodes used by this client."""

    DEVICE_LIST = "DeviceList"
    ATTACH = "Attach"
    INFO = "Info"
    LIST = "List"
    PUT_FILE = "PutFile"
    REMOVE = "Remove"
    GET_ADDRESS = "GetAddress"


def build_request(
    opcode: Opcode, operands: Sequence[str] = (), *, space: str = "SNES"
) -> dict[str, Any]:
    """
    Build the JSON body of a usb2snes request.

    Args:
        opcode: Request opcode.
        operands: String operands, in protocol order.
        space: Address space the request applies to.

    Returns:
        Request dict ready to be serialized as a text frame.
    """
    return {"Opcode": str(opcode), "Space": space, "Flags": [], "Operands": list(operands)}


def parse_results(raw: str, opcode: Opcode) -> list[str]:
    """
    Decode a usb2snes JSON reply into its list of results.

    Raises:
        ProtocolError: If the reply is not JSON or has no list of results.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ProtocolError("Invalid JSON reply from bridge", opcode=str(opcode)) from e

    results = data.get("Results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise ProtocolError("Reply has no Results list", opcode=str(opcode))
    return [str(r) for r in results]


class AsyncWebSocketClient:
    """Async WebSocket client for a usb2snes bridge."""

    def __init__(
        self,
        config: Usb2SnesConfig,
        *,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            connection_factory: Optional replacement for websocket.create_connection
                (fake connections in tests).
        """
        self._config = config
        self._connection_factory = connection_factory or websocket.create_connection
        self._ws: websocket.WebSocket | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncWebSocketClient":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def is_connected(self) -> bool:
        """Check if the WebSocket is open."""
        return self._ws is not None

    async def connect(self) -> None:
        """
        Open the WebSocket connection. No-op if already connected.

        Raises:
            TransportError: If the bridge cannot be reached.
        """
        async with self._lock:
            if self._ws is not None:
                return
            url = self._config.url
            logger.debug("Connecting to bridge", url=url)
            try:
                ws = await asyncio.to_thread(
                    self._connection_factory, url, timeout=self._config.connect_timeout
                )
                ws.settimeout(self._config.timeout)
            except (websocket.WebSocketException, OSError) as e:
                msg = f"Cannot connect to {url}: {e}"
                raise TransportError(msg, url=url) from e
            self._ws = ws
            logger.debug("Connected to bridge", url=url)

    async def close(self) -> None:
        """Close the WebSocket connection."""
        async with self._lock:
            if self._ws is None:
                logger.debug("Connection not open.")
                return
            ws, self._ws = self._ws, None
            try:
                await asyncio.to_thread(ws.close)
            except (websocket.WebSocketException, OSError) as e:
                logger.debug("Error while closing connection", error=str(e))

    async def request(
        self,
        opcode: Opcode,
        operands: Sequence[str] = (),
        *,
        expect_reply: bool = True,
    ) -> list[str] | None:
        """
        Send a request and optionally wait for its JSON reply.

        Args:
            opcode: Request opcode.
            operands: String operands.
            expect_reply: Whether the opcode answers with a Results frame.

        Returns:
            The reply's results, or None when no reply is expected.

        Raises:
            TransportError: If the connection fails or times out.
            ProtocolError: If the reply is malformed.
        """
        async with self._lock:
            await self._send_request(opcode, operands)
            if not expect_reply:
                return None
            return parse_results(await self._recv_text(opcode), opcode)

    async def request_upload(self, opcode: Opcode, operands: Sequence[str], data: bytes) -> None:
        """
        Send a request followed by its payload as binary frames.

        The payload is split into frames of at most ``config.chunk_size`` bytes.
        """
        async with self._lock:
            await self._send_request(opcode, operands)
            ws = self._require_ws()
            chunk_size = self._config.chunk_size
            for offset in range(0, len(data), chunk_size):
                await self._call(opcode, ws.send_binary, data[offset : offset + chunk_size])

    async def request_download(self, opcode: Opcode, operands: Sequence[str], size: int) -> bytes:
        """
        Send a request and collect binary frames until ``size`` bytes arrived.

        Raises:
            ProtocolError: If the bridge sends a text frame or more data than asked.
        """
        async with self._lock:
            await self._send_request(opcode, operands)
            received = bytearray()
            while len(received) < size:
                frame = await self._call(opcode, self._require_ws().recv)
                if not isinstance(frame, bytes):
                    raise ProtocolError("Expected a binary frame", opcode=str(opcode))
                received += frame
            if len(received) > size:
                msg = f"Bridge sent {len(received)} bytes, expected {size}"
                raise ProtocolError(msg, opcode=str(opcode))
            return bytes(received)

    async def _send_request(self, opcode: Opcode, operands: Sequence[str]) -> None:
        body = build_request(opcode, operands, space=self._config.space)
        logger.debug("Sending request", opcode=str(opcode), operands=body["Operands"])
        await self._call(opcode, self._require_ws().send, json.dumps(body))

    async def _recv_text(self, opcode: Opcode) -> str:
        frame = await self._call(opcode, self._require_ws().recv)
        if not isinstance(frame, str):
            raise ProtocolError("Expected a text frame", opcode=str(opcode))
        return frame

    def _abort(self) -> None:
        if self._ws is None:
            return
        ws, self._ws = self._ws, None
        logger.debug("Aborting connection")
        try:
            ws.abort()
        except OSError as e:
            logger.debug("Error while aborting connection", error=str(e))

    def _require_ws(self) -> websocket.WebSocket:
        if self._ws is None:
            msg = "WebSocket not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._ws

    async def _call(self, opcode: Opcode, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except asyncio.CancelledError:
            # Cancellation does not stop the worker thread; abort() wakes a blocked recv.
            self._abort()
            raise
        except websocket.WebSocketTimeoutException as e:
            msg = f"Timed out waiting for bridge after {self._config.timeout}s"
            raise TransportError(msg, opcode=str(opcode)) from e
        except websocket.WebSocketConnectionClosedException as e:
            raise TransportError("Connection closed by bridge", opcode=str(opcode)) from e
        except (websocket.WebSocketException, OSError) as e:
            raise TransportError(f"WebSocket error: {e}", opcode=str(opcode)) from e
