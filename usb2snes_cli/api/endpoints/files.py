"""File system protocol calls (list, put, remove)."""

from usb2snes_cli.api.ws_client import AsyncWebSocketClient, Opcode
from usb2snes_cli.exceptions import ProtocolError
from usb2snes_cli.models.files import FileType, RemoteEntry


async def list_files(ws: AsyncWebSocketClient, path: str) -> list[RemoteEntry]:
    """
    List a remote directory.

    The reply is a flat sequence of (type, name) pairs.

    Args:
        ws: Connected WebSocket client.
        path: Remote directory; "" lists the bridge's default directory.

    Returns:
        Entries in the order the bridge returned them.

    Raises:
        ProtocolError: If the reply cannot be decoded into pairs.
    """
    results = await ws.request(Opcode.LIST, [path]) or []
    if len(results) % 2 != 0:
        msg = "List reply has an odd number of results"
        raise ProtocolError(msg, path=path)

    entries = []
    for raw_type, name in zip(results[::2], results[1::2], strict=True):
        try:
            file_type = FileType(int(raw_type))
        except ValueError as e:
            msg = f"Unknown file type {raw_type!r} for {name!r}"
            raise ProtocolError(msg, path=path) from e
        entries.append(RemoteEntry(name=name, file_type=file_type))
    return entries


async def put_file(ws: AsyncWebSocketClient, path: str, data: bytes) -> None:
    """
    Upload a file. The bridge does not acknowledge the transfer.

    Args:
        ws: Connected WebSocket client.
        path: Remote destination path.
        data: Full file contents.
    """
    await ws.request_upload(Opcode.PUT_FILE, [path, f"{len(data):X}"], data)


async def remove(ws: AsyncWebSocketClient, path: str) -> None:
    """Remove a remote file. The bridge does not acknowledge removals."""
    await ws.request(Opcode.REMOVE, [path], expect_reply=False)
