"""
Command execution.

Turns user commands into ordered protocol calls on an attached session and
prints their human-readable output. Multi-item commands stop at the first
failing item; items already processed are not rolled back.
"""

import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog

from usb2snes_cli.client import Usb2SnesClient
from usb2snes_cli.exceptions import (
    InvalidFileNameError,
    LocalReadError,
    ProtocolCallError,
    ProtocolError,
    TransportError,
)
from usb2snes_cli.models.commands import (
    Command,
    ListDirectory,
    ReadMemory,
    RemoveFiles,
    ShowInfo,
    UploadFiles,
)

logger = structlog.get_logger(__name__)


def display_path(path: Path | str) -> str:
    """
    Decode a path for display and for the wire.

    Bytes that are not valid UTF-8 become U+FFFD instead of lone surrogates.
    """
    return os.fsencode(path).decode("utf-8", "replace")


def remote_path_for(local_path: Path, dest_dir: str | None = None) -> str:
    """
    Compute the remote path a local file is uploaded to.

    Args:
        local_path: Local file path.
        dest_dir: Remote directory. Trailing "/" are stripped and exactly one
            separator is inserted before the file name.

    Returns:
        The file's base name, prefixed by ``dest_dir`` when given. Bytes of the
        name that are not valid UTF-8 are replaced, see display_path().

    Raises:
        InvalidFileNameError: If the path has no final component.
    """
    name = display_path(local_path.name)
    if name in ("", ".."):
        msg = f"Cannot parse file name from {display_path(local_path)!r}"
        raise InvalidFileNameError(msg, path=display_path(local_path))
    if dest_dir is None:
        return name
    return f"{dest_dir.rstrip('/')}/{name}"


class CommandService:
    """
    Executes commands against an attached session.

    Args:
        client: Attached client.
        output: Operator-facing stream. Defaults to stdout.
    """

    def __init__(self, client: Usb2SnesClient, *, output: TextIO | None = None) -> None:
        self._client = client
        self._output = output or sys.stdout

    async def execute(self, command: Command) -> None:
        """
        Run a command.

        Raises:
            CommandError: If any step of the command fails.
        """
        logger.debug("Executing command", command=command)
        match command:
            case ShowInfo():
                await self.show_info()
            case ListDirectory(path=path):
                await self.list_directory(path)
            case UploadFiles(local_paths=local_paths, dest_dir=dest_dir):
                await self.upload_files(local_paths, dest_dir)
            case RemoveFiles(paths=paths):
                await self.remove_files(paths)
            case ReadMemory(address=address, length=length):
                await self.read_memory(address, length)
            case _:
                msg = f"Unknown command: {command!r}"
                raise TypeError(msg)

    async def show_info(self) -> None:
        """Print each device info string as a bullet."""
        try:
            info = await self._client.get_info()
        except (TransportError, ProtocolError) as e:
            raise _call_failed("info", e) from e
        for item in info:
            self._echo(f" * {item}")

    async def list_directory(self, path: str | None = None) -> None:
        """Print the entries of a remote directory, directories with a trailing "/"."""
        path = path or ""
        try:
            entries = await self._client.list_files(path)
        except (TransportError, ProtocolError) as e:
            raise _call_failed("list", e, path=path) from e
        for entry in entries:
            self._echo(entry.display_name)

    async def upload_files(self, local_paths: Iterable[Path], dest_dir: str | None = None) -> None:
        """
        Upload local files one at a time.

        Each put is followed by a listing whose result is discarded: the bridge
        acknowledges PutFile before the write is complete, and the extra round
        trip holds the next call back until it is.

        Args:
            local_paths: Files to upload, in order.
            dest_dir: Remote directory, or None for the bridge's default one.

        Raises:
            LocalReadError: If a local file cannot be read.
            InvalidFileNameError: If a path has no file name.
            ProtocolCallError: If a put or the following listing fails.
        """
        for local_path in local_paths:
            try:
                data = local_path.read_bytes()
            except OSError as e:
                msg = f"Cannot read {display_path(local_path)!r}: {e.strerror or e}"
                raise LocalReadError(msg, path=display_path(local_path)) from e

            remote_path = remote_path_for(local_path, dest_dir)
            self._echo(f"{display_path(local_path)} -> {remote_path}")

            try:
                await self._client.put_file(remote_path, data)
                await self._client.list_files("")
            except (TransportError, ProtocolError) as e:
                raise _call_failed("put", e, path=remote_path) from e
            logger.debug("Uploaded", path=remote_path, size=len(data))

    async def remove_files(self, paths: Iterable[str]) -> None:
        """Remove remote files one at a time."""
        for path in map(display_path, paths):
            self._echo(f"removing {path}")
            try:
                await self._client.remove(path)
            except (TransportError, ProtocolError) as e:
                raise _call_failed("remove", e, path=path) from e

    async def read_memory(self, address: int, length: int) -> None:
        """Read device memory and print the raw byte values."""
        buffer = bytearray(length)
        try:
            await self._client.read_memory(address, buffer)
        except (TransportError, ProtocolError) as e:
            raise _call_failed("read", e, address=f"0x{address:X}", length=length) from e
        self._echo(str(list(buffer)))

    def _echo(self, line: str) -> None:
        print(line, file=self._output)


def _call_failed(operation: str, error: Exception, **context: Any) -> ProtocolCallError:
    message = getattr(error, "message", str(error))
    return ProtocolCallError(f"{operation} failed: {message}", operation=operation, **context)
