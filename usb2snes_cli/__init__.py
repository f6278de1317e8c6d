"""
usb2snes command-line client.

An async Python client for usb2snes bridges (QUsb2Snes, SNI, ...), exposing
the file system and memory of SD2SNES/FXPak cartridges and emulators.

Example:
    ```python
    from usb2snes_cli import CommandService, ListDirectory, Usb2SnesClient, establish

    async with Usb2SnesClient() as client:
        await establish(client)
        await CommandService(client).execute(ListDirectory(path="/"))
    ```
"""

from usb2snes_cli.client import Usb2SnesClient
from usb2snes_cli.config import Usb2SnesConfig
from usb2snes_cli.exceptions import (
    AttachFailedError,
    CommandError,
    ConnectionFailedError,
    EnumerationFailedError,
    EstablishError,
    InvalidFileNameError,
    LocalReadError,
    NoDevicesFoundError,
    NotAttachedError,
    ProtocolCallError,
    ProtocolError,
    TransportError,
    Usb2SnesError,
)
from usb2snes_cli.models import (
    Command,
    FileType,
    ListDirectory,
    ReadMemory,
    RemoteEntry,
    RemoveFiles,
    SessionState,
    ShowInfo,
    UploadFiles,
)
from usb2snes_cli.services import CommandService, establish, remote_path_for

__version__ = "0.1.0"

__all__ = [
    # Main client
    "Usb2SnesClient",
    "Usb2SnesConfig",
    # Services
    "CommandService",
    "establish",
    "remote_path_for",
    # Models
    "Command",
    "ShowInfo",
    "ListDirectory",
    "UploadFiles",
    "RemoveFiles",
    "ReadMemory",
    "FileType",
    "RemoteEntry",
    "SessionState",
    # Exceptions
    "Usb2SnesError",
    "TransportError",
    "ProtocolError",
    "NotAttachedError",
    "EstablishError",
    "ConnectionFailedError",
    "EnumerationFailedError",
    "NoDevicesFoundError",
    "AttachFailedError",
    "CommandError",
    "LocalReadError",
    "InvalidFileNameError",
    "ProtocolCallError",
]
