"""
Domain models for usb2snes_cli.

These are immutable (frozen) dataclasses and enums describing sessions,
remote files and user commands.
"""

from usb2snes_cli.models.commands import (
    Command,
    ListDirectory,
    ReadMemory,
    RemoveFiles,
    ShowInfo,
    UploadFiles,
)
from usb2snes_cli.models.files import FileType, RemoteEntry
from usb2snes_cli.models.session import SessionState

__all__ = [
    # Files
    "FileType",
    "RemoteEntry",
    # Session
    "SessionState",
    # Commands
    "Command",
    "ShowInfo",
    "ListDirectory",
    "UploadFiles",
    "RemoveFiles",
    "ReadMemory",
]
