"""
User commands.

Each command is an immutable value built by the CLI and executed by
CommandService.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class ShowInfo:
    """Print the device info strings."""


@dataclass(frozen=True, kw_only=True)
class ListDirectory:
    """List a remote directory. None lists the bridge's default directory."""

    path: str | None = None


@dataclass(frozen=True, kw_only=True)
class UploadFiles:
    """Upload local files, one at a time, optionally into a remote directory."""

    local_paths: tuple[Path, ...]
    dest_dir: str | None = None


@dataclass(frozen=True, kw_only=True)
class RemoveFiles:
    """Remove remote files, one at a time."""

    paths: tuple[str, ...]


@dataclass(frozen=True, kw_only=True)
class ReadMemory:
    """Read `length` bytes of device memory starting at `address`."""

    address: int
    length: int


Command = ShowInfo | ListDirectory | UploadFiles | RemoveFiles | ReadMemory
