"""
Remote file system models.
"""

from dataclasses import dataclass
from enum import IntEnum


class FileType(IntEnum):
    """Type of a remote entry, using the values of the usb2snes List reply."""

    DIRECTORY = 0
    FILE = 1


@dataclass(frozen=True, kw_only=True)
class RemoteEntry:
    """
    One item of a remote directory listing.

    Carries no identity beyond its name and type within the listing it came from.
    """

    name: str
    file_type: FileType

    @property
    def is_directory(self) -> bool:
        """Check if this entry is a directory."""
        return self.file_type == FileType.DIRECTORY

    @property
    def display_name(self) -> str:
        """Name as shown to the operator, with a trailing "/" for directories."""
        return f"{self.name}/" if self.is_directory else self.name
