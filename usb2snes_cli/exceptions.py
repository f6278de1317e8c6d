"""
usb2snes exception hierarchy.

All exceptions inherit from Usb2SnesError for easy catching.
"""

from typing import Any


class Usb2SnesError(Exception):
    """Base exception for all usb2snes_cli errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class TransportError(Usb2SnesError):
    """WebSocket-level error (connection refused or closed, timeout)."""


class ProtocolError(Usb2SnesError):
    """The bridge sent a reply that does not follow the usb2snes protocol."""


class NotAttachedError(Usb2SnesError):
    """A device call was made before the session was attached."""

    def __init__(self, message: str = "Session not attached. Call attach() first.") -> None:
        super().__init__(message)


class EstablishError(Usb2SnesError):
    """Opening or attaching the session failed."""


class ConnectionFailedError(EstablishError):
    """The bridge could not be reached."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message, url=url)
        self.url = url


class EnumerationFailedError(EstablishError):
    """The bridge could not list its devices."""


class NoDevicesFoundError(EstablishError):
    """No device was requested and the bridge reported none."""

    def __init__(self, message: str = "No devices found") -> None:
        super().__init__(message)


class AttachFailedError(EstablishError):
    """The chosen device rejected the attach request."""

    def __init__(self, message: str, *, device: str) -> None:
        super().__init__(message, device=device)
        self.device = device


class CommandError(Usb2SnesError):
    """A user command failed."""


class LocalReadError(CommandError):
    """A local file could not be read for upload."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class InvalidFileNameError(CommandError):
    """No base name can be extracted from a local path."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class ProtocolCallError(CommandError):
    """A protocol call made on behalf of a command failed."""

    def __init__(self, message: str, *, operation: str, **context: Any) -> None:
        super().__init__(message, operation=operation, **context)
        self.operation = operation
