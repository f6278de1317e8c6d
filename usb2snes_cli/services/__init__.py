"""
Orchestration services for usb2snes_cli.
"""

from usb2snes_cli.services.command_service import CommandService, remote_path_for
from usb2snes_cli.services.session_service import establish

__all__ = [
    "CommandService",
    "establish",
    "remote_path_for",
]
