"""
Command-line interface.

Parses arguments into a Command, establishes the session and runs the command.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import structlog

from usb2snes_cli import __version__
from usb2snes_cli.client import Usb2SnesClient
from usb2snes_cli.config import Usb2SnesConfig
from usb2snes_cli.exceptions import CommandError, Usb2SnesError
from usb2snes_cli.models.commands import (
    Command,
    ListDirectory,
    ReadMemory,
    RemoveFiles,
    ShowInfo,
    UploadFiles,
)
from usb2snes_cli.services.command_service import CommandService
from usb2snes_cli.services.session_service import establish

logger = structlog.get_logger(__name__)

_U32_MAX = 0xFFFF_FFFF
_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def parse_number(text: str) -> int:
    """
    Parse an unsigned 32-bit number given in decimal or 0x-prefixed hex.

    Raises:
        argparse.ArgumentTypeError: If the text is not such a number.
    """
    digits, base = text, 10
    if text[:2].lower() == "0x":
        digits, base = text[2:], 16
    if not digits or not digits.isascii() or not digits.isalnum():
        msg = f"invalid number: {text!r}"
        raise argparse.ArgumentTypeError(msg)
    try:
        value = int(digits, base)
    except ValueError as e:
        msg = f"invalid number: {text!r}"
        raise argparse.ArgumentTypeError(msg) from e
    if value > _U32_MAX:
        msg = f"number out of range: {text!r}"
        raise argparse.ArgumentTypeError(msg)
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    # --device is accepted before or after the subcommand name.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--device", default=argparse.SUPPRESS, help="Device to attach to.")

    parser = argparse.ArgumentParser(
        prog="usb2snes",
        description="Inspect and manage the files and memory of a usb2snes device.",
    )
    parser.add_argument(
        "--device", default=None, help="Device to attach to (default: first one listed)."
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log more (-vv for debug)."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    subparsers.add_parser("info", parents=[common], help="Show device information.")

    ls_parser = subparsers.add_parser("ls", parents=[common], help="List a remote directory.")
    ls_parser.add_argument("path", nargs="?", default=None, help="Remote directory.")

    put_parser = subparsers.add_parser("put", parents=[common], help="Upload files.")
    put_parser.add_argument("--dest-dir", default=None, help="Remote directory to upload into.")
    put_parser.add_argument("files", nargs="+", type=Path, metavar="FILE", help="Local files.")

    rm_parser = subparsers.add_parser("rm", parents=[common], help="Remove remote files.")
    rm_parser.add_argument("files", nargs="+", metavar="FILE", help="Remote files.")

    read_parser = subparsers.add_parser("read", parents=[common], help="Read device memory.")
    read_parser.add_argument("addr", type=parse_number, metavar="ADDR", help="Start address.")
    read_parser.add_argument("len", type=parse_number, metavar="LEN", help="Number of bytes.")

    return parser


def command_from_args(args: argparse.Namespace) -> Command:
    """Build the Command described by parsed arguments."""
    match args.command:
        case "info":
            return ShowInfo()
        case "ls":
            return ListDirectory(path=args.path)
        case "put":
            return UploadFiles(local_paths=tuple(args.files), dest_dir=args.dest_dir)
        case "rm":
            return RemoveFiles(paths=tuple(args.files))
        case "read":
            return ReadMemory(address=args.addr, length=args.len)
    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


def configure_logging(verbosity: int = 0) -> None:
    """Send structlog output to stderr, filtered by verbosity (0, 1, 2+)."""
    level = _LOG_LEVELS[min(verbosity, len(_LOG_LEVELS) - 1)]
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


async def run(
    command: Command,
    device: str | None = None,
    *,
    client: Usb2SnesClient | None = None,
    output: TextIO | None = None,
) -> None:
    """
    Establish a session and execute one command on it.

    Command errors name the attached device: the bridge does not answer Attach,
    so an unknown device only fails on the first command call.

    Args:
        command: Command to execute.
        device: Device to attach to, or None for the first one listed.
        client: Client to use. A default-configured one is created if omitted.
        output: Operator-facing stream. Defaults to stdout.

    Raises:
        Usb2SnesError: If establishing the session or the command fails.
    """
    client = client or Usb2SnesClient(Usb2SnesConfig())
    try:
        attached = await establish(client, device, output=output)
        try:
            await CommandService(client, output=output).execute(command)
        except CommandError as e:
            e.context.setdefault("device", attached)
            raise
    finally:
        await client.close()


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 on error, 130 on interrupt.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    command = command_from_args(args)

    try:
        asyncio.run(run(command, args.device))
    except Usb2SnesError as e:
        logger.debug("Command failed", error=repr(e))
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0
