"""
usb2snes client configuration.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Usb2SnesConfig:
    """
    Attributes:
        url: WebSocket endpoint of the usb2snes bridge.
        connect_timeout: Timeout for opening the WebSocket, in seconds.
        timeout: Timeout for a single frame round trip, in seconds.
        chunk_size: Maximum size of a binary frame sent by PutFile.
        space: Address space passed with every request.
    """

    url: str = "ws://localhost:8080"
    connect_timeout: float = 5.0
    timeout: float = 30.0
    chunk_size: int = 1024
    space: str = "SNES"

    def __post_init__(self) -> None:
        if not self.url.startswith(("ws://", "wss://")):
            msg = "url must be a ws:// or wss:// URL"
            raise ValueError(msg)
        if self.connect_timeout <= 0:
            msg = "connect_timeout must be positive"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
