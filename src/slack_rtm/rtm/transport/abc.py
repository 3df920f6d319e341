"""Abstract WebSocket transport for the RTM session engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class FrameKind(Enum):
    TEXT = "text"
    BINARY = "binary"
    PING = "ping"
    PONG = "pong"
    CLOSE = "close"


@dataclass(frozen=True)
class InboundFrame:
    """A complete frame read from the server.

    Attributes:
        kind: Frame opcode
        payload: Frame data; fragmented messages arrive reassembled
    """

    kind: FrameKind
    payload: bytes


class WebSocketConnection(ABC):
    """An open client WebSocket.

    One thread reads with recv_frame while another writes with the send_*
    methods; implementations must allow exactly that split.
    """

    @abstractmethod
    def recv_frame(self) -> InboundFrame:
        """Block until the next frame arrives.

        Returns:
            The next inbound frame

        Raises:
            TransportError: On a socket or protocol error, on EOF, or when no
                data arrives within the read deadline
        """
        ...

    @abstractmethod
    def send_text(self, text: str) -> None:
        """Send a text frame.

        Raises:
            TransportError: If the frame could not be written
        """
        ...

    @abstractmethod
    def send_pong(self, payload: bytes) -> None:
        """Answer a ping with a pong carrying payload.

        Implementations whose protocol layer queues the pong itself when it
        parses the ping may ignore payload and only flush that pong.

        Raises:
            TransportError: If the frame could not be written
        """
        ...

    @abstractmethod
    def send_close(self) -> None:
        """Send a close frame (or complete the closing handshake).

        Raises:
            TransportError: If the frame could not be written
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the underlying socket. Safe to call more than once."""
        ...


class WebSocketConnector(ABC):
    """Opens WebSocket connections."""

    @abstractmethod
    def connect(self, url: str, *, read_timeout: float) -> WebSocketConnection:
        """Connect and perform the client upgrade handshake.

        Args:
            url: A ws:// or wss:// URL
            read_timeout: Seconds recv_frame may wait before failing

        Returns:
            An open connection

        Raises:
            UrlError: If url cannot be parsed
            TransportError: If TCP, TLS or the upgrade handshake fails
        """
        ...
