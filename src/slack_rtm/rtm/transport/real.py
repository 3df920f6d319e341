"""Real WebSocket transport using the websockets Sans-I/O protocol over sockets.

The reader thread parses incoming bytes; the writer thread serializes frames.
Both touch the ClientProtocol, so every protocol call happens under a lock.
Socket reads happen outside the lock so the writer is never blocked behind a
pending read.
"""

import logging
import socket
import ssl
import threading
from collections import deque

from websockets.client import ClientProtocol
from websockets.exceptions import InvalidState, InvalidURI
from websockets.frames import Frame, Opcode
from websockets.http11 import Response
from websockets.protocol import State
from websockets.uri import parse_uri

from slack_rtm.errors import TransportError, UrlError
from slack_rtm.rtm.transport.abc import (
    FrameKind,
    InboundFrame,
    WebSocketConnection,
    WebSocketConnector,
)

logger = logging.getLogger(__name__)

RECV_BUFSIZE = 65536

_KINDS = {
    Opcode.TEXT: FrameKind.TEXT,
    Opcode.BINARY: FrameKind.BINARY,
    Opcode.PING: FrameKind.PING,
    Opcode.PONG: FrameKind.PONG,
    Opcode.CLOSE: FrameKind.CLOSE,
}


class SansIoConnection(WebSocketConnection):
    """WebSocketConnection driving a websockets ClientProtocol over a socket.

    The protocol queues the pong for every ping as soon as the ping is parsed.
    That pong is only written when the writer next flushes, which is what
    send_pong does.
    """

    def __init__(
        self,
        sock: socket.socket,
        protocol: ClientProtocol,
        *,
        read_timeout: float,
        pending: list[Frame] | None = None,
    ) -> None:
        self._sock = sock
        self._protocol = protocol
        self._read_timeout = read_timeout
        self._lock = threading.Lock()
        self._frames: deque[InboundFrame] = deque()
        self._fragment_kind: FrameKind | None = None
        self._fragments: list[bytes] = []
        self._closed = False
        self._sock.settimeout(read_timeout)
        for frame in pending or []:
            self._accept(frame)

    def recv_frame(self) -> InboundFrame:
        while not self._frames:
            try:
                data = self._sock.recv(RECV_BUFSIZE)
            except TimeoutError as e:
                raise TransportError(
                    f"No data received within {self._read_timeout} seconds"
                ) from e
            except OSError as e:
                raise TransportError(f"WebSocket read failed: {e}") from e

            with self._lock:
                if data:
                    self._protocol.receive_data(data)
                else:
                    self._protocol.receive_eof()
                events = self._protocol.events_received()
                parser_exc = self._protocol.parser_exc

            for event in events:
                if isinstance(event, Frame):
                    self._accept(event)
            if parser_exc is not None:
                raise TransportError(f"WebSocket protocol error: {parser_exc}") from parser_exc
            if not data and not self._frames:
                raise TransportError("WebSocket connection closed without a close frame")

        return self._frames.popleft()

    def send_text(self, text: str) -> None:
        with self._lock:
            try:
                self._protocol.send_text(text.encode("utf-8"))
            except InvalidState as e:
                raise TransportError(f"WebSocket is not open: {e}") from e
            self._flush()

    def send_pong(self, payload: bytes) -> None:
        # payload is already in the pong the protocol queued for the ping.
        with self._lock:
            written = self._flush()
        if not written:
            logger.debug("No pending pong for a %d byte ping payload", len(payload))

    def send_close(self) -> None:
        with self._lock:
            if self._protocol.state is State.OPEN:
                self._protocol.send_close()
            self._flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._sock.close()

    def _flush(self) -> int:
        # Caller holds self._lock. Returns the number of bytes written.
        written = 0
        for data in self._protocol.data_to_send():
            try:
                if data:
                    self._sock.sendall(data)
                    written += len(data)
                else:
                    self._sock.shutdown(socket.SHUT_WR)
            except OSError as e:
                raise TransportError(f"WebSocket write failed: {e}") from e
        return written

    def _accept(self, frame: Frame) -> None:
        data = bytes(frame.data)
        if frame.opcode is Opcode.CONT:
            if self._fragment_kind is None:
                return
            self._fragments.append(data)
            if frame.fin:
                self._frames.append(
                    InboundFrame(kind=self._fragment_kind, payload=b"".join(self._fragments))
                )
                self._fragment_kind = None
                self._fragments = []
            return

        kind = _KINDS[frame.opcode]
        if not frame.fin:
            self._fragment_kind = kind
            self._fragments = [data]
            return
        self._frames.append(InboundFrame(kind=kind, payload=data))


class SansIoConnector(WebSocketConnector):
    """Opens TCP (plus TLS for wss://) connections and performs the upgrade.

    Attributes:
        ssl_context: Context for wss:// URLs; defaults to the platform trust store
    """

    def __init__(self, *, ssl_context: ssl.SSLContext | None = None) -> None:
        self._ssl_context = ssl_context

    def connect(self, url: str, *, read_timeout: float) -> WebSocketConnection:
        try:
            wsuri = parse_uri(url)
        except InvalidURI as e:
            raise UrlError(f"Invalid WebSocket URL: {e}") from e

        logger.debug("Opening WebSocket to %s:%d", wsuri.host, wsuri.port)
        try:
            sock = socket.create_connection((wsuri.host, wsuri.port), timeout=read_timeout)
        except OSError as e:
            raise TransportError(f"Could not connect to {wsuri.host}:{wsuri.port}: {e}") from e

        try:
            if wsuri.secure:
                context = self._ssl_context or ssl.create_default_context()
                sock = context.wrap_socket(sock, server_hostname=wsuri.host)
            protocol, pending = self._handshake(sock, ClientProtocol(wsuri))
        except OSError as e:
            sock.close()
            raise TransportError(f"WebSocket handshake with {wsuri.host} failed: {e}") from e
        except TransportError:
            sock.close()
            raise

        return SansIoConnection(sock, protocol, read_timeout=read_timeout, pending=pending)

    def _handshake(
        self, sock: socket.socket, protocol: ClientProtocol
    ) -> tuple[ClientProtocol, list[Frame]]:
        protocol.send_request(protocol.connect())
        for data in protocol.data_to_send():
            sock.sendall(data)

        response: Response | None = None
        pending: list[Frame] = []
        while response is None:
            data = sock.recv(RECV_BUFSIZE)
            if data:
                protocol.receive_data(data)
            else:
                protocol.receive_eof()
            for event in protocol.events_received():
                if isinstance(event, Response):
                    response = event
                else:
                    pending.append(event)
            if protocol.handshake_exc is not None:
                raise TransportError(
                    f"WebSocket upgrade rejected: {protocol.handshake_exc}"
                ) from protocol.handshake_exc
            if not data and response is None:
                raise TransportError("Connection closed during WebSocket upgrade")

        if protocol.state is not State.OPEN:
            raise TransportError(f"WebSocket upgrade failed with status {response.status_code}")
        logger.debug("WebSocket upgrade complete")
        return protocol, pending
