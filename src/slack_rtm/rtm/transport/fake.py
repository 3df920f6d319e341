"""Fake WebSocket transport for testing the RTM session engine."""

import threading
from collections import deque

from slack_rtm.errors import SlackError, TransportError
from slack_rtm.rtm.transport.abc import (
    FrameKind,
    InboundFrame,
    WebSocketConnection,
    WebSocketConnector,
)

ScriptEntry = InboundFrame | SlackError


def text_frame(text: str) -> InboundFrame:
    return InboundFrame(kind=FrameKind.TEXT, payload=text.encode("utf-8"))


def ping_frame(payload: bytes = b"") -> InboundFrame:
    return InboundFrame(kind=FrameKind.PING, payload=payload)


def close_frame() -> InboundFrame:
    return InboundFrame(kind=FrameKind.CLOSE, payload=b"")


class FakeWebSocketConnection(WebSocketConnection):
    """Connection that replays a script of inbound frames and records writes.

    Each script entry is either a frame returned by recv_frame or an error
    raised from it. Once the script is exhausted recv_frame raises
    TransportError, as a dropped connection would.
    """

    def __init__(self, script: list[ScriptEntry], *, fail_sends: bool = False) -> None:
        self._script: deque[ScriptEntry] = deque(script)
        self._fail_sends = fail_sends
        self._lock = threading.Lock()
        self._texts_sent: list[str] = []
        self._pongs_sent: list[bytes] = []
        self._close_sent = False
        self._closed = False

    def recv_frame(self) -> InboundFrame:
        if not self._script:
            raise TransportError("Fake connection script exhausted")
        entry = self._script.popleft()
        if isinstance(entry, SlackError):
            raise entry
        return entry

    def send_text(self, text: str) -> None:
        self._check_send()
        with self._lock:
            self._texts_sent.append(text)

    def send_pong(self, payload: bytes) -> None:
        self._check_send()
        with self._lock:
            self._pongs_sent.append(payload)

    def send_close(self) -> None:
        self._check_send()
        self._close_sent = True

    def close(self) -> None:
        self._closed = True

    def _check_send(self) -> None:
        if self._fail_sends:
            raise TransportError("Fake send failure")

    @property
    def texts_sent(self) -> list[str]:
        """Text frames written, in order."""
        with self._lock:
            return list(self._texts_sent)

    @property
    def pongs_sent(self) -> list[bytes]:
        with self._lock:
            return list(self._pongs_sent)

    @property
    def close_sent(self) -> bool:
        return self._close_sent

    @property
    def closed(self) -> bool:
        return self._closed


class FakeWebSocketConnector(WebSocketConnector):
    """Connector that hands out a FakeWebSocketConnection per connect() call.

    Example:
        >>> connector = FakeWebSocketConnector([text_frame('{"type": "hello"}'), close_frame()])
        >>> client = RtmClient("xoxb-token", http=http, connector=connector)
    """

    def __init__(
        self,
        script: list[ScriptEntry] | None = None,
        *,
        connect_error: SlackError | None = None,
        fail_sends: bool = False,
    ) -> None:
        self._script = list(script or [])
        self._connect_error = connect_error
        self._fail_sends = fail_sends
        self._connections: list[FakeWebSocketConnection] = []
        self._urls: list[str] = []
        self._read_timeouts: list[float] = []

    def connect(self, url: str, *, read_timeout: float) -> WebSocketConnection:
        self._urls.append(url)
        self._read_timeouts.append(read_timeout)
        if self._connect_error is not None:
            raise self._connect_error
        connection = FakeWebSocketConnection(self._script, fail_sends=self._fail_sends)
        self._connections.append(connection)
        return connection

    @property
    def connections(self) -> list[FakeWebSocketConnection]:
        return list(self._connections)

    @property
    def urls(self) -> list[str]:
        return list(self._urls)

    @property
    def read_timeouts(self) -> list[float]:
        return list(self._read_timeouts)
