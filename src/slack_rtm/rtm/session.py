"""Real-Time Messaging session engine.

login() performs the handshake: it calls rtm.start, snapshots the rosters
it returns and opens the WebSocket. RtmSession.run() then drives two
workers until the connection ends:

- the reader, on the calling thread, reads frames under a 70 second
  deadline and dispatches them to the handler;
- the writer, on a dedicated thread, drains the outbound queue onto the
  socket, so pongs go out promptly however long the handler takes.

Every exit path (server close, read error, handler exception) enqueues a
Close for the writer, joins it and closes the socket before run() returns.
"""

import json
import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum
from queue import Queue
from types import ModuleType
from typing import Protocol

from slack_rtm.api import channels, chat, groups, im, reactions, rtm, users
from slack_rtm.api.common import CloseResponse, HistoryOptions, HistoryResponse, ItemTarget
from slack_rtm.api.core import EmptyResponse
from slack_rtm.api.rtm import SelfData, StartResponse
from slack_rtm.errors import (
    InternalError,
    JsonDecodeError,
    JsonParseError,
    SlackError,
    Utf8Error,
)
from slack_rtm.events import parse_event
from slack_rtm.http.abc import HttpClient
from slack_rtm.rtm.handler import EventHandler
from slack_rtm.rtm.transport.abc import FrameKind, WebSocketConnection, WebSocketConnector
from slack_rtm.types import Bot, Channel, Group, Im, Team, User

logger = logging.getLogger(__name__)

# Slack pings every 30 seconds; two missed pings mean the peer is gone.
READ_TIMEOUT_SECONDS = 70.0


class SessionState(Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DRAINING = "draining"
    CLOSED = "closed"


@dataclass(frozen=True)
class OutboundText:
    text: str


@dataclass(frozen=True)
class OutboundPong:
    payload: bytes


@dataclass(frozen=True)
class OutboundClose:
    pass


Outbound = OutboundText | OutboundPong | OutboundClose


class _Named(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...


def index_by_name(records: Sequence[_Named]) -> dict[str, str]:
    """Map name to id. On duplicate names the last record wins."""
    return {record.name: record.id for record in records}


@dataclass(frozen=True)
class Roster:
    """Snapshot of the team taken at handshake, updated only by explicit refreshes.

    Live events such as channel_created or user_change are not applied here.

    Attributes:
        team: The team
        self_data: The authenticated user or bot
        users: All users
        channels: Public channels
        groups: Private channels visible to the caller
        ims: Open direct-message conversations
        bots: Bots on the team
        user_ids: User name to id
        channel_ids: Channel name to id
        group_ids: Group name to id
    """

    team: Team
    self_data: SelfData
    users: list[User]
    channels: list[Channel]
    groups: list[Group]
    ims: list[Im]
    bots: list[Bot]
    user_ids: dict[str, str]
    channel_ids: dict[str, str]
    group_ids: dict[str, str]

    @classmethod
    def from_start(cls, start: StartResponse) -> "Roster":
        return cls(
            team=start.team,
            self_data=start.self_data,
            users=list(start.users),
            channels=list(start.channels),
            groups=list(start.groups),
            ims=list(start.ims),
            bots=list(start.bots),
            user_ids=index_by_name(start.users),
            channel_ids=index_by_name(start.channels),
            group_ids=index_by_name(start.groups),
        )


def login(
    token: str,
    *,
    http: HttpClient,
    connector: WebSocketConnector,
    read_timeout: float = READ_TIMEOUT_SECONDS,
) -> "RtmSession":
    """Perform the RTM handshake.

    Args:
        token: Bot or user token
        http: HTTP client handle for Web API calls
        connector: Opens the WebSocket
        read_timeout: Read deadline of the session's reader

    Returns:
        A connected session, ready for run()

    Raises:
        SlackError: Any error from rtm.start or from opening the WebSocket
    """
    start = rtm.start(http, token)
    logger.info(
        "rtm.start succeeded for team %s as %s", start.team.domain, start.self_data.name
    )
    connection = connector.connect(start.url, read_timeout=read_timeout)
    logger.info("RTM WebSocket connected")
    return RtmSession(
        token=token, http=http, roster=Roster.from_start(start), connection=connection
    )


class RtmSession:
    """A connected RTM session.

    Created by login(), consumed by run(). Outbound methods may be called
    from the handler or from any other thread while the session is
    connecting or connected.
    """

    def __init__(
        self,
        *,
        token: str,
        http: HttpClient,
        roster: Roster,
        connection: WebSocketConnection,
    ) -> None:
        self._token = token
        self._http = http
        self._roster = roster
        self._connection = connection
        self._outbound: Queue[Outbound] = Queue()
        self._lock = threading.Lock()
        self._last_uid = 0
        self._state = SessionState.CONNECTING
        self._writer: threading.Thread | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def roster(self) -> Roster:
        return self._roster

    # Reader side

    def run(self, handler: EventHandler) -> None:
        """Dispatch events to handler until the connection ends.

        Returns normally when the server closes the connection.

        Raises:
            InternalError: If the session was already run
            TransportError: On a read error or when the read deadline expires
            Utf8Error: If a text frame is not valid UTF-8
        """
        if self._state is not SessionState.CONNECTING:
            raise InternalError(f"Session cannot be run while {self._state.value}")

        try:
            handler.on_connect(self)
            self._set_state(SessionState.CONNECTED)
            self._writer = threading.Thread(
                target=self._write_loop, name="slack-rtm-writer", daemon=True
            )
            self._writer.start()
            self._read_loop(handler)
            logger.info("RTM session closed by server")
        finally:
            self._teardown()

    def _read_loop(self, handler: EventHandler) -> None:
        while True:
            frame = self._connection.recv_frame()

            if frame.kind is FrameKind.TEXT:
                try:
                    raw = frame.payload.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise Utf8Error(f"Text frame is not valid UTF-8: {e}") from e
                try:
                    event = parse_event(raw)
                except (JsonParseError, JsonDecodeError) as e:
                    logger.warning("Could not decode RTM frame: %s", e)
                    handler.on_event(self, e, raw)
                else:
                    handler.on_event(self, event, raw)
            elif frame.kind is FrameKind.PING:
                handler.on_ping(self)
                self._outbound.put(OutboundPong(frame.payload))
            elif frame.kind is FrameKind.CLOSE:
                self._set_state(SessionState.DRAINING)
                handler.on_close(self)
                return
            elif frame.kind is FrameKind.BINARY:
                logger.debug("Ignoring binary frame of %d bytes", len(frame.payload))

    def _teardown(self) -> None:
        self._set_state(SessionState.DRAINING)
        if self._writer is not None:
            self._outbound.put(OutboundClose())
            self._writer.join()
        self._connection.close()
        self._set_state(SessionState.CLOSED)

    def _set_state(self, state: SessionState) -> None:
        with self._lock:
            self._state = state

    # Writer side

    def _write_loop(self) -> None:
        while True:
            envelope = self._outbound.get()
            try:
                if isinstance(envelope, OutboundText):
                    self._connection.send_text(envelope.text)
                elif isinstance(envelope, OutboundPong):
                    self._connection.send_pong(envelope.payload)
                else:
                    self._connection.send_close()
                    return
            except SlackError as e:
                # Nothing drains the queue from here on, so further sends must fail.
                self._set_state(SessionState.DRAINING)
                logger.warning("RTM writer stopped after a send failure: %s", e)
                return

    # Outbound API

    def get_msg_uid(self) -> int:
        """Allocate the next message id. Ids start at 1 and strictly increase."""
        with self._lock:
            return self._allocate_uid()

    def _allocate_uid(self) -> int:
        # Caller holds self._lock.
        self._last_uid += 1
        return self._last_uid

    def send(self, raw: str) -> None:
        """Queue raw JSON text for the socket.

        The caller is responsible for valid JSON and for an `id` obtained
        from get_msg_uid().

        Raises:
            InternalError: If the session is draining or closed
        """
        with self._lock:
            self._check_open()
            self._outbound.put(OutboundText(raw))

    def send_message(self, channel: str, text: str) -> int:
        """Queue a chat message for the socket.

        Args:
            channel: Channel id, or "#name" resolved through the roster
            text: Message text

        Returns:
            The id of the envelope; the server's ack carries it as `reply_to`

        Raises:
            InternalError: If a "#name" is unknown or the session is not open
        """
        channel_id = self.resolve_channel(channel)
        with self._lock:
            self._check_open()
            uid = self._allocate_uid()
            self._outbound.put(
                OutboundText(
                    f'{{"id": {uid},"type": "message", "channel": {json.dumps(channel_id)},'
                    f'"text": {json.dumps(text)}}}'
                )
            )
        return uid

    def send_typing(self, channel: str) -> int:
        """Queue a typing indicator for channel. Returns the envelope id."""
        channel_id = self.resolve_channel(channel)
        with self._lock:
            self._check_open()
            uid = self._allocate_uid()
            self._outbound.put(
                OutboundText(
                    f'{{"id": {uid}, "type": "typing", "channel": {json.dumps(channel_id)}}}'
                )
            )
        return uid

    def resolve_channel(self, channel: str) -> str:
        """Turn "#name" into an id via the channel map, then the group map.

        Anything not starting with "#" is returned unchanged.

        Raises:
            InternalError: If the name is in neither map
        """
        if not channel.startswith("#"):
            return channel
        name = channel[1:]
        roster = self._roster
        channel_id = roster.channel_ids.get(name) or roster.group_ids.get(name)
        if channel_id is None:
            raise InternalError(f"Unknown channel {channel}")
        return channel_id

    def _check_open(self) -> None:
        # Caller holds self._lock.
        if self._state in (SessionState.DRAINING, SessionState.CLOSED):
            raise InternalError(f"Cannot send on a session that is {self._state.value}")

    # Web API helpers

    def post_message(
        self, channel: str, text: str, *, options: chat.PostMessageOptions | None = None
    ) -> chat.PostMessageResponse:
        return chat.post_message(
            self._http, self._token, self.resolve_channel(channel), text, options=options
        )

    def update_message(
        self,
        ts: str,
        channel: str,
        text: str,
        *,
        options: chat.UpdateOptions | None = None,
    ) -> chat.UpdateResponse:
        return chat.update(
            self._http, self._token, ts, self.resolve_channel(channel), text, options=options
        )

    def delete_message(self, ts: str, channel: str) -> chat.DeleteResponse:
        return chat.delete(self._http, self._token, ts, self.resolve_channel(channel))

    def mark(self, channel: str, ts: str) -> EmptyResponse:
        channel_id = self.resolve_channel(channel)
        return self._methods_for(channel_id).mark(self._http, self._token, channel_id, ts)

    def set_topic(self, channel: str, topic: str) -> str:
        """Set a channel or group topic and return the topic as stored."""
        channel_id = self.resolve_channel(channel)
        response = self._methods_for(channel_id).set_topic(
            self._http, self._token, channel_id, topic
        )
        return response.topic

    def set_purpose(self, channel: str, purpose: str) -> str:
        channel_id = self.resolve_channel(channel)
        response = self._methods_for(channel_id).set_purpose(
            self._http, self._token, channel_id, purpose
        )
        return response.purpose

    def _methods_for(self, channel_id: str) -> ModuleType:
        """groups.* for an id in the group roster, channels.* otherwise."""
        if channel_id in self._roster.group_ids.values():
            return groups
        return channels

    def add_reaction_timestamp(self, emoji_name: str, channel: str, timestamp: str) -> None:
        """React to the message posted at timestamp in channel."""
        target = ItemTarget(channel=self.resolve_channel(channel), timestamp=timestamp)
        reactions.add(self._http, self._token, emoji_name, target)

    def add_reaction_file(self, emoji_name: str, file: str) -> None:
        reactions.add(self._http, self._token, emoji_name, ItemTarget(file=file))

    def add_reaction_file_comment(self, emoji_name: str, file_comment: str) -> None:
        reactions.add(self._http, self._token, emoji_name, ItemTarget(file_comment=file_comment))

    def im_open(self, user: str) -> im.ImOpenResponse:
        return im.open(self._http, self._token, user)

    def im_close(self, channel: str) -> CloseResponse:
        return im.close(self._http, self._token, channel)

    def im_history(self, channel: str, *, options: HistoryOptions | None = None) -> HistoryResponse:
        return im.history(self._http, self._token, channel, options=options)

    def im_list(self) -> list[Im]:
        return im.list_ims(self._http, self._token).ims

    def im_mark(self, channel: str, ts: str) -> EmptyResponse:
        return im.mark(self._http, self._token, channel, ts)

    def channels_history(
        self, channel: str, *, options: HistoryOptions | None = None
    ) -> HistoryResponse:
        return channels.history(
            self._http, self._token, self.resolve_channel(channel), options=options
        )

    # Roster refreshers. Each fetches over the Web API, never the socket,
    # and swaps in a new snapshot with rebuilt name maps under the lock.

    def list_users(self) -> list[User]:
        """Fetch the users and refresh the cached snapshot with them."""
        return self.update_users()

    def list_channels(self) -> list[Channel]:
        return self.update_channels()

    def list_groups(self) -> list[Group]:
        return self.update_groups()

    def update_users(self) -> list[User]:
        fresh = users.list_users(self._http, self._token).members
        with self._lock:
            self._roster = replace(self._roster, users=fresh, user_ids=index_by_name(fresh))
        return fresh

    def update_channels(self) -> list[Channel]:
        fresh = channels.list_channels(self._http, self._token).channels
        with self._lock:
            self._roster = replace(
                self._roster, channels=fresh, channel_ids=index_by_name(fresh)
            )
        return fresh

    def update_groups(self) -> list[Group]:
        fresh = groups.list_groups(self._http, self._token).groups
        with self._lock:
            self._roster = replace(self._roster, groups=fresh, group_ids=index_by_name(fresh))
        return fresh
