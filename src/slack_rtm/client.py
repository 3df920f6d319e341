"""RtmClient, the entry point most applications use.

    client = RtmClient(token)
    session = client.login()
    print(client.get_channel_id("general"))
    client.run(session, MyHandler())

or, when nothing needs inspecting between the two steps:

    RtmClient(token).login_and_run(MyHandler())
"""

from slack_rtm.api import chat
from slack_rtm.api.common import CloseResponse, HistoryOptions, HistoryResponse
from slack_rtm.api.core import EmptyResponse
from slack_rtm.api.im import ImOpenResponse
from slack_rtm.api.rtm import SelfData
from slack_rtm.errors import InternalError
from slack_rtm.http.abc import HttpClient
from slack_rtm.http.real import UrllibHttpClient
from slack_rtm.rtm.handler import EventHandler
from slack_rtm.rtm.session import READ_TIMEOUT_SECONDS, Roster, RtmSession, login
from slack_rtm.rtm.transport.abc import WebSocketConnector
from slack_rtm.rtm.transport.real import SansIoConnector
from slack_rtm.types import Bot, Channel, Group, Im, Team, User


class RtmClient:
    """Owns a token and the most recent session created with it.

    Roster accessors return data cached at the last login (or refresh) and
    return None or empty lists before the first login. Outbound methods
    delegate to the current session and raise InternalError before login.

    Attributes:
        token: Bot or user token
        http: HTTP client handle; defaults to UrllibHttpClient
        connector: WebSocket connector; defaults to SansIoConnector
        read_timeout: Read deadline of the session's reader
    """

    def __init__(
        self,
        token: str,
        *,
        http: HttpClient | None = None,
        connector: WebSocketConnector | None = None,
        read_timeout: float = READ_TIMEOUT_SECONDS,
    ) -> None:
        self._token = token
        self._http = http if http is not None else UrllibHttpClient()
        self._connector = connector if connector is not None else SansIoConnector()
        self._read_timeout = read_timeout
        self._session: RtmSession | None = None

    def login(self) -> RtmSession:
        """Call rtm.start, cache the rosters and open the WebSocket."""
        self._session = login(
            self._token,
            http=self._http,
            connector=self._connector,
            read_timeout=self._read_timeout,
        )
        return self._session

    def run(self, session: RtmSession, handler: EventHandler) -> None:
        """Drive session until the server closes it; see RtmSession.run."""
        session.run(handler)

    def login_and_run(self, handler: EventHandler) -> None:
        self.run(self.login(), handler)

    @property
    def session(self) -> RtmSession:
        """The session created by the last login.

        Raises:
            InternalError: If login() has not been called
        """
        if self._session is None:
            raise InternalError("Need to login first")
        return self._session

    # Cached roster

    def _roster(self) -> Roster | None:
        if self._session is None:
            return None
        return self._session.roster

    def get_team(self) -> Team | None:
        roster = self._roster()
        return roster.team if roster is not None else None

    def get_self(self) -> SelfData | None:
        roster = self._roster()
        return roster.self_data if roster is not None else None

    def get_users(self) -> list[User]:
        roster = self._roster()
        return list(roster.users) if roster is not None else []

    def get_channels(self) -> list[Channel]:
        roster = self._roster()
        return list(roster.channels) if roster is not None else []

    def get_groups(self) -> list[Group]:
        roster = self._roster()
        return list(roster.groups) if roster is not None else []

    def get_start_ims(self) -> list[Im]:
        """IMs as of rtm.start; not refreshed afterwards."""
        roster = self._roster()
        return list(roster.ims) if roster is not None else []

    def get_bots(self) -> list[Bot]:
        roster = self._roster()
        return list(roster.bots) if roster is not None else []

    def get_user_id(self, user_name: str) -> str | None:
        roster = self._roster()
        return roster.user_ids.get(user_name) if roster is not None else None

    def get_channel_id(self, channel_name: str) -> str | None:
        """Look up a channel id by name, without the leading "#"."""
        roster = self._roster()
        return roster.channel_ids.get(channel_name) if roster is not None else None

    def get_group_id(self, group_name: str) -> str | None:
        roster = self._roster()
        return roster.group_ids.get(group_name) if roster is not None else None

    # Outbound, delegated to the current session

    def get_msg_uid(self) -> int:
        return self.session.get_msg_uid()

    def send(self, raw: str) -> None:
        self.session.send(raw)

    def send_message(self, channel: str, text: str) -> int:
        return self.session.send_message(channel, text)

    def send_typing(self, channel: str) -> int:
        return self.session.send_typing(channel)

    def post_message(
        self, channel: str, text: str, *, options: chat.PostMessageOptions | None = None
    ) -> chat.PostMessageResponse:
        return self.session.post_message(channel, text, options=options)

    def update_message(
        self, ts: str, channel: str, text: str, *, options: chat.UpdateOptions | None = None
    ) -> chat.UpdateResponse:
        return self.session.update_message(ts, channel, text, options=options)

    def delete_message(self, ts: str, channel: str) -> chat.DeleteResponse:
        return self.session.delete_message(ts, channel)

    def mark(self, channel: str, ts: str) -> EmptyResponse:
        return self.session.mark(channel, ts)

    def set_topic(self, channel: str, topic: str) -> str:
        return self.session.set_topic(channel, topic)

    def set_purpose(self, channel: str, purpose: str) -> str:
        return self.session.set_purpose(channel, purpose)

    def add_reaction_timestamp(self, emoji_name: str, channel: str, timestamp: str) -> None:
        self.session.add_reaction_timestamp(emoji_name, channel, timestamp)

    def add_reaction_file(self, emoji_name: str, file: str) -> None:
        self.session.add_reaction_file(emoji_name, file)

    def add_reaction_file_comment(self, emoji_name: str, file_comment: str) -> None:
        self.session.add_reaction_file_comment(emoji_name, file_comment)

    def im_open(self, user: str) -> ImOpenResponse:
        return self.session.im_open(user)

    def im_close(self, channel: str) -> CloseResponse:
        return self.session.im_close(channel)

    def im_history(self, channel: str, *, options: HistoryOptions | None = None) -> HistoryResponse:
        return self.session.im_history(channel, options=options)

    def im_list(self) -> list[Im]:
        return self.session.im_list()

    def im_mark(self, channel: str, ts: str) -> EmptyResponse:
        return self.session.im_mark(channel, ts)

    def channels_history(
        self, channel: str, *, options: HistoryOptions | None = None
    ) -> HistoryResponse:
        return self.session.channels_history(channel, options=options)

    def list_users(self) -> list[User]:
        return self.session.list_users()

    def list_channels(self) -> list[Channel]:
        return self.session.list_channels()

    def list_groups(self) -> list[Group]:
        return self.session.list_groups()

    def update_users(self) -> list[User]:
        return self.session.update_users()

    def update_channels(self) -> list[Channel]:
        return self.session.update_channels()

    def update_groups(self) -> list[Group]:
        return self.session.update_groups()
