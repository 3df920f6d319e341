"""RTM event taxonomy.

Every server frame is a JSON object discriminated by its `type` field. Two
synthetic variants cover acknowledgements of client sends, which carry no
`type` but do carry `ok` and `reply_to`:

    {"ok": true, "reply_to": 1, "ts": "...", "text": "..."}  -> MessageSent
    {"ok": false, "reply_to": 1, "error": {...}}             -> MessageError
"""

import json
from typing import Any, ClassVar

from pydantic import ValidationError

from slack_rtm.errors import JsonDecodeError, JsonParseError
from slack_rtm.messages import (
    Message,
    NestedItem,
    NestedStarredItem,
    decode_message,
    decode_tagged,
)
from slack_rtm.types import Bot, Comment, File, SlackModel, User


class Event(SlackModel):
    """Base class of every RTM event."""

    TYPE: ClassVar[str]


class ConversationRef(SlackModel):
    """Channel, group or IM record as embedded in events.

    Event payloads carry a subset of the full channel record, so everything
    except the id is optional here.
    """

    id: str
    name: str | None = None
    created: int | None = None
    creator: str | None = None
    user: str | None = None
    is_channel: bool | None = None
    is_group: bool | None = None
    is_im: bool | None = None
    is_archived: bool | None = None
    members: list[str] | None = None


class Hello(Event):
    TYPE: ClassVar[str] = "hello"


class MessageEvent(Event):
    """A `message` frame; the whole frame is decoded as a Message."""

    TYPE: ClassVar[str] = "message"

    message: Message


class UserTyping(Event):
    TYPE: ClassVar[str] = "user_typing"

    channel: str
    user: str


class _Marked(Event):
    channel: str
    ts: str


class _HistoryChanged(Event):
    latest: str
    ts: str
    event_ts: str


class _ConversationEvent(Event):
    channel: ConversationRef


class _ConversationId(Event):
    channel: str


class _UserConversation(Event):
    user: str
    channel: str


class ChannelMarked(_Marked):
    TYPE: ClassVar[str] = "channel_marked"


class ChannelCreated(_ConversationEvent):
    TYPE: ClassVar[str] = "channel_created"


class ChannelJoined(_ConversationEvent):
    TYPE: ClassVar[str] = "channel_joined"


class ChannelLeft(_ConversationId):
    TYPE: ClassVar[str] = "channel_left"


class ChannelDeleted(_ConversationId):
    TYPE: ClassVar[str] = "channel_deleted"


class ChannelRename(_ConversationEvent):
    TYPE: ClassVar[str] = "channel_rename"


class ChannelArchive(_UserConversation):
    TYPE: ClassVar[str] = "channel_archive"


class ChannelUnarchive(_UserConversation):
    TYPE: ClassVar[str] = "channel_unarchive"


class ChannelHistoryChanged(_HistoryChanged):
    TYPE: ClassVar[str] = "channel_history_changed"


class ImCreated(Event):
    TYPE: ClassVar[str] = "im_created"

    user: str
    channel: ConversationRef


class ImOpen(_UserConversation):
    TYPE: ClassVar[str] = "im_open"


class ImClose(_UserConversation):
    TYPE: ClassVar[str] = "im_close"


class ImMarked(_Marked):
    TYPE: ClassVar[str] = "im_marked"


class ImHistoryChanged(_HistoryChanged):
    TYPE: ClassVar[str] = "im_history_changed"


class GroupJoined(_ConversationEvent):
    TYPE: ClassVar[str] = "group_joined"


class GroupLeft(_ConversationEvent):
    TYPE: ClassVar[str] = "group_left"


class GroupOpen(_UserConversation):
    TYPE: ClassVar[str] = "group_open"


class GroupClose(_UserConversation):
    TYPE: ClassVar[str] = "group_close"


class GroupArchive(_ConversationId):
    TYPE: ClassVar[str] = "group_archive"


class GroupUnarchive(_ConversationId):
    TYPE: ClassVar[str] = "group_unarchive"


class GroupRename(_ConversationEvent):
    TYPE: ClassVar[str] = "group_rename"


class GroupMarked(_Marked):
    TYPE: ClassVar[str] = "group_marked"


class GroupHistoryChanged(_HistoryChanged):
    TYPE: ClassVar[str] = "group_history_changed"


class _FileEvent(Event):
    file: File


class FileCreated(_FileEvent):
    TYPE: ClassVar[str] = "file_created"


class FileShared(_FileEvent):
    TYPE: ClassVar[str] = "file_shared"


class FileUnshared(_FileEvent):
    TYPE: ClassVar[str] = "file_unshared"


class FilePublic(_FileEvent):
    TYPE: ClassVar[str] = "file_public"


class FilePrivate(Event):
    TYPE: ClassVar[str] = "file_private"

    file: str


class FileChange(_FileEvent):
    TYPE: ClassVar[str] = "file_change"


class FileDeleted(Event):
    TYPE: ClassVar[str] = "file_deleted"

    file_id: str
    event_ts: str


class FileCommentAdded(_FileEvent):
    TYPE: ClassVar[str] = "file_comment_added"

    comment: Comment


class FileCommentEdited(_FileEvent):
    TYPE: ClassVar[str] = "file_comment_edited"

    comment: Comment


class FileCommentDeleted(_FileEvent):
    """`comment` is the id of the deleted comment."""

    TYPE: ClassVar[str] = "file_comment_deleted"

    comment: str


class PinAdded(Event):
    TYPE: ClassVar[str] = "pin_added"

    user: str
    channel_id: str
    item: NestedItem = None
    event_ts: str


class PinRemoved(Event):
    TYPE: ClassVar[str] = "pin_removed"

    user: str
    channel_id: str
    item: NestedItem = None
    has_pins: bool
    event_ts: str


class PresenceChange(Event):
    TYPE: ClassVar[str] = "presence_change"

    user: str
    presence: str


class ManualPresenceChange(Event):
    TYPE: ClassVar[str] = "manual_presence_change"

    presence: str


class PrefChange(Event):
    TYPE: ClassVar[str] = "pref_change"

    name: str
    value: Any


class UserChange(Event):
    TYPE: ClassVar[str] = "user_change"

    user: User


class TeamJoin(Event):
    TYPE: ClassVar[str] = "team_join"

    user: User


class _StarEvent(Event):
    user: str
    item: NestedStarredItem
    event_ts: str


class StarAdded(_StarEvent):
    TYPE: ClassVar[str] = "star_added"


class StarRemoved(_StarEvent):
    TYPE: ClassVar[str] = "star_removed"


class _ReactionEvent(Event):
    user: str
    reaction: str
    item: NestedItem = None
    item_user: str | None = None
    event_ts: str


class ReactionAdded(_ReactionEvent):
    TYPE: ClassVar[str] = "reaction_added"


class ReactionRemoved(_ReactionEvent):
    TYPE: ClassVar[str] = "reaction_removed"


class EmojiChanged(Event):
    TYPE: ClassVar[str] = "emoji_changed"

    event_ts: str


class CommandsChanged(Event):
    TYPE: ClassVar[str] = "commands_changed"

    event_ts: str


class TeamPlanChange(Event):
    TYPE: ClassVar[str] = "team_plan_change"

    plan: str


class TeamPrefChange(Event):
    TYPE: ClassVar[str] = "team_pref_change"

    name: str
    value: Any


class TeamRename(Event):
    TYPE: ClassVar[str] = "team_rename"

    name: str


class TeamDomainChange(Event):
    TYPE: ClassVar[str] = "team_domain_change"

    url: str
    domain: str


class EmailDomainChanged(Event):
    TYPE: ClassVar[str] = "email_domain_changed"

    email_domain: str
    event_ts: str


class BotAdded(Event):
    TYPE: ClassVar[str] = "bot_added"

    bot: Bot


class BotChanged(Event):
    TYPE: ClassVar[str] = "bot_changed"

    bot: Bot


class AccountsChanged(Event):
    TYPE: ClassVar[str] = "accounts_changed"


class TeamMigrationStarted(Event):
    TYPE: ClassVar[str] = "team_migration_started"


class ReconnectUrl(Event):
    TYPE: ClassVar[str] = "reconnect_url"

    url: str | None = None


class MessageSent(Event):
    """Server acknowledgement of a successful send; `reply_to` is the send's id."""

    TYPE: ClassVar[str] = "message_sent"

    reply_to: int
    ts: str
    text: str


class AckError(SlackModel):
    code: int
    msg: str


class MessageError(Event):
    """Server rejection of a send; `reply_to` is the send's id."""

    TYPE: ClassVar[str] = "message_error"

    reply_to: int
    error: AckError


EVENT_TYPES: dict[str, type[SlackModel]] = {
    cls.TYPE: cls
    for cls in (
        Hello,
        UserTyping,
        ChannelMarked,
        ChannelCreated,
        ChannelJoined,
        ChannelLeft,
        ChannelDeleted,
        ChannelRename,
        ChannelArchive,
        ChannelUnarchive,
        ChannelHistoryChanged,
        ImCreated,
        ImOpen,
        ImClose,
        ImMarked,
        ImHistoryChanged,
        GroupJoined,
        GroupLeft,
        GroupOpen,
        GroupClose,
        GroupArchive,
        GroupUnarchive,
        GroupRename,
        GroupMarked,
        GroupHistoryChanged,
        FileCreated,
        FileShared,
        FileUnshared,
        FilePublic,
        FilePrivate,
        FileChange,
        FileDeleted,
        FileCommentAdded,
        FileCommentEdited,
        FileCommentDeleted,
        PinAdded,
        PinRemoved,
        PresenceChange,
        ManualPresenceChange,
        PrefChange,
        UserChange,
        TeamJoin,
        StarAdded,
        StarRemoved,
        ReactionAdded,
        ReactionRemoved,
        EmojiChanged,
        CommandsChanged,
        TeamPlanChange,
        TeamPrefChange,
        TeamRename,
        TeamDomainChange,
        EmailDomainChanged,
        BotAdded,
        BotChanged,
        AccountsChanged,
        TeamMigrationStarted,
        ReconnectUrl,
    )
}


def _is_ack(obj: dict[str, Any]) -> bool:
    return obj.get("type") is None and "ok" in obj and "reply_to" in obj


def _decode_ack(obj: dict[str, Any]) -> Event:
    ok = obj["ok"]
    if ok is True:
        model: type[Event] = MessageSent
    elif ok is False:
        model = MessageError
    else:
        raise JsonDecodeError(f"Acknowledgement field 'ok' must be a boolean, got {ok!r}")
    try:
        return model.model_validate(obj)
    except ValidationError as e:
        raise JsonDecodeError(f"Invalid acknowledgement: {e}") from e


def decode_event(obj: object) -> Event:
    """Decode a parsed RTM frame into an Event.

    Raises:
        JsonDecodeError: On an unknown `type` or `subtype`, a missing `type` on
            a frame that is not an acknowledgement, or missing required fields
    """
    if isinstance(obj, dict):
        if _is_ack(obj):
            return _decode_ack(obj)
        if obj.get("type") == MessageEvent.TYPE:
            return MessageEvent(message=decode_message(obj))

    event = decode_tagged(obj, key="type", table=EVENT_TYPES, default=None, kind="event")
    assert isinstance(event, Event)
    return event


def parse_event(text: str) -> Event:
    """Parse a text frame and decode it into an Event.

    Raises:
        JsonParseError: If text is not valid JSON
        JsonDecodeError: If the JSON is not a recognised event
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(f"Frame is not valid JSON: {e}") from e
    return decode_event(obj)
