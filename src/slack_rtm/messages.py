"""Message and item taxonomy.

A message is discriminated by its optional `subtype` field (absent means a
standard chat message). Pinned, starred and reacted-to items are
discriminated by an inner `type` field. Both are decoded through lookup
tables mapping the wire tag to a model class; an unknown tag is a
JsonDecodeError carrying the offending string.
"""

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ValidationError

from slack_rtm.errors import JsonDecodeError
from slack_rtm.types import Attachment, Comment, File, Reaction, SlackModel


def decode_tagged(
    obj: object,
    *,
    key: str,
    table: dict[str, type[SlackModel]],
    default: type[SlackModel] | None,
    kind: str,
) -> SlackModel:
    """Decode a JSON object into the model selected by its tag field.

    Args:
        obj: The parsed JSON value
        key: Name of the discriminator field
        table: Mapping of tag value to model class
        default: Model to use when the tag is absent or null, None if the tag
            is required
        kind: Human-readable name of the union, used in error messages

    Returns:
        An instance of the selected model

    Raises:
        JsonDecodeError: If obj is not an object, the tag is missing and there
            is no default, the tag is unknown, or the fields do not validate
    """
    if not isinstance(obj, dict):
        raise JsonDecodeError(f"{kind} must be a JSON object, got {type(obj).__name__}")

    tag = obj.get(key)
    if tag is None:
        if default is None:
            raise JsonDecodeError(f"{kind} is missing required field {key!r}")
        model = default
    elif not isinstance(tag, str):
        raise JsonDecodeError(f"{kind} field {key!r} must be a string, got {tag!r}")
    else:
        found = table.get(tag)
        if found is None:
            raise JsonDecodeError(f"Unknown {kind} {key}: {tag}", tag=tag)
        model = found

    try:
        return model.model_validate(obj)
    except ValidationError as e:
        raise JsonDecodeError(f"Invalid {kind} {tag or model.__name__}: {e}", tag=tag) from e


class Message(SlackModel):
    """Base class of every message variant."""

    SUBTYPE: ClassVar[str | None] = None


class Item(SlackModel):
    """Base class of pinned, reacted-to and starred items."""

    TYPE: ClassVar[str]


def _nested_message(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value
    return decode_message(value)


def _nested_item(value: Any) -> Any:
    if value is None or isinstance(value, BaseModel):
        return value
    return decode_item(value)


NestedMessage = Annotated[Message, BeforeValidator(_nested_message)]
NestedItem = Annotated[Item | None, BeforeValidator(_nested_item)]


class Edited(SlackModel):
    user: str
    ts: str


class StandardMessage(Message):
    """A plain chat message."""

    ts: str
    channel: str | None = None
    user: str | None = None
    text: str | None = None
    is_starred: bool | None = None
    pinned_to: list[str] | None = None
    reactions: list[Reaction] | None = None
    edited: Edited | None = None
    attachments: list[Attachment] | None = None


class BotMessage(Message):
    SUBTYPE: ClassVar[str | None] = "bot_message"

    ts: str
    text: str
    bot_id: str
    username: str | None = None
    icons: dict[str, str] | None = None


class MeMessage(Message):
    SUBTYPE: ClassVar[str | None] = "me_message"

    channel: str
    user: str
    text: str
    ts: str


class MessageChanged(Message):
    """An edit notification carrying the message as it now reads."""

    SUBTYPE: ClassVar[str | None] = "message_changed"

    hidden: bool
    channel: str
    ts: str
    message: NestedMessage


class MessageDeleted(Message):
    SUBTYPE: ClassVar[str | None] = "message_deleted"

    hidden: bool
    channel: str
    ts: str
    deleted_ts: str


class _MemberJoined(Message):
    ts: str
    user: str
    text: str
    inviter: str | None = None


class _MemberLeft(Message):
    ts: str
    user: str
    text: str


class _TopicSet(Message):
    ts: str
    user: str
    topic: str
    text: str


class _PurposeSet(Message):
    ts: str
    user: str
    purpose: str
    text: str


class _Renamed(Message):
    ts: str
    user: str
    old_name: str
    name: str
    text: str


class _Archived(Message):
    ts: str
    text: str
    user: str
    members: list[str]


class _Unarchived(Message):
    ts: str
    text: str
    user: str


class ChannelJoinMessage(_MemberJoined):
    SUBTYPE: ClassVar[str | None] = "channel_join"


class ChannelLeaveMessage(_MemberLeft):
    SUBTYPE: ClassVar[str | None] = "channel_leave"


class ChannelTopicMessage(_TopicSet):
    SUBTYPE: ClassVar[str | None] = "channel_topic"


class ChannelPurposeMessage(_PurposeSet):
    SUBTYPE: ClassVar[str | None] = "channel_purpose"


class ChannelNameMessage(_Renamed):
    SUBTYPE: ClassVar[str | None] = "channel_name"


class ChannelArchiveMessage(_Archived):
    SUBTYPE: ClassVar[str | None] = "channel_archive"


class ChannelUnarchiveMessage(_Unarchived):
    SUBTYPE: ClassVar[str | None] = "channel_unarchive"


class GroupJoinMessage(_MemberJoined):
    SUBTYPE: ClassVar[str | None] = "group_join"


class GroupLeaveMessage(_MemberLeft):
    SUBTYPE: ClassVar[str | None] = "group_leave"


class GroupTopicMessage(_TopicSet):
    SUBTYPE: ClassVar[str | None] = "group_topic"


class GroupPurposeMessage(_PurposeSet):
    SUBTYPE: ClassVar[str | None] = "group_purpose"


class GroupNameMessage(_Renamed):
    SUBTYPE: ClassVar[str | None] = "group_name"


class GroupArchiveMessage(_Archived):
    SUBTYPE: ClassVar[str | None] = "group_archive"


class GroupUnarchiveMessage(_Unarchived):
    SUBTYPE: ClassVar[str | None] = "group_unarchive"


class FileShareMessage(Message):
    SUBTYPE: ClassVar[str | None] = "file_share"

    ts: str
    text: str
    file: File
    user: str
    upload: bool


class FileCommentMessage(Message):
    SUBTYPE: ClassVar[str | None] = "file_comment"

    ts: str
    text: str
    file: File
    comment: Comment


class FileMentionMessage(Message):
    SUBTYPE: ClassVar[str | None] = "file_mention"

    ts: str
    text: str
    file: File
    user: str


class _PinChange(Message):
    user: str
    item_type: str
    text: str
    item: NestedItem = None
    channel: str
    ts: str
    attachments: list[Attachment] | None = None


class PinnedItemMessage(_PinChange):
    """Pin notification. `item` is absent for attachment-only pins."""

    SUBTYPE: ClassVar[str | None] = "pinned_item"


class UnpinnedItemMessage(_PinChange):
    SUBTYPE: ClassVar[str | None] = "unpinned_item"


MESSAGE_SUBTYPES: dict[str, type[SlackModel]] = {
    cls.SUBTYPE: cls
    for cls in (
        BotMessage,
        MeMessage,
        MessageChanged,
        MessageDeleted,
        ChannelJoinMessage,
        ChannelLeaveMessage,
        ChannelTopicMessage,
        ChannelPurposeMessage,
        ChannelNameMessage,
        ChannelArchiveMessage,
        ChannelUnarchiveMessage,
        GroupJoinMessage,
        GroupLeaveMessage,
        GroupTopicMessage,
        GroupPurposeMessage,
        GroupNameMessage,
        GroupArchiveMessage,
        GroupUnarchiveMessage,
        FileShareMessage,
        FileCommentMessage,
        FileMentionMessage,
        PinnedItemMessage,
        UnpinnedItemMessage,
    )
    if cls.SUBTYPE is not None
}


def decode_message(obj: object) -> Message:
    """Decode a message object, dispatching on `subtype`.

    Raises:
        JsonDecodeError: On an unknown subtype or missing required fields
    """
    message = decode_tagged(
        obj,
        key="subtype",
        table=MESSAGE_SUBTYPES,
        default=StandardMessage,
        kind="message",
    )
    assert isinstance(message, Message)
    return message


class MessageItem(Item):
    """A message item.

    Pins and stars carry the full message; reaction events only carry the
    channel and the `ts` of the message reacted to.
    """

    TYPE: ClassVar[str] = "message"

    channel: str
    message: NestedMessage | None = None
    ts: str | None = None


class FileItem(Item):
    TYPE: ClassVar[str] = "file"

    file: File


class FileCommentItem(Item):
    TYPE: ClassVar[str] = "file_comment"

    file: File
    comment: Comment


class ChannelStarredItem(Item):
    TYPE: ClassVar[str] = "channel"

    channel: str


class GroupStarredItem(Item):
    TYPE: ClassVar[str] = "group"

    group: str


class ImStarredItem(Item):
    TYPE: ClassVar[str] = "im"

    channel: str


ITEM_TYPES: dict[str, type[SlackModel]] = {
    cls.TYPE: cls for cls in (MessageItem, FileItem, FileCommentItem)
}

STARRED_ITEM_TYPES: dict[str, type[SlackModel]] = {
    **ITEM_TYPES,
    **{cls.TYPE: cls for cls in (ChannelStarredItem, GroupStarredItem, ImStarredItem)},
}


def decode_item(obj: object) -> Item:
    """Decode a pinned or reacted-to item, dispatching on `type`."""
    item = decode_tagged(obj, key="type", table=ITEM_TYPES, default=None, kind="item")
    assert isinstance(item, Item)
    return item


def decode_starred_item(obj: object) -> Item:
    """Decode a starred item; unlike decode_item this accepts channel, group and im."""
    item = decode_tagged(
        obj, key="type", table=STARRED_ITEM_TYPES, default=None, kind="starred item"
    )
    assert isinstance(item, Item)
    return item


def _nested_starred_item(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value
    return decode_starred_item(value)


NestedStarredItem = Annotated[Item, BeforeValidator(_nested_starred_item)]
