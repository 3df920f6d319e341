"""Table tests decoding one wire document per event, message and item variant.

Every document carries a key Slack does not document today, so each row also
checks that unknown keys are ignored rather than rejected.
"""

import json
from typing import Any

import pytest

from slack_rtm.errors import JsonDecodeError
from slack_rtm.events import (
    EVENT_TYPES,
    EmailDomainChanged,
    MessageError,
    MessageEvent,
    MessageSent,
    PinAdded,
    PinRemoved,
    decode_event,
    parse_event,
)
from slack_rtm.messages import (
    ITEM_TYPES,
    MESSAGE_SUBTYPES,
    STARRED_ITEM_TYPES,
    FileCommentItem,
    Item,
    MessageItem,
    PinnedItemMessage,
    StandardMessage,
    UnpinnedItemMessage,
    decode_item,
    decode_message,
    decode_starred_item,
)

UNKNOWN = {"x_added_later": {"nested": [1, 2, 3]}}

FILE = {
    "id": "F1",
    "title": "notes.txt",
    "mimetype": "text/plain",
    "filetype": "text",
    "pretty_type": "Plain Text",
    "user": "U1",
    "mode": "hosted",
    "editable": True,
    "is_external": False,
    "external_type": "",
    "size": 12,
    "url": "https://files.example/notes.txt",
    "url_private": "https://files.example/private/notes.txt",
    "url_private_download": "https://files.example/private/download/notes.txt",
    "permalink": "https://example.slack.com/files/alice/F1/notes.txt",
    "is_public": True,
    "public_url_shared": False,
    "channels": ["C1"],
    "groups": [],
}
COMMENT = {"id": "Fc1", "timestamp": 1400000000, "user": "U1", "comment": "nice"}
USER = {"id": "U3", "name": "carol", "deleted": False, "profile": {"real_name": "Carol"}}
BOT = {"id": "B2", "name": "deploy", "icons": {"image_48": "https://img.example/b.png"}}
CONVERSATION = {"id": "C3", "name": "new", "created": 1400000000, "creator": "U1"}
MESSAGE_ITEM = {"type": "message", "channel": "C1", "message": {"ts": "1.0", "text": "hi"}}

ITEM_DOCUMENTS: dict[str, dict[str, Any]] = {
    "message": MESSAGE_ITEM,
    "file": {"type": "file", "file": FILE},
    "file_comment": {"type": "file_comment", "file": FILE, "comment": COMMENT},
}

STARRED_ITEM_DOCUMENTS: dict[str, dict[str, Any]] = {
    **ITEM_DOCUMENTS,
    "channel": {"type": "channel", "channel": "C1"},
    "group": {"type": "group", "group": "G1"},
    "im": {"type": "im", "channel": "D1"},
}

_MARKED = {"channel": "C1", "ts": "1.0"}
_HISTORY_CHANGED = {"latest": "1.0", "ts": "2.0", "event_ts": "2.0"}
_USER_CONVERSATION = {"user": "U1", "channel": "C1"}

EVENT_DOCUMENTS: dict[str, dict[str, Any]] = {
    "hello": {},
    "user_typing": {"channel": "C1", "user": "U1"},
    "channel_marked": _MARKED,
    "channel_created": {"channel": CONVERSATION},
    "channel_joined": {"channel": CONVERSATION},
    "channel_left": {"channel": "C1"},
    "channel_deleted": {"channel": "C1"},
    "channel_rename": {"channel": CONVERSATION},
    "channel_archive": _USER_CONVERSATION,
    "channel_unarchive": _USER_CONVERSATION,
    "channel_history_changed": _HISTORY_CHANGED,
    "im_created": {"user": "U1", "channel": {"id": "D2"}},
    "im_open": {"user": "U1", "channel": "D1"},
    "im_close": {"user": "U1", "channel": "D1"},
    "im_marked": {"channel": "D1", "ts": "1.0"},
    "im_history_changed": _HISTORY_CHANGED,
    "group_joined": {"channel": {"id": "G2", "name": "plans", "is_group": True}},
    "group_left": {"channel": {"id": "G2"}},
    "group_open": {"user": "U1", "channel": "G1"},
    "group_close": {"user": "U1", "channel": "G1"},
    "group_archive": {"channel": "G1"},
    "group_unarchive": {"channel": "G1"},
    "group_rename": {"channel": {"id": "G1", "name": "renamed"}},
    "group_marked": {"channel": "G1", "ts": "1.0"},
    "group_history_changed": _HISTORY_CHANGED,
    "file_created": {"file": FILE},
    "file_shared": {"file": FILE},
    "file_unshared": {"file": FILE},
    "file_public": {"file": FILE},
    "file_private": {"file": "F1"},
    "file_change": {"file": FILE},
    "file_deleted": {"file_id": "F1", "event_ts": "1.0"},
    "file_comment_added": {"file": FILE, "comment": COMMENT},
    "file_comment_edited": {"file": FILE, "comment": COMMENT},
    "file_comment_deleted": {"file": FILE, "comment": "Fc1"},
    "pin_added": {"user": "U1", "channel_id": "C1", "item": MESSAGE_ITEM, "event_ts": "1.0"},
    "pin_removed": {
        "user": "U1",
        "channel_id": "C1",
        "item": MESSAGE_ITEM,
        "has_pins": False,
        "event_ts": "1.0",
    },
    "presence_change": {"user": "U1", "presence": "away"},
    "manual_presence_change": {"presence": "active"},
    "pref_change": {"name": "messages_theme", "value": "dense"},
    "user_change": {"user": USER},
    "team_join": {"user": USER},
    "star_added": {"user": "U1", "item": {"type": "im", "channel": "D1"}, "event_ts": "1.0"},
    "star_removed": {"user": "U1", "item": {"type": "group", "group": "G1"}, "event_ts": "1.0"},
    "reaction_added": {
        "user": "U1",
        "reaction": "thumbsup",
        "item": {"type": "message", "channel": "C1", "ts": "1.0"},
        "item_user": "U2",
        "event_ts": "1.0",
    },
    "reaction_removed": {
        "user": "U1",
        "reaction": "thumbsup",
        "item": {"type": "file_comment", "file": FILE, "comment": COMMENT},
        "event_ts": "1.0",
    },
    "emoji_changed": {"event_ts": "1.0"},
    "commands_changed": {"event_ts": "1.0"},
    "team_plan_change": {"plan": "std"},
    "team_pref_change": {"name": "slackbot_responses_only_admins", "value": True},
    "team_rename": {"name": "New Team"},
    "team_domain_change": {"url": "https://new.slack.com", "domain": "new"},
    "email_domain_changed": {"email_domain": "example.org", "event_ts": "1.0"},
    "bot_added": {"bot": BOT},
    "bot_changed": {"bot": BOT},
    "accounts_changed": {},
    "team_migration_started": {},
    "reconnect_url": {"url": "wss://ms10.slack-msgs.com/websocket/def"},
}

_JOINED = {"ts": "1.0", "user": "U1", "text": "<@U1> has joined", "inviter": "U2"}
_LEFT = {"ts": "1.0", "user": "U1", "text": "<@U1> has left"}
_TOPIC = {"ts": "1.0", "user": "U1", "topic": "news", "text": "set the topic"}
_PURPOSE = {"ts": "1.0", "user": "U1", "purpose": "chat", "text": "set the purpose"}
_RENAMED = {"ts": "1.0", "user": "U1", "old_name": "old", "name": "new", "text": "renamed"}
_ARCHIVED = {"ts": "1.0", "text": "archived", "user": "U1", "members": ["U1", "U2"]}
_UNARCHIVED = {"ts": "1.0", "text": "unarchived", "user": "U1"}
_PIN = {
    "user": "U1",
    "item_type": "F",
    "text": "pinned a file",
    "item": {"type": "file", "file": FILE},
    "channel": "C1",
    "ts": "1.0",
}

MESSAGE_DOCUMENTS: dict[str, dict[str, Any]] = {
    "bot_message": {"ts": "1.0", "text": "deployed", "bot_id": "B1", "username": "deploy"},
    "me_message": {"channel": "C1", "user": "U1", "text": "waves", "ts": "1.0"},
    "message_changed": {
        "hidden": True,
        "channel": "C1",
        "ts": "2.0",
        "message": {"ts": "1.0", "text": "edited", "edited": {"user": "U1", "ts": "2.0"}},
    },
    "message_deleted": {"hidden": True, "channel": "C1", "ts": "2.0", "deleted_ts": "1.0"},
    "channel_join": _JOINED,
    "channel_leave": _LEFT,
    "channel_topic": _TOPIC,
    "channel_purpose": _PURPOSE,
    "channel_name": _RENAMED,
    "channel_archive": _ARCHIVED,
    "channel_unarchive": _UNARCHIVED,
    "group_join": _JOINED,
    "group_leave": _LEFT,
    "group_topic": _TOPIC,
    "group_purpose": _PURPOSE,
    "group_name": _RENAMED,
    "group_archive": _ARCHIVED,
    "group_unarchive": _UNARCHIVED,
    "file_share": {"ts": "1.0", "text": "shared", "file": FILE, "user": "U1", "upload": True},
    "file_comment": {"ts": "1.0", "text": "commented", "file": FILE, "comment": COMMENT},
    "file_mention": {"ts": "1.0", "text": "mentioned", "file": FILE, "user": "U1"},
    "pinned_item": _PIN,
    "unpinned_item": {**_PIN, "text": "unpinned a file"},
}


def _document(tag_key: str, tag: str, body: dict[str, Any]) -> dict[str, Any]:
    return {tag_key: tag, **body, **UNKNOWN}


class TestEventVariants:
    """One row per RTM event type."""

    def test_every_event_type_has_a_document(self) -> None:
        assert set(EVENT_DOCUMENTS) == set(EVENT_TYPES)

    @pytest.mark.parametrize("tag", sorted(EVENT_DOCUMENTS))
    def test_decodes_to_tagged_class(self, tag: str) -> None:
        event = parse_event(json.dumps(_document("type", tag, EVENT_DOCUMENTS[tag])))

        assert isinstance(event, EVENT_TYPES[tag])
        assert type(event).TYPE == tag
        assert "x_added_later" not in event.model_dump()

    def test_message_sent_ack(self) -> None:
        event = decode_event({"ok": True, "reply_to": 4, "ts": "1.0", "text": "hi", **UNKNOWN})

        assert isinstance(event, MessageSent)
        assert type(event).TYPE == "message_sent"
        assert event.reply_to == 4

    def test_message_error_ack(self) -> None:
        event = decode_event(
            {
                "ok": False,
                "reply_to": 4,
                "error": {"code": 2, "msg": "message text is missing"},
                **UNKNOWN,
            }
        )

        assert isinstance(event, MessageError)
        assert type(event).TYPE == "message_error"
        assert event.error.code == 2

    @pytest.mark.parametrize("tag", ["email_domain_change", "email_domain_changeed"])
    def test_email_domain_tag_is_documented_spelling(self, tag: str) -> None:
        """Only Slack's documented email_domain_changed tag is recognised."""
        body = EVENT_DOCUMENTS["email_domain_changed"]

        assert EmailDomainChanged.TYPE == "email_domain_changed"
        with pytest.raises(JsonDecodeError) as exc_info:
            decode_event(_document("type", tag, body))
        assert exc_info.value.tag == tag


class TestPinEvents:
    """Pin events with and without the optional item."""

    @pytest.mark.parametrize("event_class", [PinAdded, PinRemoved])
    def test_with_item(self, event_class: type[PinAdded] | type[PinRemoved]) -> None:
        event = decode_event(_document("type", event_class.TYPE, EVENT_DOCUMENTS[event_class.TYPE]))

        assert isinstance(event, event_class)
        assert isinstance(event.item, MessageItem)
        assert isinstance(event.item.message, StandardMessage)

    @pytest.mark.parametrize("event_class", [PinAdded, PinRemoved])
    def test_without_item(self, event_class: type[PinAdded] | type[PinRemoved]) -> None:
        body = {k: v for k, v in EVENT_DOCUMENTS[event_class.TYPE].items() if k != "item"}

        event = decode_event(_document("type", event_class.TYPE, body))

        assert isinstance(event, event_class)
        assert event.item is None

    @pytest.mark.parametrize("message_class", [PinnedItemMessage, UnpinnedItemMessage])
    def test_pin_message_without_item(
        self, message_class: type[PinnedItemMessage] | type[UnpinnedItemMessage]
    ) -> None:
        body = {k: v for k, v in MESSAGE_DOCUMENTS["pinned_item"].items() if k != "item"}

        message = decode_message(_document("subtype", str(message_class.SUBTYPE), body))

        assert isinstance(message, message_class)
        assert message.item is None


class TestMessageVariants:
    """One row per message subtype, plus the untagged standard message."""

    def test_every_subtype_has_a_document(self) -> None:
        assert set(MESSAGE_DOCUMENTS) == set(MESSAGE_SUBTYPES)

    @pytest.mark.parametrize("subtype", sorted(MESSAGE_DOCUMENTS))
    def test_decodes_to_tagged_class(self, subtype: str) -> None:
        message = decode_message(_document("subtype", subtype, MESSAGE_DOCUMENTS[subtype]))

        assert isinstance(message, MESSAGE_SUBTYPES[subtype])
        assert type(message).SUBTYPE == subtype
        assert "x_added_later" not in message.model_dump()

    @pytest.mark.parametrize("subtype", sorted(MESSAGE_DOCUMENTS))
    def test_message_frame_wraps_subtype(self, subtype: str) -> None:
        frame = {"type": "message", **_document("subtype", subtype, MESSAGE_DOCUMENTS[subtype])}

        event = parse_event(json.dumps(frame))

        assert isinstance(event, MessageEvent)
        assert isinstance(event.message, MESSAGE_SUBTYPES[subtype])

    def test_standard_message(self) -> None:
        message = decode_message({"ts": "1.0", "channel": "C1", "text": "hi", **UNKNOWN})

        assert isinstance(message, StandardMessage)
        assert StandardMessage.SUBTYPE is None


class TestItemVariants:
    """One row per pinned or reacted-to item and per starred item."""

    def test_every_item_type_has_a_document(self) -> None:
        assert set(ITEM_DOCUMENTS) == set(ITEM_TYPES)
        assert set(STARRED_ITEM_DOCUMENTS) == set(STARRED_ITEM_TYPES)

    @pytest.mark.parametrize("tag", sorted(ITEM_DOCUMENTS))
    def test_item_decodes_to_tagged_class(self, tag: str) -> None:
        item = decode_item({**ITEM_DOCUMENTS[tag], **UNKNOWN})

        assert isinstance(item, ITEM_TYPES[tag])
        assert type(item).TYPE == tag

    @pytest.mark.parametrize("tag", sorted(STARRED_ITEM_DOCUMENTS))
    def test_starred_item_decodes_to_tagged_class(self, tag: str) -> None:
        item = decode_starred_item({**STARRED_ITEM_DOCUMENTS[tag], **UNKNOWN})

        assert isinstance(item, STARRED_ITEM_TYPES[tag])
        assert isinstance(item, Item)
        assert type(item).TYPE == tag

    @pytest.mark.parametrize("tag", ["channel", "group", "im"])
    def test_conversation_items_are_star_only(self, tag: str) -> None:
        with pytest.raises(JsonDecodeError) as exc_info:
            decode_item(STARRED_ITEM_DOCUMENTS[tag])

        assert exc_info.value.tag == tag

    def test_file_comment_item_keeps_comment(self) -> None:
        item = decode_item({**ITEM_DOCUMENTS["file_comment"], **UNKNOWN})

        assert isinstance(item, FileCommentItem)
        assert item.comment.id == "Fc1"
        assert item.file.id == "F1"
