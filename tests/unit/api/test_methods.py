"""Tests for individual Web API bindings against FakeHttpClient."""

import json
from typing import Any

import pytest

from slack_rtm.api import (
    channels,
    chat,
    emoji,
    groups,
    im,
    oauth,
    pins,
    reactions,
    rtm,
    search,
    stars,
    users,
)
from slack_rtm.api.common import HistoryOptions, ItemTarget
from slack_rtm.errors import ApiError, JsonEncodeError
from slack_rtm.http.fake import FakeHttpClient
from slack_rtm.messages import BotMessage, GroupStarredItem, MessageItem, StandardMessage


class TestChannels:
    """Tests for channels.* bindings."""

    def test_rename(self) -> None:
        http = FakeHttpClient(
            {
                "channels.rename": json.dumps(
                    {
                        "ok": True,
                        "channel": {
                            "id": "C1",
                            "is_channel": True,
                            "name": "new",
                            "created": 1,
                        },
                    }
                )
            }
        )

        response = channels.rename(http, "xoxb-token", "C1", "new")

        assert response.channel.id == "C1"
        assert response.channel.name == "new"
        assert http.requests[0].params == {"channel": "C1", "name": "new", "token": "xoxb-token"}

    def test_history_options_render_as_params(self) -> None:
        http = FakeHttpClient(
            {
                "channels.history": json.dumps(
                    {
                        "ok": True,
                        "latest": "9.0",
                        "messages": [
                            {"type": "message", "ts": "2.0", "text": "hi"},
                            {"subtype": "bot_message", "ts": "1.0", "text": "x", "bot_id": "B1"},
                        ],
                        "has_more": False,
                    }
                )
            }
        )

        response = channels.history(
            http, "t", "C1", options=HistoryOptions(latest="9.0", inclusive=True, count=2)
        )

        assert http.requests[0].params == {
            "channel": "C1",
            "latest": "9.0",
            "inclusive": "1",
            "count": "2",
            "token": "t",
        }
        assert isinstance(response.messages[0], StandardMessage)
        assert isinstance(response.messages[1], BotMessage)
        assert response.oldest is None

    def test_list_excludes_archived(self, make_channel: Any) -> None:
        http = FakeHttpClient(
            {"channels.list": json.dumps({"ok": True, "channels": [make_channel("C1", "a")]})}
        )

        response = channels.list_channels(http, "t", exclude_archived=True)

        assert [channel.name for channel in response.channels] == ["a"]
        assert http.requests[0].params["exclude_archived"] == "1"

    def test_not_in_channel_is_api_error(self) -> None:
        http = FakeHttpClient({"channels.setTopic": '{"ok": false, "error": "not_in_channel"}'})

        with pytest.raises(ApiError) as exc_info:
            channels.set_topic(http, "t", "C1", "topic")

        assert exc_info.value.error == "not_in_channel"


class TestChat:
    """Tests for chat.* bindings."""

    def test_post_message_options(self) -> None:
        http = FakeHttpClient(
            {
                "chat.postMessage": json.dumps(
                    {"ok": True, "ts": "1.0", "channel": "C1", "message": {"ts": "1.0"}}
                )
            }
        )

        chat.post_message(
            http,
            "t",
            "C1",
            "hello",
            options=chat.PostMessageOptions(
                as_user=True,
                link_names=True,
                unfurl_links=False,
                attachments=[{"fallback": "f", "text": "t"}],
            ),
        )

        params = http.requests[0].params
        assert params["as_user"] == "true"
        assert params["link_names"] == "1"
        assert params["unfurl_links"] == "false"
        assert json.loads(params["attachments"]) == [{"fallback": "f", "text": "t"}]
        assert "username" not in params

    def test_unserializable_attachment(self) -> None:
        http = FakeHttpClient()

        with pytest.raises(JsonEncodeError):
            chat.post_message(
                http, "t", "C1", "x", options=chat.PostMessageOptions(attachments=[{"f": object()}])
            )

        assert http.requests == []


class TestOauth:
    """Tests for oauth.access."""

    def test_access_sends_no_token(self) -> None:
        http = FakeHttpClient(
            {"oauth.access": '{"ok": true, "access_token": "xoxp-1", "scope": "read"}'}
        )

        response = oauth.access(http, "id", "secret", "code")

        assert response.access_token == "xoxp-1"
        assert http.requests[0].params == {
            "client_id": "id",
            "client_secret": "secret",
            "code": "code",
        }


class TestRtmStart:
    """Tests for rtm.start."""

    def test_self_is_exposed_as_self_data(self, start_payload: dict[str, Any]) -> None:
        http = FakeHttpClient({"rtm.start": json.dumps(start_payload)})

        response = rtm.start(http, "t", no_unreads=True)

        assert response.self_data.id == "U0"
        assert response.url.startswith("wss://")
        assert [channel.id for channel in response.channels] == ["C1", "C2"]
        assert http.requests[0].params == {"no_unreads": "1", "token": "t"}


class TestMiscellaneous:
    """Tests for the remaining bindings."""

    def test_reactions_get_decodes_body_as_item(self) -> None:
        http = FakeHttpClient(
            {
                "reactions.get": json.dumps(
                    {
                        "ok": True,
                        "type": "message",
                        "channel": "C1",
                        "message": {
                            "ts": "1.0",
                            "text": "hi",
                            "reactions": [{"name": "wave", "count": 1, "users": ["U1"]}],
                        },
                    }
                )
            }
        )

        item = reactions.get(http, "t", ItemTarget(channel="C1", timestamp="1.0"), full=True)

        assert isinstance(item, MessageItem)
        assert isinstance(item.message, StandardMessage)
        assert item.message.reactions is not None
        assert item.message.reactions[0].name == "wave"
        assert http.requests[0].params == {
            "channel": "C1",
            "timestamp": "1.0",
            "full": "1",
            "token": "t",
        }

    def test_im_open(self) -> None:
        http = FakeHttpClient({"im.open": '{"ok": true, "channel": {"id": "D1"}}'})

        response = im.open(http, "t", "U1")

        assert response.channel.id == "D1"
        assert response.already_open is None

    def test_users_get_presence(self) -> None:
        http = FakeHttpClient({"users.getPresence": '{"ok": true, "presence": "active"}'})

        response = users.get_presence(http, "t", "U1")

        assert response.presence == "active"

    def test_search_messages_without_files_section(self) -> None:
        http = FakeHttpClient(
            {
                "search.messages": json.dumps(
                    {
                        "ok": True,
                        "query": "hello",
                        "messages": {
                            "total": 0,
                            "matches": [],
                            "paging": {"count": 20, "total": 0, "page": 1, "pages": 0},
                        },
                    }
                )
            }
        )

        response = search.search_messages(
            http, "t", "hello", options=search.SearchOptions(sort="timestamp")
        )

        assert response.files is None
        assert response.messages is not None
        assert response.messages.total == 0
        assert http.requests[0].params["sort"] == "timestamp"


class TestItems:
    """Tests for pins and stars, which address items through ItemTarget."""

    def test_pins_add_sends_channel_and_timestamp(self) -> None:
        http = FakeHttpClient({"pins.add": '{"ok": true}'})

        pins.add(http, "t", "C1", ItemTarget(timestamp="1.0"))

        assert http.requests[0].params == {"channel": "C1", "timestamp": "1.0", "token": "t"}

    def test_pins_list_decodes_items(self) -> None:
        http = FakeHttpClient(
            {
                "pins.list": json.dumps(
                    {
                        "ok": True,
                        "items": [
                            {"type": "message", "channel": "C1", "message": {"ts": "1.0"}}
                        ],
                    }
                )
            }
        )

        response = pins.list_pins(http, "t", "C1")

        assert isinstance(response.items[0], MessageItem)

    def test_stars_list_accepts_groups(self) -> None:
        http = FakeHttpClient(
            {
                "stars.list": json.dumps(
                    {
                        "ok": True,
                        "items": [{"type": "group", "group": "G1"}],
                        "paging": {"count": 100, "total": 1, "page": 1, "pages": 1},
                    }
                )
            }
        )

        response = stars.list_stars(http, "t", options=stars.StarListOptions(user="U1"))

        assert isinstance(response.items[0], GroupStarredItem)
        assert http.requests[0].params == {"user": "U1", "token": "t"}


class TestGroupsAndEmoji:
    def test_groups_create_child(self, make_group: Any) -> None:
        http = FakeHttpClient(
            {"groups.createChild": json.dumps({"ok": True, "group": make_group("G2", "secret")})}
        )

        response = groups.create_child(http, "t", "G1")

        assert response.group.id == "G2"
        assert http.requests[0].method == "groups.createChild"

    def test_emoji_list(self) -> None:
        http = FakeHttpClient(
            {"emoji.list": '{"ok": true, "emoji": {"bowtie": "https://e/bowtie.png"}}'}
        )

        response = emoji.list_emoji(http, "t")

        assert response.emoji == {"bowtie": "https://e/bowtie.png"}
