"""chat.* methods."""

import json
from dataclasses import dataclass
from typing import Any

from slack_rtm.api.core import call, compact, digit, word
from slack_rtm.errors import JsonEncodeError
from slack_rtm.http.abc import HttpClient
from slack_rtm.messages import NestedMessage
from slack_rtm.types import SlackModel


def encode_attachments(attachments: list[dict[str, Any]] | None) -> str | None:
    """Render attachments as the JSON string chat methods expect.

    Raises:
        JsonEncodeError: If an attachment holds a value JSON cannot represent
    """
    if attachments is None:
        return None
    try:
        return json.dumps(attachments)
    except (TypeError, ValueError) as e:
        raise JsonEncodeError(f"Attachments are not JSON serializable: {e}") from e


@dataclass(frozen=True)
class PostMessageOptions:
    """Optional parameters of chat.postMessage.

    Attributes:
        username: Bot name to post as (ignored when as_user is set)
        as_user: Post as the authed user instead of as a bot
        parse: "none" or "full"
        link_names: Find and link channel names and usernames
        attachments: Structured message attachments
        unfurl_links: Unfurl primarily text-based content
        unfurl_media: Unfurl media content
        icon_url: URL of an image to use as the icon
        icon_emoji: Emoji to use as the icon, e.g. ":chart_with_upwards_trend:"
    """

    username: str | None = None
    as_user: bool | None = None
    parse: str | None = None
    link_names: bool | None = None
    attachments: list[dict[str, Any]] | None = None
    unfurl_links: bool | None = None
    unfurl_media: bool | None = None
    icon_url: str | None = None
    icon_emoji: str | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "username": self.username,
                "as_user": word(self.as_user),
                "parse": self.parse,
                "link_names": digit(self.link_names),
                "attachments": encode_attachments(self.attachments),
                "unfurl_links": word(self.unfurl_links),
                "unfurl_media": word(self.unfurl_media),
                "icon_url": self.icon_url,
                "icon_emoji": self.icon_emoji,
            }
        )


@dataclass(frozen=True)
class UpdateOptions:
    attachments: list[dict[str, Any]] | None = None
    parse: str | None = None
    link_names: bool | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "attachments": encode_attachments(self.attachments),
                "parse": self.parse,
                "link_names": digit(self.link_names),
            }
        )


class DeleteResponse(SlackModel):
    channel: str
    ts: str


class PostMessageResponse(SlackModel):
    ts: str
    channel: str
    message: NestedMessage


class UpdateResponse(SlackModel):
    channel: str
    ts: str
    text: str


def delete(client: HttpClient, token: str, ts: str, channel: str) -> DeleteResponse:
    """Delete the message posted at ts in channel."""
    params = {"ts": ts, "channel": channel}
    return call(client, "chat.delete", token, params, DeleteResponse)


def post_message(
    client: HttpClient,
    token: str,
    channel: str,
    text: str,
    *,
    options: PostMessageOptions | None = None,
) -> PostMessageResponse:
    """Post a message to a channel, group or IM.

    Args:
        client: HTTP client handle
        token: Authentication token
        channel: Channel, private group or IM id, or a "#name"
        text: Text of the message
        options: Optional parameters

    Returns:
        The posted message with its ts and channel
    """
    params = {"channel": channel, "text": text, **(options or PostMessageOptions()).to_params()}
    return call(client, "chat.postMessage", token, params, PostMessageResponse)


def update(
    client: HttpClient,
    token: str,
    ts: str,
    channel: str,
    text: str,
    *,
    options: UpdateOptions | None = None,
) -> UpdateResponse:
    """Replace the text of the message posted at ts in channel."""
    params = {
        "ts": ts,
        "channel": channel,
        "text": text,
        **(options or UpdateOptions()).to_params(),
    }
    return call(client, "chat.update", token, params, UpdateResponse)
