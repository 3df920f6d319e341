"""emoji.* methods."""

from slack_rtm.api.core import call
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import SlackModel


class EmojiListResponse(SlackModel):
    """Custom emoji, name to image URL (or `alias:<name>`)."""

    emoji: dict[str, str]


def list_emoji(client: HttpClient, token: str) -> EmojiListResponse:
    return call(client, "emoji.list", token, {}, EmojiListResponse)
