"""pins.* methods."""

from slack_rtm.api.common import ItemTarget
from slack_rtm.api.core import EmptyResponse, call
from slack_rtm.http.abc import HttpClient
from slack_rtm.messages import NestedItem
from slack_rtm.types import SlackModel


class PinListResponse(SlackModel):
    items: list[NestedItem]


def _target_params(channel: str, target: ItemTarget) -> dict[str, str]:
    return {**target.to_params(), "channel": channel}


def add(client: HttpClient, token: str, channel: str, target: ItemTarget) -> EmptyResponse:
    """Pin a message (by timestamp), file or file comment to channel."""
    return call(client, "pins.add", token, _target_params(channel, target), EmptyResponse)


def list_pins(client: HttpClient, token: str, channel: str) -> PinListResponse:
    return call(client, "pins.list", token, {"channel": channel}, PinListResponse)


def remove(client: HttpClient, token: str, channel: str, target: ItemTarget) -> EmptyResponse:
    return call(client, "pins.remove", token, _target_params(channel, target), EmptyResponse)
