"""channels.* methods (public channels)."""

from slack_rtm.api.common import HistoryOptions, HistoryResponse, PurposeResponse, TopicResponse
from slack_rtm.api.core import EmptyResponse, call, compact, digit
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Channel, SlackModel


class ChannelResponse(SlackModel):
    channel: Channel


class JoinResponse(SlackModel):
    already_in_channel: bool | None = None
    channel: Channel


class LeaveResponse(SlackModel):
    not_in_channel: bool | None = None


class ChannelListResponse(SlackModel):
    channels: list[Channel]


class AbridgedChannel(SlackModel):
    id: str
    is_channel: bool
    name: str
    created: int


class RenameResponse(SlackModel):
    channel: AbridgedChannel


def archive(client: HttpClient, token: str, channel: str) -> EmptyResponse:
    return call(client, "channels.archive", token, {"channel": channel}, EmptyResponse)


def create(client: HttpClient, token: str, name: str) -> ChannelResponse:
    return call(client, "channels.create", token, {"name": name}, ChannelResponse)


def history(
    client: HttpClient,
    token: str,
    channel: str,
    *,
    options: HistoryOptions | None = None,
) -> HistoryResponse:
    """Fetch a page of messages and events from a channel."""
    params = {"channel": channel, **(options or HistoryOptions()).to_params()}
    return call(client, "channels.history", token, params, HistoryResponse)


def info(client: HttpClient, token: str, channel: str) -> ChannelResponse:
    return call(client, "channels.info", token, {"channel": channel}, ChannelResponse)


def invite(client: HttpClient, token: str, channel: str, user: str) -> ChannelResponse:
    params = {"channel": channel, "user": user}
    return call(client, "channels.invite", token, params, ChannelResponse)


def join(client: HttpClient, token: str, name: str) -> JoinResponse:
    """Join a channel by name, creating it if it does not exist."""
    return call(client, "channels.join", token, {"name": name}, JoinResponse)


def kick(client: HttpClient, token: str, channel: str, user: str) -> EmptyResponse:
    params = {"channel": channel, "user": user}
    return call(client, "channels.kick", token, params, EmptyResponse)


def leave(client: HttpClient, token: str, channel: str) -> LeaveResponse:
    return call(client, "channels.leave", token, {"channel": channel}, LeaveResponse)


def list_channels(
    client: HttpClient, token: str, *, exclude_archived: bool | None = None
) -> ChannelListResponse:
    params = compact({"exclude_archived": digit(exclude_archived)})
    return call(client, "channels.list", token, params, ChannelListResponse)


def mark(client: HttpClient, token: str, channel: str, ts: str) -> EmptyResponse:
    """Move the read cursor of a channel to ts."""
    params = {"channel": channel, "ts": ts}
    return call(client, "channels.mark", token, params, EmptyResponse)


def rename(client: HttpClient, token: str, channel: str, name: str) -> RenameResponse:
    params = {"channel": channel, "name": name}
    return call(client, "channels.rename", token, params, RenameResponse)


def set_purpose(client: HttpClient, token: str, channel: str, purpose: str) -> PurposeResponse:
    params = {"channel": channel, "purpose": purpose}
    return call(client, "channels.setPurpose", token, params, PurposeResponse)


def set_topic(client: HttpClient, token: str, channel: str, topic: str) -> TopicResponse:
    params = {"channel": channel, "topic": topic}
    return call(client, "channels.setTopic", token, params, TopicResponse)


def unarchive(client: HttpClient, token: str, channel: str) -> EmptyResponse:
    return call(client, "channels.unarchive", token, {"channel": channel}, EmptyResponse)
