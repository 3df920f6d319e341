"""im.* methods (direct messages)."""

from slack_rtm.api.common import CloseResponse, HistoryOptions, HistoryResponse
from slack_rtm.api.core import EmptyResponse, call
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Im, SlackModel


class ImListResponse(SlackModel):
    ims: list[Im]


class ChannelId(SlackModel):
    id: str


class ImOpenResponse(SlackModel):
    no_op: bool | None = None
    already_open: bool | None = None
    channel: ChannelId


def close(client: HttpClient, token: str, channel: str) -> CloseResponse:
    return call(client, "im.close", token, {"channel": channel}, CloseResponse)


def history(
    client: HttpClient,
    token: str,
    channel: str,
    *,
    options: HistoryOptions | None = None,
) -> HistoryResponse:
    params = {"channel": channel, **(options or HistoryOptions()).to_params()}
    return call(client, "im.history", token, params, HistoryResponse)


def list_ims(client: HttpClient, token: str) -> ImListResponse:
    return call(client, "im.list", token, {}, ImListResponse)


def mark(client: HttpClient, token: str, channel: str, ts: str) -> EmptyResponse:
    params = {"channel": channel, "ts": ts}
    return call(client, "im.mark", token, params, EmptyResponse)


def open(client: HttpClient, token: str, user: str) -> ImOpenResponse:
    """Open a direct message channel with user, returning its id."""
    return call(client, "im.open", token, {"user": user}, ImOpenResponse)
