"""groups.* methods (private channels)."""

from slack_rtm.api.common import (
    CloseResponse,
    HistoryOptions,
    HistoryResponse,
    OpenResponse,
    PurposeResponse,
    TopicResponse,
)
from slack_rtm.api.core import EmptyResponse, call, compact, digit
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Group, SlackModel


class GroupResponse(SlackModel):
    group: Group


class InviteResponse(SlackModel):
    group: Group
    already_in_group: bool | None = None


class GroupListResponse(SlackModel):
    groups: list[Group]


class AbridgedGroup(SlackModel):
    id: str
    name: str
    created: int


class RenameResponse(SlackModel):
    channel: AbridgedGroup


def archive(client: HttpClient, token: str, channel: str) -> EmptyResponse:
    return call(client, "groups.archive", token, {"channel": channel}, EmptyResponse)


def close(client: HttpClient, token: str, channel: str) -> CloseResponse:
    return call(client, "groups.close", token, {"channel": channel}, CloseResponse)


def create(client: HttpClient, token: str, name: str) -> GroupResponse:
    return call(client, "groups.create", token, {"name": name}, GroupResponse)


def create_child(client: HttpClient, token: str, channel: str) -> GroupResponse:
    """Archive a group and create a copy of it with the same members."""
    return call(client, "groups.createChild", token, {"channel": channel}, GroupResponse)


def history(
    client: HttpClient,
    token: str,
    channel: str,
    *,
    options: HistoryOptions | None = None,
) -> HistoryResponse:
    params = {"channel": channel, **(options or HistoryOptions()).to_params()}
    return call(client, "groups.history", token, params, HistoryResponse)


def info(client: HttpClient, token: str, channel: str) -> GroupResponse:
    return call(client, "groups.info", token, {"channel": channel}, GroupResponse)


def invite(client: HttpClient, token: str, channel: str, user: str) -> InviteResponse:
    params = {"channel": channel, "user": user}
    return call(client, "groups.invite", token, params, InviteResponse)


def kick(client: HttpClient, token: str, channel: str, user: str) -> EmptyResponse:
    params = {"channel": channel, "user": user}
    return call(client, "groups.kick", token, params, EmptyResponse)


def leave(client: HttpClient, token: str, channel: str) -> EmptyResponse:
    return call(client, "groups.leave", token, {"channel": channel}, EmptyResponse)


def list_groups(
    client: HttpClient, token: str, *, exclude_archived: bool | None = None
) -> GroupListResponse:
    params = compact({"exclude_archived": digit(exclude_archived)})
    return call(client, "groups.list", token, params, GroupListResponse)


def mark(client: HttpClient, token: str, channel: str, ts: str) -> EmptyResponse:
    params = {"channel": channel, "ts": ts}
    return call(client, "groups.mark", token, params, EmptyResponse)


def open(client: HttpClient, token: str, channel: str) -> OpenResponse:
    return call(client, "groups.open", token, {"channel": channel}, OpenResponse)


def rename(client: HttpClient, token: str, channel: str, name: str) -> RenameResponse:
    params = {"channel": channel, "name": name}
    return call(client, "groups.rename", token, params, RenameResponse)


def set_purpose(client: HttpClient, token: str, channel: str, purpose: str) -> PurposeResponse:
    params = {"channel": channel, "purpose": purpose}
    return call(client, "groups.setPurpose", token, params, PurposeResponse)


def set_topic(client: HttpClient, token: str, channel: str, topic: str) -> TopicResponse:
    params = {"channel": channel, "topic": topic}
    return call(client, "groups.setTopic", token, params, TopicResponse)


def unarchive(client: HttpClient, token: str, channel: str) -> EmptyResponse:
    return call(client, "groups.unarchive", token, {"channel": channel}, EmptyResponse)
