"""users.* methods."""

from slack_rtm.api.core import EmptyResponse, call, compact, digit
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import SlackModel, User


class PresenceResponse(SlackModel):
    """Presence of a user.

    Only `presence` is returned for users other than the caller.
    """

    presence: str
    online: bool | None = None
    auto_away: bool | None = None
    manual_away: bool | None = None
    connection_count: int | None = None
    last_activity: int | None = None


class UserResponse(SlackModel):
    user: User


class UserListResponse(SlackModel):
    members: list[User]


def get_presence(client: HttpClient, token: str, user: str) -> PresenceResponse:
    return call(client, "users.getPresence", token, {"user": user}, PresenceResponse)


def info(client: HttpClient, token: str, user: str) -> UserResponse:
    return call(client, "users.info", token, {"user": user}, UserResponse)


def list_users(client: HttpClient, token: str, *, presence: bool | None = None) -> UserListResponse:
    params = compact({"presence": digit(presence)})
    return call(client, "users.list", token, params, UserListResponse)


def set_active(client: HttpClient, token: str) -> EmptyResponse:
    """Mark the caller as active."""
    return call(client, "users.setActive", token, {}, EmptyResponse)


def set_presence(client: HttpClient, token: str, presence: str) -> EmptyResponse:
    """Manually set presence to "auto" or "away"."""
    return call(client, "users.setPresence", token, {"presence": presence}, EmptyResponse)
