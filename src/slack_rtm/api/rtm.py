"""rtm.start, the handshake that opens a Real-Time Messaging session."""

from pydantic import ConfigDict, Field

from slack_rtm.api.core import call, compact, digit
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Bot, Channel, Group, Im, SlackModel, Team, User


class SelfData(SlackModel):
    """The authenticated user or bot."""

    id: str
    name: str
    created: int
    manual_presence: str


class StartResponse(SlackModel):
    """Snapshot of the team taken when the session starts.

    The wire field `self` is exposed as `self_data`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    url: str
    self_data: SelfData = Field(alias="self")
    team: Team
    users: list[User]
    channels: list[Channel]
    groups: list[Group]
    ims: list[Im]
    bots: list[Bot]


def start(
    client: HttpClient,
    token: str,
    *,
    simple_latest: bool | None = None,
    no_unreads: bool | None = None,
) -> StartResponse:
    """Start a Real-Time Messaging session.

    Args:
        client: HTTP client handle
        token: Authentication token
        simple_latest: Return timestamp only for latest message objects
        no_unreads: Skip unread counts for each channel

    Returns:
        The WebSocket URL plus the team, user, channel, group, IM and bot rosters
    """
    params = compact({"simple_latest": digit(simple_latest), "no_unreads": digit(no_unreads)})
    return call(client, "rtm.start", token, params, StartResponse)
