"""team.* methods."""

from slack_rtm.api.common import PageOptions
from slack_rtm.api.core import call
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Paging, SlackModel


class LoginInfo(SlackModel):
    user_id: str
    username: str
    date_first: int
    date_last: int
    count: int
    ip: str
    user_agent: str
    isp: str
    country: str
    region: str


class AccessLogsResponse(SlackModel):
    logins: list[LoginInfo]
    paging: Paging


class IconInfo(SlackModel):
    image_34: str | None = None
    image_44: str | None = None
    image_68: str | None = None
    image_88: str | None = None
    image_102: str | None = None
    image_132: str | None = None
    image_default: bool | None = None


class TeamInfo(SlackModel):
    id: str
    name: str
    domain: str
    email_domain: str
    icon: IconInfo


class TeamInfoResponse(SlackModel):
    team: TeamInfo


def access_logs(
    client: HttpClient, token: str, *, options: PageOptions | None = None
) -> AccessLogsResponse:
    """Fetch the team's login history. Requires a paid plan."""
    params = (options or PageOptions()).to_params()
    return call(client, "team.accessLogs", token, params, AccessLogsResponse)


def info(client: HttpClient, token: str) -> TeamInfoResponse:
    return call(client, "team.info", token, {}, TeamInfoResponse)
