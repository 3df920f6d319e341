"""Connectivity checks: api.test and auth.test."""

from slack_rtm.api.core import call, compact, decode_response, make_api_call
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import SlackModel


class ApiTestResponse(SlackModel):
    error: str | None = None
    args: dict[str, str] | None = None


class AuthTestResponse(SlackModel):
    """Identity behind a token.

    Attributes:
        url: Team URL (e.g. "https://example-team.slack.com/")
        team: Team name
        user: User name
        team_id: Team id
        user_id: User id
    """

    url: str
    team: str
    user: str
    team_id: str
    user_id: str


def api_test(
    client: HttpClient,
    *,
    args: dict[str, str] | None = None,
    error: str | None = None,
) -> ApiTestResponse:
    """Call api.test, which echoes its arguments back.

    Passing error makes Slack answer with `ok: false` and that error code,
    which surfaces here as an ApiError.
    """
    params = {**(args or {}), **compact({"error": error})}
    return decode_response(ApiTestResponse, make_api_call(client, "api.test", params))


def test(client: HttpClient, token: str) -> AuthTestResponse:
    """Check authentication and tell you who you are."""
    return call(client, "auth.test", token, {}, AuthTestResponse)
