"""oauth.access, the only unauthenticated method."""

from slack_rtm.api.core import compact, decode_response, make_api_call
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import SlackModel


class AccessResponse(SlackModel):
    access_token: str
    scope: str


def access(
    client: HttpClient,
    client_id: str,
    client_secret: str,
    code: str,
    *,
    redirect_uri: str | None = None,
) -> AccessResponse:
    """Exchange a temporary OAuth code for an access token.

    Args:
        client: HTTP client handle
        client_id: Issued when the app was created
        client_secret: Issued when the app was created
        code: The code param returned via the OAuth callback
        redirect_uri: Must match the originally submitted URI, if one was sent

    Returns:
        The access token and its granted scope
    """
    params = {
        "client_id": client_id,
        "client_secret": client_secret,
        "code": code,
        **compact({"redirect_uri": redirect_uri}),
    }
    return decode_response(AccessResponse, make_api_call(client, "oauth.access", params))
