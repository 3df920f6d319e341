"""stars.* methods."""

from dataclasses import dataclass

from slack_rtm.api.common import ItemTarget
from slack_rtm.api.core import EmptyResponse, call, compact, number
from slack_rtm.http.abc import HttpClient
from slack_rtm.messages import NestedStarredItem
from slack_rtm.types import Paging, SlackModel


@dataclass(frozen=True)
class StarListOptions:
    user: str | None = None
    count: int | None = None
    page: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact({"user": self.user, "count": number(self.count), "page": number(self.page)})


class StarListResponse(SlackModel):
    items: list[NestedStarredItem]
    paging: Paging


def add(client: HttpClient, token: str, target: ItemTarget) -> EmptyResponse:
    """Star a message, file, file comment or (with only `channel` set) a channel."""
    return call(client, "stars.add", token, target.to_params(), EmptyResponse)


def list_stars(
    client: HttpClient, token: str, *, options: StarListOptions | None = None
) -> StarListResponse:
    params = (options or StarListOptions()).to_params()
    return call(client, "stars.list", token, params, StarListResponse)


def remove(client: HttpClient, token: str, target: ItemTarget) -> EmptyResponse:
    return call(client, "stars.remove", token, target.to_params(), EmptyResponse)
