"""reactions.* methods."""

from dataclasses import dataclass

from slack_rtm.api.common import ItemTarget
from slack_rtm.api.core import EmptyResponse, call, compact, digit, make_authed_api_call, number
from slack_rtm.http.abc import HttpClient
from slack_rtm.messages import Item, NestedItem, decode_item
from slack_rtm.types import Paging, SlackModel


@dataclass(frozen=True)
class ReactionListOptions:
    user: str | None = None
    full: bool | None = None
    count: int | None = None
    page: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "user": self.user,
                "full": digit(self.full),
                "count": number(self.count),
                "page": number(self.page),
            }
        )


class ReactionListResponse(SlackModel):
    items: list[NestedItem]
    paging: Paging


def add(client: HttpClient, token: str, name: str, target: ItemTarget) -> EmptyResponse:
    """Add the emoji reaction name to a message, file or file comment."""
    params = {"name": name, **target.to_params()}
    return call(client, "reactions.add", token, params, EmptyResponse)


def get(
    client: HttpClient, token: str, target: ItemTarget, *, full: bool | None = None
) -> Item:
    """Fetch an item together with its reactions.

    The response body itself is the item, discriminated by its `type`.
    """
    params = {**target.to_params(), **compact({"full": digit(full)})}
    return decode_item(make_authed_api_call(client, "reactions.get", token, params))


def list_reactions(
    client: HttpClient, token: str, *, options: ReactionListOptions | None = None
) -> ReactionListResponse:
    params = (options or ReactionListOptions()).to_params()
    return call(client, "reactions.list", token, params, ReactionListResponse)


def remove(client: HttpClient, token: str, name: str, target: ItemTarget) -> EmptyResponse:
    params = {"name": name, **target.to_params()}
    return call(client, "reactions.remove", token, params, EmptyResponse)
