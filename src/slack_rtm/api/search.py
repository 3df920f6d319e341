"""search.* methods."""

from dataclasses import dataclass

from slack_rtm.api.core import call, compact, digit, number
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import File, Paging, SlackModel


@dataclass(frozen=True)
class SearchOptions:
    """Optional parameters shared by every search method.

    Attributes:
        sort: "score" or "timestamp"
        sort_dir: "asc" or "desc"
        highlight: Wrap matches in highlight markers
        count: Number of items per page
        page: Page number
    """

    sort: str | None = None
    sort_dir: str | None = None
    highlight: bool | None = None
    count: int | None = None
    page: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "sort": self.sort,
                "sort_dir": self.sort_dir,
                "highlight": digit(self.highlight),
                "count": number(self.count),
                "page": number(self.page),
            }
        )


class MessageLink(SlackModel):
    user: str
    username: str
    ts: str
    text: str


class SearchMessageChannel(SlackModel):
    id: str
    name: str


class SearchMessage(SlackModel):
    """A matching message with up to two messages of context on each side."""

    user: str
    username: str
    ts: str
    text: str
    channel: SearchMessageChannel
    permalink: str
    previous: MessageLink | None = None
    previous_2: MessageLink | None = None
    next: MessageLink | None = None
    next_2: MessageLink | None = None


class MessageMatches(SlackModel):
    total: int
    matches: list[SearchMessage]
    paging: Paging


class FileMatches(SlackModel):
    total: int
    matches: list[File]
    paging: Paging


class SearchResponse(SlackModel):
    """Result of a search; only the sections that were searched are present."""

    query: str
    messages: MessageMatches | None = None
    files: FileMatches | None = None


def _search(
    client: HttpClient, token: str, method: str, query: str, options: SearchOptions | None
) -> SearchResponse:
    params = {"query": query, **(options or SearchOptions()).to_params()}
    return call(client, method, token, params, SearchResponse)


def search_all(
    client: HttpClient, token: str, query: str, *, options: SearchOptions | None = None
) -> SearchResponse:
    """Search messages and files."""
    return _search(client, token, "search.all", query, options)


def search_files(
    client: HttpClient, token: str, query: str, *, options: SearchOptions | None = None
) -> SearchResponse:
    return _search(client, token, "search.files", query, options)


def search_messages(
    client: HttpClient, token: str, query: str, *, options: SearchOptions | None = None
) -> SearchResponse:
    return _search(client, token, "search.messages", query, options)
