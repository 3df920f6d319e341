"""files.* methods. Uploading is not supported."""

from dataclasses import dataclass

from slack_rtm.api.common import PageOptions
from slack_rtm.api.core import EmptyResponse, call, compact, number
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import Comment, File, Paging, SlackModel


@dataclass(frozen=True)
class FileListOptions:
    """Filters of files.list.

    Attributes:
        user: Only files created by this user
        ts_from: Only files created after this unix timestamp
        ts_to: Only files created before this unix timestamp
        types: Comma-separated file types, e.g. "spaces,snippets"
        count: Number of items per page
        page: Page number
    """

    user: str | None = None
    ts_from: str | None = None
    ts_to: str | None = None
    types: str | None = None
    count: int | None = None
    page: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "user": self.user,
                "ts_from": self.ts_from,
                "ts_to": self.ts_to,
                "types": self.types,
                "count": number(self.count),
                "page": number(self.page),
            }
        )


class FileInfoResponse(SlackModel):
    file: File
    comments: list[Comment]
    paging: Paging


class FileListResponse(SlackModel):
    files: list[File]
    paging: Paging


def delete(client: HttpClient, token: str, file: str) -> EmptyResponse:
    return call(client, "files.delete", token, {"file": file}, EmptyResponse)


def info(
    client: HttpClient, token: str, file: str, *, options: PageOptions | None = None
) -> FileInfoResponse:
    """Fetch a file and a page of its comments."""
    params = {"file": file, **(options or PageOptions()).to_params()}
    return call(client, "files.info", token, params, FileInfoResponse)


def list_files(
    client: HttpClient, token: str, *, options: FileListOptions | None = None
) -> FileListResponse:
    params = (options or FileListOptions()).to_params()
    return call(client, "files.list", token, params, FileListResponse)
