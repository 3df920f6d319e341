"""Option and response records shared by several method groups."""

from dataclasses import dataclass

from slack_rtm.api.core import compact, digit, number
from slack_rtm.messages import NestedMessage
from slack_rtm.types import SlackModel


@dataclass(frozen=True)
class HistoryOptions:
    """Optional parameters of channels/groups/im.history.

    Attributes:
        latest: End of time range of messages to include
        oldest: Start of time range of messages to include
        inclusive: Include messages with latest or oldest timestamp
        count: Number of messages to return, between 1 and 1000
    """

    latest: str | None = None
    oldest: str | None = None
    inclusive: bool | None = None
    count: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "latest": self.latest,
                "oldest": self.oldest,
                "inclusive": digit(self.inclusive),
                "count": number(self.count),
            }
        )


@dataclass(frozen=True)
class PageOptions:
    count: int | None = None
    page: int | None = None

    def to_params(self) -> dict[str, str]:
        return compact({"count": number(self.count), "page": number(self.page)})


@dataclass(frozen=True)
class ItemTarget:
    """Identifies a message, file or file comment.

    Used by pins, reactions and stars. Set `channel` and `timestamp` for a
    message, `file` for a file, or `file_comment` for a file comment.
    """

    channel: str | None = None
    timestamp: str | None = None
    file: str | None = None
    file_comment: str | None = None

    def to_params(self) -> dict[str, str]:
        return compact(
            {
                "channel": self.channel,
                "timestamp": self.timestamp,
                "file": self.file,
                "file_comment": self.file_comment,
            }
        )


class HistoryResponse(SlackModel):
    """A page of conversation history, newest first."""

    latest: str | None = None
    oldest: str | None = None
    messages: list[NestedMessage]
    has_more: bool
    is_limited: bool | None = None


class CloseResponse(SlackModel):
    no_op: bool | None = None
    already_closed: bool | None = None


class OpenResponse(SlackModel):
    no_op: bool | None = None
    already_open: bool | None = None


class PurposeResponse(SlackModel):
    purpose: str


class TopicResponse(SlackModel):
    topic: str
