"""Error hierarchy for the Slack client.

Every Web API binding and every RTM operation raises one of these; library
exceptions are converted at the seam where they occur.
"""

from typing import Any


class SlackError(Exception):
    """Base class for every error raised by slack_rtm."""


class TransportError(SlackError):
    """TCP, TLS, HTTP or WebSocket failure, including the RTM read deadline."""


class Utf8Error(SlackError):
    """A response body or text frame was not valid UTF-8."""


class UrlError(SlackError):
    """A URL could not be parsed."""


class JsonParseError(SlackError):
    """Text was not syntactically valid JSON."""


class JsonDecodeError(SlackError):
    """Valid JSON did not match the expected record or tagged union.

    Attributes:
        tag: The offending discriminator value when the failure was an unknown
            `type` or `subtype`, None otherwise
    """

    def __init__(self, message: str, *, tag: str | None = None) -> None:
        super().__init__(message)
        self.tag = tag


class JsonEncodeError(SlackError):
    """An outbound value could not be rendered as JSON."""


class ApiError(SlackError):
    """Slack answered, but not with `ok: true`.

    Covers both `ok: false` and malformed envelopes (body not an object,
    `ok` missing or not a boolean).

    Attributes:
        raw: The parsed response object, or None when the body was not an object
        body: The response text exactly as received
    """

    def __init__(self, message: str, *, raw: dict[str, Any] | None, body: str) -> None:
        super().__init__(message)
        self.raw = raw
        self.body = body

    @property
    def error(self) -> str | None:
        """The `error` code Slack reported, if any."""
        if self.raw is None:
            return None
        value = self.raw.get("error")
        if isinstance(value, str):
            return value
        return None


class InternalError(SlackError):
    """A local invariant was violated, e.g. sending on a session that is not connected."""
