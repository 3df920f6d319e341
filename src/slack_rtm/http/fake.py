"""Fake implementation of HttpClient for testing."""

from dataclasses import dataclass
from urllib.parse import parse_qsl, urlsplit

from slack_rtm.errors import TransportError
from slack_rtm.http.abc import HttpClient


@dataclass(frozen=True)
class FakeHttpRequest:
    """A request recorded by FakeHttpClient.

    Attributes:
        method: Slack method name taken from the last path segment (e.g. "auth.test")
        params: Decoded query parameters
        url: The full URL that was requested
    """

    method: str
    params: dict[str, str]
    url: str


class FakeHttpClient(HttpClient):
    """Fake implementation that serves canned bodies keyed by Slack method.

    Example:
        >>> http = FakeHttpClient()
        >>> http.set_response("auth.test", '{"ok": true, ...}')
        >>> auth.test(http, "xoxb-token")
    """

    def __init__(self, responses: dict[str, str | bytes] | None = None) -> None:
        self._responses: dict[str, bytes] = {}
        self._failures: dict[str, str] = {}
        self._requests: list[FakeHttpRequest] = []
        for method, body in (responses or {}).items():
            self.set_response(method, body)

    def set_response(self, method: str, body: str | bytes) -> None:
        """Serve body for every subsequent call to method."""
        self._responses[method] = body.encode("utf-8") if isinstance(body, str) else body

    def set_failure(self, method: str, message: str) -> None:
        """Make every subsequent call to method raise TransportError."""
        self._failures[method] = message

    def get(self, url: str) -> bytes:
        parts = urlsplit(url)
        method = parts.path.rsplit("/", 1)[-1]
        params = dict(parse_qsl(parts.query, keep_blank_values=True))
        self._requests.append(FakeHttpRequest(method=method, params=params, url=url))

        if method in self._failures:
            raise TransportError(self._failures[method])
        if method not in self._responses:
            raise TransportError(f"No fake response configured for {method}")
        return self._responses[method]

    @property
    def requests(self) -> list[FakeHttpRequest]:
        """Read-only access to requests made, in order.

        Returns:
            Copy of the request list
        """
        return list(self._requests)
