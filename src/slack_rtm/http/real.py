"""Real HttpClient implementation using urllib."""

import logging
import urllib.error
import urllib.request

from slack_rtm.errors import TransportError
from slack_rtm.http.abc import HttpClient

logger = logging.getLogger(__name__)


class UrllibHttpClient(HttpClient):
    """Production implementation backed by a urllib opener.

    Attributes:
        timeout: Socket timeout in seconds for each request, None for the
            interpreter default
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._opener = urllib.request.build_opener()
        self._timeout = timeout

    def get(self, url: str) -> bytes:
        # The query string carries the token and is never logged.
        logger.debug("GET %s", url.split("?", 1)[0])
        request = urllib.request.Request(url, method="GET")
        try:
            if self._timeout is None:
                response = self._opener.open(request)
            else:
                response = self._opener.open(request, timeout=self._timeout)
            with response:
                return response.read()
        except urllib.error.HTTPError as e:
            # Slack sends `ok: false` bodies (e.g. "ratelimited") with non-2xx statuses.
            body = _read_error_body(e)
            if not body:
                raise TransportError(f"HTTP {e.code} {e.reason}") from e
            logger.debug("HTTP %d carried a %d byte body", e.code, len(body))
            return body
        except urllib.error.URLError as e:
            raise TransportError(f"Request failed: {e.reason}") from e
        except OSError as e:
            raise TransportError(f"Request failed: {e}") from e


def _read_error_body(error: urllib.error.HTTPError) -> bytes:
    """Body of an error response, or b"" when there is none or it cannot be read."""
    try:
        with error:
            return error.read()
    except OSError:
        return b""
