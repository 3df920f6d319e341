"""Abstract HTTP client handle used by the Web API bindings."""

from abc import ABC, abstractmethod


class HttpClient(ABC):
    """Abstract interface for issuing HTTPS GET requests.

    The Web API bindings hold no state beyond an instance of this class; it
    is passed into every binding call.
    """

    @abstractmethod
    def get(self, url: str) -> bytes:
        """Perform a GET request and return the full response body.

        Args:
            url: Absolute URL including the encoded query string

        Returns:
            The raw response body, whatever the HTTP status, so that Slack's
            `ok: false` bodies on error statuses reach the ok gate

        Raises:
            TransportError: If the request could not be completed, or an error
                status arrived without a body
        """
        ...
