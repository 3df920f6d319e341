"""Callback interface implemented by RTM applications."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from slack_rtm.errors import SlackError
from slack_rtm.events import Event

if TYPE_CHECKING:
    from slack_rtm.rtm.session import RtmSession


class EventHandler(ABC):
    """Receives the events of one RTM session.

    Callbacks are only ever invoked from the thread calling run(), one at a
    time: on_connect first, then any number of on_event and on_ping, then
    on_close if the server closed the connection. The session passed in can
    be used to send messages from inside any callback.
    """

    @abstractmethod
    def on_connect(self, session: "RtmSession") -> None:
        """Called once after the WebSocket is open, before any frame is read."""
        ...

    @abstractmethod
    def on_event(self, session: "RtmSession", event: Event | SlackError, raw: str) -> None:
        """Called for every text frame.

        Args:
            session: The running session
            event: The decoded event, or the decode error when the frame was
                not a recognised event; decode errors do not end the session
            raw: The frame text exactly as received
        """
        ...

    @abstractmethod
    def on_close(self, session: "RtmSession") -> None:
        """Called when the server sends a close frame, just before run() returns."""
        ...

    def on_ping(self, session: "RtmSession") -> None:
        """Called for every server ping. The pong is sent regardless."""
