"""Slack Web API bindings and a Real-Time Messaging client."""

from slack_rtm.client import RtmClient
from slack_rtm.errors import (
    ApiError,
    InternalError,
    JsonDecodeError,
    JsonEncodeError,
    JsonParseError,
    SlackError,
    TransportError,
    UrlError,
    Utf8Error,
)
from slack_rtm.events import Event
from slack_rtm.messages import Message
from slack_rtm.rtm.handler import EventHandler
from slack_rtm.rtm.session import RtmSession

__all__ = [
    "ApiError",
    "Event",
    "EventHandler",
    "InternalError",
    "JsonDecodeError",
    "JsonEncodeError",
    "JsonParseError",
    "Message",
    "RtmClient",
    "RtmSession",
    "SlackError",
    "TransportError",
    "UrlError",
    "Utf8Error",
]
