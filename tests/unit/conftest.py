"""Shared fixtures: a canned rtm.start payload and fakes wired to it."""

import json
from typing import Any

import pytest

from slack_rtm.http.fake import FakeHttpClient


def _channel(channel_id: str, name: str, *, is_general: bool = False) -> dict[str, Any]:
    return {
        "id": channel_id,
        "name": name,
        "is_channel": True,
        "created": 1360782804,
        "creator": "U1",
        "is_archived": False,
        "is_general": is_general,
        "is_member": True,
    }


def _group(group_id: str, name: str) -> dict[str, Any]:
    return {
        "id": group_id,
        "name": name,
        "is_group": True,
        "created": 1360782804,
        "creator": "U1",
        "is_archived": False,
    }


@pytest.fixture
def start_payload() -> dict[str, Any]:
    """A minimal but complete rtm.start response."""
    return {
        "ok": True,
        "url": "wss://ms9.slack-msgs.com/websocket/abc",
        "self": {
            "id": "U0",
            "name": "bot",
            "created": 1402463766,
            "manual_presence": "active",
        },
        "team": {
            "id": "T1",
            "name": "Example",
            "email_domain": "example.com",
            "domain": "example",
        },
        "users": [
            {"id": "U1", "name": "alice", "deleted": False, "profile": {}},
            {"id": "U2", "name": "bob", "deleted": False, "profile": {"real_name": "Bob"}},
        ],
        "channels": [_channel("C1", "general", is_general=True), _channel("C2", "random")],
        "groups": [_group("G1", "secret")],
        "ims": [{"id": "D1", "is_im": True, "user": "U1", "created": 1360782804}],
        "bots": [{"id": "B1", "name": "helper"}],
    }


@pytest.fixture
def http(start_payload: dict[str, Any]) -> FakeHttpClient:
    """FakeHttpClient answering rtm.start with start_payload."""
    return FakeHttpClient({"rtm.start": json.dumps(start_payload)})


@pytest.fixture
def make_channel():
    return _channel


@pytest.fixture
def make_group():
    return _group
