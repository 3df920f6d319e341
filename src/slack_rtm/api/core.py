"""Shared request path for the Slack Web API bindings.

Every binding builds a flat mapping of string parameters, calls
make_authed_api_call (or make_api_call for unauthenticated methods), and
decodes the validated body into its response model.
"""

import json
import logging
from typing import Any, TypeVar
from urllib.parse import urlencode

from pydantic import ValidationError

from slack_rtm.errors import ApiError, JsonDecodeError, JsonParseError, Utf8Error
from slack_rtm.http.abc import HttpClient
from slack_rtm.types import SlackModel

logger = logging.getLogger(__name__)

SLACK_API_BASE_URL = "https://slack.com/api"

ModelT = TypeVar("ModelT", bound=SlackModel)


class EmptyResponse(SlackModel):
    """Response of methods whose only payload is `ok: true`."""


def digit(value: bool | None) -> str | None:
    """Render a boolean the way legacy methods expect it ("1"/"0")."""
    if value is None:
        return None
    return "1" if value else "0"


def word(value: bool | None) -> str | None:
    """Render a boolean the way newer methods expect it ("true"/"false")."""
    if value is None:
        return None
    return "true" if value else "false"


def number(value: int | None) -> str | None:
    if value is None:
        return None
    return str(value)


def compact(values: dict[str, str | None]) -> dict[str, str]:
    """Drop unset optional parameters."""
    return {key: value for key, value in values.items() if value is not None}


def build_url(method: str, params: dict[str, str], *, base_url: str = SLACK_API_BASE_URL) -> str:
    """Build `<base_url>/<method>?<urlencoded params>`."""
    url = f"{base_url}/{method}"
    if not params:
        return url
    return f"{url}?{urlencode(params)}"


def check_response(text: str) -> dict[str, Any]:
    """Validate the envelope of a Web API response.

    Args:
        text: The response body

    Returns:
        The parsed body, guaranteed to be an object with `ok: true`

    Raises:
        JsonParseError: If the body is not valid JSON
        ApiError: If the body is not an object, `ok` is missing or not a
            boolean, or `ok` is false
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise JsonParseError(f"Slack response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ApiError(
            f"Bad Slack JSON response (not an object): {text}", raw=None, body=text
        )
    if "ok" not in parsed:
        raise ApiError(
            f'Slack JSON response does not contain "ok" field: {text}', raw=parsed, body=text
        )
    ok = parsed["ok"]
    if not isinstance(ok, bool):
        raise ApiError(f'Slack JSON response "ok" is not a boolean: {text}', raw=parsed, body=text)
    if not ok:
        raise ApiError(f'Slack JSON response "ok" is not true: {text}', raw=parsed, body=text)
    return parsed


def make_api_call(client: HttpClient, method: str, params: dict[str, str]) -> dict[str, Any]:
    """Call an unauthenticated Slack method and return the validated body.

    Raises:
        TransportError: If the request fails
        Utf8Error: If the body is not UTF-8
        JsonParseError: If the body is not JSON
        ApiError: If the body is not a successful Slack response
    """
    logger.debug("Calling Slack method %s", method)
    body = client.get(build_url(method, params))
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(f"Response to {method} is not valid UTF-8: {e}") from e

    try:
        return check_response(text)
    except ApiError as e:
        logger.debug("Slack method %s failed: %s", method, e.error)
        raise


def make_authed_api_call(
    client: HttpClient, method: str, token: str, params: dict[str, str]
) -> dict[str, Any]:
    """Call a Slack method with `token` added to its parameters."""
    return make_api_call(client, method, {**params, "token": token})


def decode_response(model: type[ModelT], raw: dict[str, Any]) -> ModelT:
    """Decode a validated response body into model.

    Raises:
        JsonDecodeError: If the body does not match the model
    """
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise JsonDecodeError(f"Unexpected {model.__name__} shape: {e}") from e


def call(
    client: HttpClient,
    method: str,
    token: str,
    params: dict[str, str],
    model: type[ModelT],
) -> ModelT:
    """Authenticated call decoded into model."""
    return decode_response(model, make_authed_api_call(client, method, token, params))
