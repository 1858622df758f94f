"""Turning source control webhook deliveries into pipeline triggers."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from cinnabar.trigger import Branch, PullRequestEvent, PushEvent, Trigger

_EVENT_HEADER = "x-github-event"
_SUPPORTED_EVENTS = ("push", "pull_request")
_PULL_REQUEST_ACTIONS = frozenset({"opened", "reopened", "synchronize"})
_PAYLOAD_ERROR = "Failed to parse payload"
_MAX_ID = 2**64


class WebhookError(Exception):
    """Raised when a webhook delivery cannot be understood."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def parse_ref(value: str) -> str:
    """Return the branch or tag name of a git ref."""
    for prefix in ("refs/heads/", "refs/tags/"):
        if value.startswith(prefix):
            return value[len(prefix):]
    return value


def _header(headers: Mapping[str, Any], name: str) -> Any:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _header_text(value: Any) -> str:
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            raise WebhookError("Failed to parse event") from None
    if not isinstance(value, str) or any(
        not (char == "\t" or " " <= char <= "~") for char in value
    ):
        raise WebhookError("Failed to parse event")
    return value


def _object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise WebhookError(_PAYLOAD_ERROR)
    return value


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise WebhookError(_PAYLOAD_ERROR)
    return value


def _installation_id(data: dict[str, Any]) -> int:
    value = _object(data.get("installation")).get("id")
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < _MAX_ID:
        raise WebhookError(_PAYLOAD_ERROR)
    return value


def _repository(data: dict[str, Any]) -> tuple[str, str]:
    repository = _object(data.get("repository"))
    name = _string(repository, "name")
    owner = _string(_object(repository.get("owner")), "login")
    return owner, name


def _push_trigger(payload: dict[str, Any]) -> Trigger | None:
    ref = _string(payload, "ref")
    head_commit = payload.get("head_commit")
    commit = None if head_commit is None else _string(_object(head_commit), "id")
    owner, name = _repository(payload)
    installation_id = _installation_id(payload)

    prefix = "refs/heads/"
    if not ref.startswith(prefix) or commit is None:
        return None
    return Trigger(
        repository_owner=owner,
        repository_name=name,
        installation_id=installation_id,
        event=PushEvent(branch=Branch(name=ref[len(prefix):], commit=commit)),
    )


def _pull_request_branch(pull_request: dict[str, Any], key: str) -> Branch:
    data = _object(pull_request.get(key))
    return Branch(name=parse_ref(_string(data, "ref")), commit=_string(data, "sha"))


def _pull_request_trigger(payload: dict[str, Any]) -> Trigger | None:
    action = _string(payload, "action")
    if action not in _PULL_REQUEST_ACTIONS:
        return None

    installation_id = _installation_id(payload)
    owner, name = _repository(payload)
    pull_request = _object(payload.get("pull_request"))
    source = _pull_request_branch(pull_request, "head")
    target = _pull_request_branch(pull_request, "base")
    return Trigger(
        repository_owner=owner,
        repository_name=name,
        installation_id=installation_id,
        event=PullRequestEvent(source=source, target=target),
    )


def parse_trigger(headers: Mapping[str, Any], body: str) -> Trigger | None:
    """Build a trigger from a delivery, or ``None`` if it starts nothing."""
    event = _header(headers, _EVENT_HEADER)
    if event is None:
        raise WebhookError(f"Missing header {_EVENT_HEADER}")
    event = _header_text(event)

    if event not in _SUPPORTED_EVENTS:
        return None

    try:
        payload = _object(json.loads(body))
    except ValueError:
        raise WebhookError(_PAYLOAD_ERROR) from None

    if event == "push":
        return _push_trigger(payload)
    return _pull_request_trigger(payload)