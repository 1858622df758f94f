"""Trigger events from source control and the configurations that match them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Branch:
    """A branch name together with the commit it points at."""

    name: str
    commit: str


@dataclass(frozen=True)
class PushEvent:
    """A push to a branch."""

    branch: Branch


@dataclass(frozen=True)
class PullRequestEvent:
    """A pull request from a source branch into a target branch."""

    source: Branch
    target: Branch


TriggerEvent = Union[PushEvent, PullRequestEvent]


@dataclass(frozen=True)
class Trigger:
    """An event in a repository that may start pipelines."""

    repository_owner: str
    repository_name: str
    installation_id: int
    event: TriggerEvent


@dataclass(frozen=True)
class PushTriggerConfiguration:
    """Runs a pipeline on a push, optionally only to one branch."""

    branch: str | None = None

    def matches(self, trigger: Trigger) -> bool:
        event = trigger.event
        if not isinstance(event, PushEvent):
            return False
        return self.branch is None or self.branch == event.branch.name

    def to_dict(self) -> dict[str, Any]:
        return {"event": "push", "branch": self.branch}


@dataclass(frozen=True)
class PullRequestTriggerConfiguration:
    """Runs a pipeline on a pull request, optionally filtered by branches."""

    target: str | None = None
    source: str | None = None

    def matches(self, trigger: Trigger) -> bool:
        event = trigger.event
        if not isinstance(event, PullRequestEvent):
            return False
        source_matches = self.source is None or self.source == event.source.name
        target_matches = self.target is None or self.target == event.target.name
        return source_matches and target_matches

    def to_dict(self) -> dict[str, Any]:
        return {"event": "pull_request", "target": self.target, "source": self.source}


TriggerConfiguration = Union[PushTriggerConfiguration, PullRequestTriggerConfiguration]


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected a string")
    return value


def parse_trigger_configuration(data: Any) -> TriggerConfiguration:
    """Build a trigger configuration from a mapping tagged by its ``event`` key."""
    if not isinstance(data, dict):
        raise ValueError("invalid type: expected internally tagged enum TriggerConfiguration")
    if "event" not in data:
        raise ValueError("missing field `event`")

    event = data["event"]
    if event == "push":
        return PushTriggerConfiguration(branch=_optional_string(data, "branch"))
    if event == "pull_request":
        return PullRequestTriggerConfiguration(
            target=_optional_string(data, "target"),
            source=_optional_string(data, "source"),
        )
    raise ValueError(f"unknown variant `{event}`, expected `push` or `pull_request`")