import json

import pytest

from cinnabar.trigger import (
    Branch,
    PullRequestEvent,
    PullRequestTriggerConfiguration,
    PushEvent,
    PushTriggerConfiguration,
    Trigger,
    parse_trigger_configuration,
)


def _push(branch):
    return Trigger("Owner", "Repo", 789, PushEvent(Branch(branch, "123")))


def _pull_request(source, target):
    return Trigger(
        "Owner",
        "Repo",
        789,
        PullRequestEvent(source=Branch(source, "123"), target=Branch(target, "456")),
    )


def test_deserialize_push_trigger_configuration():
    data = json.loads('{"event": "push", "branch": "main"}')
    assert parse_trigger_configuration(data) == PushTriggerConfiguration(branch="main")


def test_deserialize_push_trigger_configuration_without_branch():
    data = json.loads('{"event": "push"}')
    assert parse_trigger_configuration(data) == PushTriggerConfiguration(branch=None)


def test_deserialize_unknown_trigger_configuration():
    data = json.loads('{"event": "pull"}')
    with pytest.raises(ValueError, match="unknown variant `pull`"):
        parse_trigger_configuration(data)


def test_deserialize_pull_request_configuration():
    data = {"event": "pull_request", "source": "feature", "target": "main"}
    assert parse_trigger_configuration(data) == PullRequestTriggerConfiguration(
        target="main", source="feature"
    )


def test_missing_event_is_rejected():
    with pytest.raises(ValueError, match="missing field `event`"):
        parse_trigger_configuration({"branch": "main"})


def test_configuration_round_trip():
    for configuration in (
        PushTriggerConfiguration("main"),
        PullRequestTriggerConfiguration(target="main", source=None),
    ):
        assert parse_trigger_configuration(configuration.to_dict()) == configuration


def test_push_without_branch_matches_any_push():
    assert PushTriggerConfiguration().matches(_push("anything")) is True


def test_push_with_branch_matches_only_that_branch():
    configuration = PushTriggerConfiguration(branch="main")
    assert configuration.matches(_push("main")) is True
    assert configuration.matches(_push("dev")) is False


def test_push_configuration_ignores_pull_requests():
    assert PushTriggerConfiguration().matches(_pull_request("a", "b")) is False


def test_pull_request_configuration_ignores_pushes():
    assert PullRequestTriggerConfiguration().matches(_push("main")) is False


def test_pull_request_filters_on_source_and_target():
    configuration = PullRequestTriggerConfiguration(target="main", source="feature")
    assert configuration.matches(_pull_request("feature", "main")) is True
    assert configuration.matches(_pull_request("other", "main")) is False
    assert configuration.matches(_pull_request("feature", "other")) is False


def test_pull_request_without_filters_matches_any():
    assert PullRequestTriggerConfiguration().matches(_pull_request("x", "y")) is True