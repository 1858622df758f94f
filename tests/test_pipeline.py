import pytest

from cinnabar.image_reference import DockerImageReference
from cinnabar.pipeline import (
    Pipeline,
    PipelineConfiguration,
    PipelineStatus,
    StepConfiguration,
)
from cinnabar.trigger import PushTriggerConfiguration


def _configuration_dict():
    return {
        "name": "build",
        "trigger": [{"event": "push", "branch": "main"}],
        "steps": [
            {
                "name": "compile",
                "image": "host.com/repo/image:1.0",
                "commands": ["make"],
                "cache": ["cargo-cache"],
            },
            {"name": "test", "image": "repo/image"},
        ],
    }


@pytest.mark.parametrize("text", ["pending", "running", "failed", "passed"])
def test_status_parse_round_trip(text):
    assert str(PipelineStatus.parse(text)) == text


def test_status_parse_pending():
    assert PipelineStatus.parse("pending") is PipelineStatus.PENDING


def test_status_parse_unknown():
    with pytest.raises(ValueError, match="Could not parse pipeline status Pending"):
        PipelineStatus.parse("Pending")


def test_configuration_from_dict():
    configuration = PipelineConfiguration.from_dict(_configuration_dict())
    assert configuration.name == "build"
    assert configuration.trigger == [PushTriggerConfiguration(branch="main")]
    assert configuration.steps[0].image == DockerImageReference(
        "host.com", "repo/image", "1.0"
    )
    assert configuration.steps[0].cache == ["cargo-cache"]
    assert configuration.steps[1].commands is None


def test_configuration_round_trip():
    configuration = PipelineConfiguration.from_dict(_configuration_dict())
    again = PipelineConfiguration.from_dict(configuration.to_dict())
    assert again == configuration


def test_step_to_dict_writes_image_as_string():
    step = StepConfiguration.from_dict({"name": "s", "image": "repo/image:1.0"})
    assert step.to_dict()["image"] == "repo/image:1.0"


def test_missing_field_is_rejected():
    data = _configuration_dict()
    del data["steps"]
    with pytest.raises(ValueError, match="missing field `steps`"):
        PipelineConfiguration.from_dict(data)


def test_step_missing_image_is_rejected():
    with pytest.raises(ValueError, match="missing field `image`"):
        StepConfiguration.from_dict({"name": "s"})


def test_bad_commands_type_is_rejected():
    with pytest.raises(ValueError):
        StepConfiguration.from_dict({"name": "s", "image": "x", "commands": "make"})


def test_unknown_trigger_is_rejected():
    data = _configuration_dict()
    data["trigger"] = [{"event": "pull"}]
    with pytest.raises(ValueError, match="unknown variant `pull`"):
        PipelineConfiguration.from_dict(data)


def test_pipeline_from_configuration():
    configuration = PipelineConfiguration.from_dict(_configuration_dict())
    pipeline = Pipeline.from_configuration(7, configuration)
    assert pipeline.id == 7
    assert pipeline.status is PipelineStatus.PENDING
    assert [step.id for step in pipeline.steps] == list(
        range(1, len(configuration.steps) + 1)
    )
    assert [step.configuration for step in pipeline.steps] == configuration.steps
    assert all(step.status is PipelineStatus.PENDING for step in pipeline.steps)


def test_pipeline_steps_are_copies():
    configuration = PipelineConfiguration.from_dict(_configuration_dict())
    pipeline = Pipeline.from_configuration(1, configuration)
    pipeline.steps[0].configuration.name = "changed"
    assert configuration.steps[0].name == "compile"