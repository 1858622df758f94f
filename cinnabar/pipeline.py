"""Pipeline configurations, pipelines and their steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cinnabar.image_reference import DockerImageReference
from cinnabar.trigger import TriggerConfiguration, parse_trigger_configuration


class PipelineStatus(Enum):
    """State of a pipeline or step; values are the stored text forms."""

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"

    @classmethod
    def parse(cls, value: str) -> PipelineStatus:
        """Parse the stored text form of a status."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Could not parse pipeline status {value}") from None

    def __str__(self) -> str:
        return self.value


def _required(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _string(data: dict[str, Any], key: str) -> str:
    value = _required(data, key)
    if not isinstance(value, str):
        raise ValueError(f"invalid type for field `{key}`: expected a string")
    return value


def _optional_strings(data: dict[str, Any], key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"invalid type for field `{key}`: expected a list of strings")
    return list(value)


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = _required(data, key)
    if not isinstance(value, list):
        raise ValueError(f"invalid type for field `{key}`: expected a list")
    return value


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"invalid type: expected {what}")
    return value


@dataclass
class StepConfiguration:
    """One step of a pipeline: an image, commands to run and cache volumes."""

    name: str
    image: DockerImageReference
    commands: list[str] | None = None
    cache: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> StepConfiguration:
        data = _mapping(data, "struct StepConfiguration")
        image = _required(data, "image")
        if not isinstance(image, str):
            raise ValueError("invalid type for field `image`: expected a string")
        return cls(
            name=_string(data, "name"),
            image=DockerImageReference.parse(image),
            commands=_optional_strings(data, "commands"),
            cache=_optional_strings(data, "cache"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "image": str(self.image),
            "commands": None if self.commands is None else list(self.commands),
            "cache": None if self.cache is None else list(self.cache),
        }


@dataclass
class PipelineConfiguration:
    """A named pipeline with the triggers that start it and its steps."""

    name: str
    trigger: list[TriggerConfiguration]
    steps: list[StepConfiguration]

    @classmethod
    def from_dict(cls, data: Any) -> PipelineConfiguration:
        data = _mapping(data, "struct PipelineConfiguration")
        return cls(
            name=_string(data, "name"),
            trigger=[parse_trigger_configuration(item) for item in _list(data, "trigger")],
            steps=[StepConfiguration.from_dict(item) for item in _list(data, "steps")],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "trigger": [configuration.to_dict() for configuration in self.trigger],
            "steps": [step.to_dict() for step in self.steps],
        }


@dataclass
class Step:
    """A step of a running pipeline."""

    id: int
    configuration: StepConfiguration
    status: PipelineStatus = PipelineStatus.PENDING


@dataclass
class Pipeline:
    """A pipeline instance built from a configuration."""

    id: int
    configuration: PipelineConfiguration
    steps: list[Step] = field(default_factory=list)
    status: PipelineStatus = PipelineStatus.PENDING

    @classmethod
    def from_configuration(
        cls, pipeline_id: int, configuration: PipelineConfiguration
    ) -> Pipeline:
        """Create a pending pipeline whose steps are numbered from one."""
        steps = [
            Step(id=number, configuration=StepConfiguration(**vars(step_configuration)))
            for number, step_configuration in enumerate(configuration.steps, start=1)
        ]
        return cls(id=pipeline_id, configuration=configuration, steps=steps)