"""References to container images such as ``host.com/repo/image:1.0``."""

from __future__ import annotations

from dataclasses import dataclass

_EXPECTED_FORMAT = "A string of format [<hostname>/]<repository>[/<image>]*[:<tag>]"


@dataclass(frozen=True)
class DockerImageReference:
    """An image reference split into optional hostname, repository and optional tag."""

    hostname: str | None
    repository: str
    tag: str | None = None

    @classmethod
    def parse(cls, value: str) -> DockerImageReference:
        """Parse ``[<hostname>/]<repository>[:<tag>]`` into a reference."""
        if not isinstance(value, str):
            raise ValueError(f"invalid type: expected {_EXPECTED_FORMAT}")

        hostname: str | None = None
        repository_and_tag = value
        head, separator, rest = value.partition("/")
        if separator and (("." in head or ":" in head) or head == "localhost"):
            hostname = head
            repository_and_tag = rest

        repository, separator, tag = repository_and_tag.partition(":")
        return cls(
            hostname=hostname,
            repository=repository,
            tag=tag if separator else None,
        )

    def __str__(self) -> str:
        hostname = f"{self.hostname}/" if self.hostname is not None else ""
        tag = f":{self.tag}" if self.tag is not None else ""
        return f"{hostname}{self.repository}{tag}"