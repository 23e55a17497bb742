from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProcessorStats(BaseModel):
    """CPU topology counts. ``None`` means the count could not be measured."""

    logical: int | None = None
    cores: int | None = None
    packages: int | None = None


class UtilizationConfig(BaseModel):
    """Validated user overrides carried on the snapshot."""

    logical_processors: int | None = None
    total_ram_mib: int | None = None
    hostname: str | None = None


class DockerInfo(BaseModel):
    id: str


class SystemSnapshot(BaseModel):
    """One point-in-time description of the host.

    Every field other than ``processor_arch`` is either fully populated or
    ``None``. Serialized payloads use camelCase keys and omit absent fields.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    processor_arch: str
    config: UtilizationConfig | None = None
    packages: int | None = None
    logical_processors: int | None = None
    cores: int | None = None
    memory: float | None = None
    kernel_version: str | None = None
    docker: DockerInfo | None = None
    aws: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
