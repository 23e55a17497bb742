from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

AWS_METADATA_URL = (
    "http://169.254.169.254/2016-09-02/dynamic/instance-identity/document"
)


class UtilizationOverrides(BaseModel):
    """Raw user-supplied overrides. Values are validated by the normalizer."""

    logical_processors: Any = None
    total_ram_mib: Any = None
    billing_hostname: Any = None

    detect_aws: bool = True
    detect_docker: bool = True


class Settings(BaseSettings):
    # --- utilization ---
    utilization: UtilizationOverrides = Field(default_factory=UtilizationOverrides)

    # --- cloud metadata ---
    aws_metadata_url: str = AWS_METADATA_URL
    aws_timeout: float = 0.5  # seconds for the metadata HTTP call

    # --- probes ---
    probe_timeout: float | None = None  # None = wait for every probe
    sysctl_command: str = "sysctl"

    model_config = {
        "env_file": ".env",
        "env_prefix": "HOSTPROBE_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        raw = yaml.safe_load(Path(path).read_text())
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        return cls(**raw)


settings = Settings()
