"""Run configuration for a target job (reapply window, attempts, daemon)."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cvdraft.config.settings import ConfigurationError


class JobConfig(BaseModel):
    """Job run configuration, stored on disk as camelCase JSON.

    Example::

        {"job": "Data Engineer at Acme", "minReapplyDays": 30,
         "maxReapplyDays": 90, "maxAttempts": 3, "daemon": false}
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job: str | None = Field(default=None, description="Target job title/description")
    min_reapply_days: int = Field(default=30, ge=0, alias="minReapplyDays")
    max_reapply_days: int = Field(default=90, ge=0, alias="maxReapplyDays")
    max_attempts: int = Field(default=3, ge=1, alias="maxAttempts")
    daemon: bool = Field(default=False, description="Keep retrying between attempts")

    @model_validator(mode="after")
    def check_reapply_window(self) -> JobConfig:
        if self.max_reapply_days < self.min_reapply_days:
            raise ValueError(
                "maxReapplyDays must be greater than or equal to minReapplyDays"
            )
        return self


def load_job_config(path: Path | str) -> JobConfig:
    """Load and validate the job configuration file.

    Raises:
        ConfigurationError: If the file is missing, not JSON, or invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Job config not found: {config_path}")

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in job config: {config_path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read job config: {config_path}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Job config must be a JSON object: {config_path}")

    try:
        return JobConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid job config {config_path}: {e}") from e
