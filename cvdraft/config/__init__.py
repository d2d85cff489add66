"""Application and run configuration."""

from cvdraft.config.job_config import JobConfig, load_job_config
from cvdraft.config.settings import (
    ConfigurationError,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ConfigurationError",
    "JobConfig",
    "Settings",
    "get_settings",
    "load_job_config",
    "reset_settings",
]
