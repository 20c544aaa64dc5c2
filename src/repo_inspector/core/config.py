"""Configuration loading and validation."""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_GITHUB_API = "https://api.github.com"


class GitHubSettings(BaseModel):
    """GitHub connection settings."""
    token: Optional[str] = None
    base_url: str = DEFAULT_GITHUB_API

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"base_url must start with http:// or https://, got '{v}'"
            )
        return v.rstrip("/")


class RateLimitSettings(BaseModel):
    """Client-side approximation of the GitHub request budget."""
    max_requests: int = 60  # per window
    window_seconds: float = 60.0
    min_interval: float = 0.1  # seconds between consecutive requests
    max_retry_wait: float = 300.0  # never sleep longer than 5 minutes on a 403

    @field_validator('max_requests')
    @classmethod
    def validate_max_requests(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_requests must be >= 1, got {v}")
        return v

    @field_validator('window_seconds', 'max_retry_wait')
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"value must be positive, got {v}")
        return v

    @field_validator('min_interval')
    @classmethod
    def validate_min_interval(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"min_interval must be >= 0, got {v}")
        return v


class AnalyzerSettings(BaseModel):
    """Analysis run settings shared by all analyzers."""
    max_files: Optional[int] = 50  # None = analyze every discovered file
    default_branch: str = "main"
    skip_dirs: List[str] = Field(default_factory=lambda: ["node_modules"])
    ci_annotations: bool = True

    @field_validator('max_files')
    @classmethod
    def validate_max_files(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError(f"max_files must be >= 1, got {v}")
        return v


class InspectorConfig(BaseSettings):
    """Main repo-inspector configuration."""
    model_config = SettingsConfigDict(
        env_prefix="INSPECTOR_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    log_level: str = "WARNING"


_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} references in string values."""
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(v) for v in data]
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), data)
    return data


def _load_config_from_file(config_path: Path) -> InspectorConfig:
    with open(config_path) as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    data = _expand_env_vars(data)
    return InspectorConfig(**data)


def load_config(config_path: Optional[Path] = None) -> InspectorConfig:
    """Load configuration from a YAML file.

    A missing file is not an error: defaults (plus INSPECTOR_* environment
    overrides) are returned instead.
    """
    if config_path is None:
        return InspectorConfig()

    if not config_path.exists():
        logger.warning(
            f"Config file not found: {config_path}. Using default configuration."
        )
        return InspectorConfig()

    return _load_config_from_file(config_path)
