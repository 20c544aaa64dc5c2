"""Configuration models."""

from .config import (
    AnalyzerSettings,
    GitHubSettings,
    InspectorConfig,
    RateLimitSettings,
    load_config,
)

__all__ = [
    "AnalyzerSettings",
    "GitHubSettings",
    "InspectorConfig",
    "RateLimitSettings",
    "load_config",
]
