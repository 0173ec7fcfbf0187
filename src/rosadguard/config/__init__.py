"""Configuration management."""

from .manager import Config, ConfigManager
from ..models.config import AuthConfig, DeploymentConfig, OutputConfig, ProfileConfig

__all__ = [
    "AuthConfig",
    "Config",
    "ConfigManager",
    "DeploymentConfig",
    "OutputConfig",
    "ProfileConfig",
]
