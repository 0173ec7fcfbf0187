"""Data models."""

from .config import (
    AuthConfig,
    DeploymentConfig,
    OutputConfig,
    PollConfig,
    ProfileConfig,
    VethConfig,
)
from .container import (
    ContainerState,
    ContainerStatus,
    RouterOSVersion,
)

__all__ = [
    "AuthConfig",
    "ContainerState",
    "ContainerStatus",
    "DeploymentConfig",
    "OutputConfig",
    "PollConfig",
    "ProfileConfig",
    "RouterOSVersion",
    "VethConfig",
]
