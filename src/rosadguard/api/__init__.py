"""RouterOS API client and authentication."""

from .auth import AuthHandler
from .client import RouterOSClient
from .exceptions import (
    APIError,
    AuthenticationError,
    ConfigError,
    DeployError,
    ExtractTimeoutError,
    NetworkError,
    PermissionError,
    PreconditionError,
    RebootRequiredError,
    ResourceNotFoundError,
    RosAdguardError,
    StopTimeoutError,
    TimeoutError,
    VersionParseError,
    VersionTooOldError,
    WaitTimeoutError,
)

__all__ = [
    "APIError",
    "AuthHandler",
    "AuthenticationError",
    "ConfigError",
    "DeployError",
    "ExtractTimeoutError",
    "NetworkError",
    "PermissionError",
    "PreconditionError",
    "RebootRequiredError",
    "ResourceNotFoundError",
    "RosAdguardError",
    "RouterOSClient",
    "StopTimeoutError",
    "TimeoutError",
    "VersionParseError",
    "VersionTooOldError",
    "WaitTimeoutError",
]
