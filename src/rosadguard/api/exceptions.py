"""Custom exceptions for rosadguard."""


class RosAdguardError(Exception):
    """Base exception for rosadguard."""

    pass


class ConfigError(RosAdguardError):
    """Configuration related errors."""

    pass


class AuthenticationError(RosAdguardError):
    """Authentication failures."""

    pass


class APIError(RosAdguardError):
    """General RouterOS API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(APIError):
    """Resource not found (404)."""

    def __init__(self, resource: str, identifier: str) -> None:
        """Initialize resource not found error.

        Args:
            resource: Type of resource (container, veth, etc.)
            identifier: Resource identifier
        """
        super().__init__(f"{resource} '{identifier}' not found", status_code=404)
        self.resource = resource
        self.identifier = identifier


class PermissionError(APIError):
    """Permission denied (403)."""

    def __init__(self, message: str = "Permission denied") -> None:
        """Initialize permission error.

        Args:
            message: Error message
        """
        super().__init__(message, status_code=403)


class NetworkError(RosAdguardError):
    """Network related errors."""

    pass


class TimeoutError(RosAdguardError):
    """Request timeout errors."""

    pass


class DeployError(RosAdguardError):
    """Fatal failure of the install workflow."""

    pass


class PreconditionError(DeployError):
    """The router is not in a state the installer can work with."""

    pass


class VersionParseError(PreconditionError):
    """RouterOS reported a version string that cannot be parsed."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Cannot parse RouterOS version '{raw}'")
        self.raw = raw


class VersionTooOldError(PreconditionError):
    """RouterOS is older than the minimum supported release."""

    def __init__(self, required: str, detected: str) -> None:
        """Initialize version error.

        Args:
            required: Minimum version (e.g. "7.21")
            detected: Version reported by the router
        """
        super().__init__(
            f"RouterOS {required} or newer is required, detected {detected}. "
            "Upgrade the router firmware and re-run the installer."
        )
        self.required = required
        self.detected = detected


class RebootRequiredError(PreconditionError):
    """Container mode was just enabled and needs a restart to take effect."""

    def __init__(self) -> None:
        super().__init__(
            "Reboot required: container mode has been enabled. "
            "Restart the router, then re-run the installer."
        )


class WaitTimeoutError(DeployError):
    """A container did not reach the expected state in time."""

    def __init__(self, message: str, timeout: float) -> None:
        super().__init__(message)
        self.timeout = timeout


class StopTimeoutError(WaitTimeoutError):
    """The existing container did not stop within the ceiling."""

    def __init__(self, name: str, timeout: float) -> None:
        super().__init__(
            f"Stop timeout: container '{name}' did not stop within {timeout:g}s. "
            "Check the router and remove it manually.",
            timeout,
        )
        self.name = name


class ExtractTimeoutError(WaitTimeoutError):
    """The new container was not extracted and stopped within the ceiling."""

    def __init__(
        self,
        name: str,
        timeout: float,
        extracting: bool | None,
        stopped: bool | None,
    ) -> None:
        """Initialize extraction timeout.

        Args:
            name: Container name
            timeout: Ceiling that elapsed, in seconds
            extracting: Last observed ``extracting`` value
            stopped: Last observed ``stopped`` value
        """
        super().__init__(
            f"Container '{name}' not ready after {timeout:g}s "
            f"(extracting={_fmt(extracting)}, stopped={_fmt(stopped)})",
            timeout,
        )
        self.name = name
        self.extracting = extracting
        self.stopped = stopped


def _fmt(value: bool | None) -> str:
    return "unknown" if value is None else str(value).lower()
