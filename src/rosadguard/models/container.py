"""Container and system models."""

import re
from enum import Enum
from functools import total_ordering
from typing import Any

from pydantic import BaseModel

from ..api.exceptions import VersionParseError
from ..utils.helpers import ros_bool

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")


class ContainerState(str, Enum):
    """Lifecycle state of the managed container as seen by the installer."""

    ABSENT = "absent"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    EXTRACTING = "extracting"
    READY = "ready"


class ContainerStatus(BaseModel):
    """Live status fields of a container record."""

    id: str | None = None
    name: str | None = None
    stopped: bool = False
    extracting: bool = False
    running: bool = False

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "ContainerStatus":
        """Build a status from a raw REST record.

        Walks every key/value pair rather than indexing, since RouterOS
        omits fields that do not apply to the current state.

        Args:
            record: Container record as returned by ``GET /container``

        Returns:
            Parsed status
        """
        fields: dict[str, Any] = {}
        for key, value in record.items():
            if key == ".id":
                fields["id"] = value
            elif key == "name":
                fields["name"] = value
            elif key in ("stopped", "extracting", "running"):
                fields[key] = ros_bool(value)
        return cls(**fields)

    @property
    def state(self) -> ContainerState:
        """Collapse the boolean fields into a single state."""
        if self.extracting:
            return ContainerState.EXTRACTING
        if self.running:
            return ContainerState.RUNNING
        if self.stopped:
            return ContainerState.STOPPED
        return ContainerState.STOPPING


@total_ordering
class RouterOSVersion(BaseModel):
    """Major/minor release of RouterOS."""

    major: int
    minor: int
    raw: str = ""

    @classmethod
    def parse(cls, raw: str) -> "RouterOSVersion":
        """Parse a version string such as ``"7.21.3 (stable)"``.

        Text after the first space is dropped, major is everything before
        the first dot and minor is the leading number of what follows, up
        to the next dot if there is one.

        Args:
            raw: Version string reported by the router

        Returns:
            Parsed version

        Raises:
            VersionParseError: If major or minor is not numeric
        """
        text = str(raw).strip().split(" ", 1)[0]
        major_part, sep, tail = text.partition(".")
        if not sep or not major_part.isdigit():
            raise VersionParseError(str(raw))

        minor_part = tail.split(".", 1)[0]
        match = _LEADING_DIGITS.match(minor_part)
        if not match:
            raise VersionParseError(str(raw))

        return cls(major=int(major_part), minor=int(match.group(1)), raw=str(raw))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouterOSVersion):
            return NotImplemented
        return (self.major, self.minor) == (other.major, other.minor)

    def __lt__(self, other: "RouterOSVersion") -> bool:
        return (self.major, self.minor) < (other.major, other.minor)

    def __hash__(self) -> int:
        return hash((self.major, self.minor))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"
