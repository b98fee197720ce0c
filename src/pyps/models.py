"""Data models for pyps."""

from dataclasses import dataclass
from enum import Enum

import psutil

PID_WIDTH = 7
NAME_WIDTH = 16
RSS_WIDTH = 10


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """One raw entry of the process root."""

    name: str
    is_directory: bool

    @property
    def is_dot_entry(self) -> bool:
        """True for the current and parent directory pseudo-entries."""
        return self.name in (".", "..")


@dataclass(slots=True, frozen=True)
class ExtractedFields:
    """Fields captured from a single status record."""

    process_name: str = ""
    owner_id: str = ""
    resident_memory: str = "0"  # kB, unit stripped


@dataclass(slots=True, frozen=True)
class UserContext:
    """Identity of the invoking user, read once at startup."""

    uid: int

    @classmethod
    def current(cls) -> "UserContext":
        """Build the context from the real uid of this process."""
        return cls(uid=psutil.Process().uids().real)


@dataclass(slots=True, frozen=True)
class ReportLine:
    """A single printed row of the report."""

    pid: str
    process_name: str
    resident_memory: str

    def format(self) -> str:
        """Render the row with aligned columns."""
        return (
            f"{self.pid:>{PID_WIDTH}} "
            f"{self.process_name:<{NAME_WIDTH}} "
            f"{self.resident_memory:>{RSS_WIDTH}}"
        )


class Outcome(Enum):
    """How the driver must react to a failed step."""

    SKIP = "skip"
    FATAL = "fatal"


@dataclass(slots=True, frozen=True)
class Failure:
    """Tagged result of a step that did not produce its value."""

    outcome: Outcome
    message: str
    error: OSError | None = None

    @classmethod
    def skip(cls, message: str, error: OSError | None = None) -> "Failure":
        return cls(Outcome.SKIP, message, error)

    @classmethod
    def fatal(cls, message: str, error: OSError | None = None) -> "Failure":
        return cls(Outcome.FATAL, message, error)

    @property
    def is_fatal(self) -> bool:
        return self.outcome is Outcome.FATAL

    def describe(self) -> str:
        """Message plus the underlying OS error, if any."""
        if self.error is None:
            return self.message
        return f"{self.message}: {self.error}"
