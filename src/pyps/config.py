"""Build-time configuration for pyps."""

from dataclasses import dataclass

from pyps.scanner import DEFAULT_POLICY, PROC_ROOT, EntryPolicy

# Debug notices on stderr. Flip to True for a debugging build.
DEBUG = False


@dataclass(slots=True, frozen=True)
class Settings:
    """Immutable settings for a single scan."""

    proc_root: str = PROC_ROOT
    policy: EntryPolicy = DEFAULT_POLICY
    debug: bool = DEBUG

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "WARNING"
