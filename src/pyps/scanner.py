"""Discovery of process directories under the process root."""

import logging
import os
from collections.abc import Iterator
from enum import Enum

from pyps.models import Failure, ProcessEntry

logger = logging.getLogger(__name__)

PROC_ROOT = "/proc"


class EntryPolicy(Enum):
    """Which directory entries count as processes."""

    NUMERIC = "numeric"  # only non-zero decimal names
    EXCLUDE_DOTS = "exclude-dots"  # anything but "." and ".."


# /proc also holds non-process directories such as "sys", "net" or "tty".
DEFAULT_POLICY = EntryPolicy.NUMERIC


def is_numeric_name(name: str) -> bool:
    """True if name is a plain base-10 integer other than zero."""
    return name.isascii() and name.isdigit() and int(name) != 0


def is_process_directory(entry: ProcessEntry, policy: EntryPolicy = DEFAULT_POLICY) -> bool:
    """Check whether an entry of the process root denotes a process."""
    if not entry.is_directory:
        return False
    if policy is EntryPolicy.NUMERIC:
        return is_numeric_name(entry.name)
    return not entry.is_dot_entry


class DirectoryScan:
    """
    A single pass over an open process root.

    The scan is lazy and cannot be restarted. A read error ends the
    iteration early and is kept in ``failure`` for the caller to act on.
    """

    def __init__(self, root: str, iterator: Iterator[os.DirEntry]) -> None:
        self._root = root
        self._iterator = iterator
        self.failure: Failure | None = None

    @property
    def root(self) -> str:
        return self._root

    def entries(self) -> Iterator[ProcessEntry]:
        """Yield every raw entry of the root."""
        while True:
            try:
                dirent = next(self._iterator)
            except StopIteration:
                return
            except OSError as error:
                self.failure = Failure.fatal(f"Unable to read directory '{self._root}'", error)
                return
            yield ProcessEntry(name=dirent.name, is_directory=_is_dir(dirent))

    def processes(self, policy: EntryPolicy = DEFAULT_POLICY) -> Iterator[ProcessEntry]:
        """Yield only the entries accepted by policy."""
        for entry in self.entries():
            if is_process_directory(entry, policy):
                yield entry
            else:
                logger.debug("Skipping '%s', not a process directory", entry.name)

    def close(self) -> Failure | None:
        """Release the directory handle."""
        try:
            self._iterator.close()
        except OSError as error:
            return Failure.fatal(
                f"Could not close directory '{self._root}', manual cleanup may be needed",
                error,
            )
        return None

    def __enter__(self) -> "DirectoryScan":
        return self

    def __exit__(self, *exc_info) -> None:
        failure = self.close()
        if failure is not None:
            raise OSError(failure.describe()) from failure.error


def _is_dir(dirent: os.DirEntry) -> bool:
    # /proc/self and /proc/thread-self are symlinks and must not count.
    try:
        return dirent.is_dir(follow_symlinks=False)
    except OSError:
        return False


def open_root(root: str = PROC_ROOT) -> DirectoryScan | Failure:
    """Open the process root for scanning."""
    try:
        iterator = os.scandir(root)
    except OSError as error:
        return Failure.fatal(f"Unable to open directory '{root}'", error)
    logger.debug("Opened process root %s", root)
    return DirectoryScan(root, iterator)
