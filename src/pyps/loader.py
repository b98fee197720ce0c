"""Locating and opening per-process status records."""

import logging
import os
from typing import TextIO

from pyps.models import Failure, ProcessEntry

logger = logging.getLogger(__name__)

STATUS_FILENAME = "status"


def status_path(root: str, entry: ProcessEntry) -> str:
    """Return <root>/<pid>/status for entry."""
    return os.path.join(root, entry.name, STATUS_FILENAME)


def load_record(root: str, entry: ProcessEntry) -> TextIO | Failure:
    """
    Open the status record of a process.

    A failed access probe means the process went away after the root was
    listed. That race is expected and reported as a skip. A record that
    passes the probe but still cannot be opened is fatal.

    Args:
        root: Process root the entry was listed from.
        entry: Entry accepted by the scanner.

    Returns:
        The open record, or a Failure tagged SKIP or FATAL.
    """
    path = status_path(root, entry)
    logger.debug("Handling status information from %s", path)

    if not os.access(path, os.R_OK):
        return Failure.skip(f"No readable status record at '{path}'")

    try:
        # Process names are arbitrary bytes.
        return open(path, "r", encoding="utf-8", errors="replace")
    except OSError as error:
        return Failure.fatal(f"Could not open status record '{path}'", error)


def release_record(record: TextIO) -> Failure | None:
    """Close a record returned by load_record."""
    try:
        record.close()
    except OSError as error:
        return Failure.fatal(
            f"Could not close status record '{record.name}', manual cleanup may be needed",
            error,
        )
    return None
