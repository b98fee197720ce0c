"""pyps - list the invoking user's processes from /proc."""

import logging
import sys
from collections.abc import Generator, Iterator
from typing import TextIO

from pyps.config import Settings
from pyps.loader import load_record, release_record
from pyps.logging_config import setup_logging
from pyps.models import Failure, ProcessEntry, ReportLine, UserContext
from pyps.parser import parse_record
from pyps.report import build_report_line
from pyps.scanner import DirectoryScan, open_root

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _is_fatal(result: ReportLine | Failure | None) -> bool:
    return isinstance(result, Failure) and result.is_fatal


def handle_entry(root: str, entry: ProcessEntry, user: UserContext) -> ReportLine | Failure | None:
    """
    Load, parse and filter the status record of one process.

    The record is always released before returning, whatever the outcome.

    Returns:
        The report row, None if the process belongs to another user, or a
        Failure tagged SKIP or FATAL.
    """
    record = load_record(root, entry)
    if isinstance(record, Failure):
        return record

    result: ReportLine | Failure | None = None
    closed: Failure | None = None
    try:
        fields = parse_record(record)
    except ProcessLookupError as error:
        result = Failure.skip(f"Process {entry.name} exited while its status was read", error)
    except OSError as error:
        result = Failure.fatal(f"Error while reading status record of process {entry.name}", error)
    else:
        result = build_report_line(entry, fields, user)
        if result is None:
            logger.debug("Process %s is none of my business", entry.name)
    finally:
        closed = release_record(record)

    if closed is not None and not _is_fatal(result):
        return closed
    return result


def _report_entries(
    scan: DirectoryScan,
    settings: Settings,
    user: UserContext,
) -> Generator[ReportLine, None, Failure | None]:
    for entry in scan.processes(settings.policy):
        result = handle_entry(scan.root, entry, user)
        if isinstance(result, ReportLine):
            yield result
        elif isinstance(result, Failure):
            if result.is_fatal:
                return result
            logger.debug("Skipping process %s: %s", entry.name, result.describe())
    return scan.failure


def iter_report(settings: Settings, user: UserContext) -> Iterator[ReportLine | Failure]:
    """
    Scan the process root and yield a row per process owned by user.

    Skipped entries are logged and never yielded. A fatal failure ends the
    scan and is yielded as the last item.
    """
    scan = open_root(settings.proc_root)
    if isinstance(scan, Failure):
        yield scan
        return

    try:
        failure = yield from _report_entries(scan, settings, user)
    finally:
        closed = scan.close()

    if failure is None:
        failure = closed
    if failure is not None:
        yield failure


def run(
    settings: Settings | None = None,
    user: UserContext | None = None,
    out: TextIO | None = None,
) -> int:
    """
    Print the report and return the process exit code.

    Rows are written as soon as they are produced; a later fatal failure
    does not take back what was already printed.
    """
    if settings is None:
        settings = Settings()
    if user is None:
        user = UserContext.current()
    if out is None:
        out = sys.stdout

    for item in iter_report(settings, user):
        if isinstance(item, Failure):
            logger.error(item.describe())
            return EXIT_FAILURE
        print(item.format(), file=out)

    return EXIT_SUCCESS


def main() -> None:
    """Entry point for the pyps command."""
    settings = Settings()
    setup_logging(settings.log_level)
    sys.exit(run(settings, UserContext.current()))


if __name__ == "__main__":
    main()
