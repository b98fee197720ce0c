"""Extraction of name, owner and resident memory from status records."""

import logging
import re
from collections.abc import Iterable

from pyps.models import ExtractedFields

logger = logging.getLogger(__name__)

NAME_KEY = "Name:"
UID_KEY = "Uid:"
VMRSS_KEY = "VmRSS:"

UNIT_SUFFIX = "kB"
RSS_SENTINEL = "0"

_LEADING_BLANKS = " \t"
_TOKEN_END = re.compile(r"[\t\n\v\f\r ]")


def extract_value(line: str, strip_unit: bool = True) -> str:
    """
    Extract the value part of a raw ``key:<blanks>value<unit>`` line.

    Only the first token after the colon is kept, so multi-valued lines
    such as ``Uid:\\t1000\\t1000\\t1000\\t1000`` yield ``"1000"``. Malformed
    lines never raise; they yield an empty or non-numeric string.

    Args:
        line: The raw line, trailing newline included or not.
        strip_unit: Remove a trailing ``kB`` unit from the value.

    Returns:
        The trimmed value.
    """
    _, colon, rest = line.partition(":")
    value = rest if colon else line
    value = value.lstrip(_LEADING_BLANKS)

    match = _TOKEN_END.search(value)
    if match is not None:
        value = value[: match.start()]

    if strip_unit and value.endswith(UNIT_SUFFIX):
        value = value[: -len(UNIT_SUFFIX)].rstrip(_LEADING_BLANKS)

    return value


def parse_record(lines: Iterable[str]) -> ExtractedFields:
    """
    Scan status record lines and collect the three reported fields.

    Lines are consumed in order until the iterable is exhausted. Keys are
    matched as exact, case-sensitive prefixes; other lines are ignored and
    a repeated key overwrites the earlier value. OSError raised by the
    underlying file propagates to the caller.
    """
    name = ""
    uid = ""
    vmrss = RSS_SENTINEL

    for line in lines:
        if line.startswith(NAME_KEY):
            name = extract_value(line)
        elif line.startswith(UID_KEY):
            uid = extract_value(line)
        elif line.startswith(VMRSS_KEY):
            vmrss = extract_value(line)
        else:
            continue
        logger.debug("Trimmed line %r", line)

    return ExtractedFields(process_name=name, owner_id=uid, resident_memory=vmrss)
