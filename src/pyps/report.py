"""Ownership filter and report line construction."""

from pyps.models import ExtractedFields, ProcessEntry, ReportLine, UserContext


def parse_owner_id(text: str) -> int | None:
    """Parse an unsigned decimal uid, returning None if text is not one."""
    if not (text.isascii() and text.isdigit()):
        return None
    try:
        return int(text)
    except ValueError:
        # Longer than the interpreter's integer string conversion limit
        return None


def is_owned_by(fields: ExtractedFields, user: UserContext) -> bool:
    """Check whether the record's owner is the given user."""
    owner = parse_owner_id(fields.owner_id)
    return owner is not None and owner == user.uid


def build_report_line(
    entry: ProcessEntry,
    fields: ExtractedFields,
    user: UserContext,
) -> ReportLine | None:
    """Build the row for entry, or None if it belongs to someone else."""
    if not is_owned_by(fields, user):
        return None
    return ReportLine(
        pid=entry.name,
        process_name=fields.process_name,
        resident_memory=fields.resident_memory,
    )
