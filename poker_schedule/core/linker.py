"""Post-processing pass linking restart sessions to their parent events."""

import re

from .models import TournamentRecord


FLIGHT_SUFFIX_RE = re.compile(r'[A-G]$', re.IGNORECASE)


def base_event_number(event_number: str) -> str:
    """Strip a trailing flight letter: "14A" -> "14"."""
    return FLIGHT_SUFFIX_RE.sub('', event_number)


def build_event_index(records: list[TournamentRecord]) -> dict[str, TournamentRecord]:
    """Map base event number -> first non-restart record carrying it."""
    index = {}
    for record in records:
        if record.event_number and not record.is_restart:
            index.setdefault(base_event_number(record.event_number), record)
    return index


def link_restarts(records: list[TournamentRecord]) -> list[TournamentRecord]:
    """Fill in parent_event for restarts that field extraction left unresolved.

    A restart is linked to the first indexed event whose "EVENT <n> "
    reference appears in its name. Satellites are not touched here; their
    target_event is settled during row parsing. Records are updated in
    place and the same list is returned.
    """
    index = build_event_index(records)
    for record in records:
        if not record.is_restart or record.parent_event:
            continue
        for number in index:
            if (f'EVENT {number} ' in record.event_name
                    or f'EVENT {number}\t' in record.event_name):
                record.parent_event = number
                break
    return records
