"""Adapter for free-flowing row schedules (MGM, WPT, Wynn, ...).

Each event is a logical table row that starts with an optional event
number followed by day-of-week and date:

    12 FRI JAN 9 11AM NLH $250,000 GUARANTEED $600 $505 $55 $40 20K 30

Text extraction may wrap a row over several lines, so lines are grouped
from one row start to the next before any field is extracted.
"""

import logging
import math
import re
from dataclasses import dataclass

from poker_schedule.core import segmenter
from poker_schedule.core.format_detector import DAY_NAMES, MONTH_ABBRS, is_row_start
from poker_schedule.core.game_variant import classify_game_variant
from poker_schedule.core.models import TournamentRecord
from poker_schedule.core.venue import detect_venue, detect_year, find_venue_token
from .base import BaseAdapter

logger = logging.getLogger(__name__)


MONTH_FULL = {
    'JAN': 'January', 'FEB': 'February', 'MAR': 'March', 'APR': 'April',
    'MAY': 'May', 'JUN': 'June', 'JUL': 'July', 'AUG': 'August',
    'SEP': 'September', 'OCT': 'October', 'NOV': 'November', 'DEC': 'December',
}

EVENT_NUMBER_RE = re.compile(rf'^(\d{{1,3}}[A-G]?)\s+{DAY_NAMES}\b', re.IGNORECASE)
DATE_RE = re.compile(rf'\b{DAY_NAMES}\s+{MONTH_ABBRS}\s+(\d{{1,2}})', re.IGNORECASE)
TIME_RE = re.compile(r'\b(\d{1,2}(?::\d{2})?\s*(?:AM|PM))\b', re.IGNORECASE)
DOLLAR_RE = re.compile(r'\$[\d,]+')
CHIPS_RE = re.compile(r'\b(\d+)K\b', re.IGNORECASE)
# Trailing level duration, never the digits of a dollar amount
LEVELS_RE = re.compile(r'(?<![$\d,])\b(\d{1,2}(?:\s*,\s*\d{1,2})?)\s*$')
GUARANTEE_RE = re.compile(r'\$([\d,]+)\s*GUARANTEED', re.IGNORECASE)
MULTI_DAY_RE = re.compile(r'\((\d)-DAY EVENT\)', re.IGNORECASE)
EVENT_REF_RE = re.compile(r'EVENT\s+(\d+)', re.IGNORECASE)
SATELLITE_TARGET_RE = re.compile(r'EVENT\s+(\d+)\s+.*SATELLITE', re.IGNORECASE)
MAIN_EVENT_RE = re.compile(r'MAIN EVENT', re.IGNORECASE)

# Text right after a dollar amount that marks it as part of the name
NAME_AMOUNT_SUFFIX_RE = re.compile(r'^\s*(PER |REBUY|GUARANTEE)', re.IGNORECASE)

TRAILING_CHIPS_LEVELS_RE = re.compile(r'\s+\d+K\s+\d{1,2}(?:,\d{1,2})?\s*$', re.IGNORECASE)
TRAILING_CHIPS_RE = re.compile(r'\s+\d+K\s*$', re.IGNORECASE)

RESTART_RE = re.compile(r'\bRESTART\b|\bFINAL TABLE\b', re.IGNORECASE)
SATELLITE_RE = re.compile(r'\bSATELLITE\b|\bSUPER SAT', re.IGNORECASE)
FREEROLL_RE = re.compile(r'\bFREEROLL\b', re.IGNORECASE)
INVITE_ONLY_RE = re.compile(r'\bINVITE\s*ONLY\b', re.IGNORECASE)

# (pattern over the event name, note)
NOTE_KEYWORDS = [
    (re.compile(r'\bBOUNTY\b', re.IGNORECASE), 'Bounty'),
    (re.compile(r'\bFREEZEOUT\b', re.IGNORECASE), 'Freezeout'),
    (re.compile(r'\bTURBO\b', re.IGNORECASE), 'Turbo'),
]
SINGLE_REENTRY_RE = re.compile(r'\bSINGLE RE-ENTRY\b', re.IGNORECASE)

# Column headers of the multi-line table header
HEADER_FRAGMENTS = [re.compile(p, re.IGNORECASE) for p in (
    r'^event$', r'^#\s*day\b', r'^entry$', r'^prize$', r'^pool$', r'^house$',
    r'^fee$', r'^opt$', r'^add-on\b', r'^chips$', r'^levels$', r'^buy-in$',
    r'^total$',
)]

SERIES_LINE_RE = re.compile(
    r'^\d{4}\s+POTOMAC|POKER OPEN|WINTER|SUMMER|SPRING|CLASSIC|CHAMPIONSHIP',
    re.IGNORECASE)
MONTH_RANGE_RE = re.compile(
    r'^(JANUARY|FEBRUARY|MARCH|APRIL|MAY|JUNE|JULY|AUGUST|SEPTEMBER|OCTOBER|'
    r'NOVEMBER|DECEMBER)\s+\d', re.IGNORECASE)
PRESENTED_BY_RE = re.compile(r'^PRESENTED BY', re.IGNORECASE)


@dataclass
class DollarAmount:
    value: int
    index: int
    raw: str

    @property
    def end(self) -> int:
        return self.index + len(self.raw)


def is_column_header_line(line: str) -> bool:
    if is_row_start(line):
        return False
    if any(p.search(line.strip()) for p in HEADER_FRAGMENTS):
        return True
    # Single-line header such as "# Day \tDate \tTime \tEvent Total"
    return bool(re.match(r'^#\s*Day\s', line, re.IGNORECASE)
                and re.search(r'Date', line, re.IGNORECASE)
                and re.search(r'Time', line, re.IGNORECASE))


def is_metadata_line(line: str, year: int) -> bool:
    """Series title, date range, venue and sponsor lines above the table."""
    if is_row_start(line):
        return False
    return bool(SERIES_LINE_RE.search(line)
                or MONTH_RANGE_RE.search(line)
                or re.search(rf'\b{year}\b', line)
                or find_venue_token(line)
                or PRESENTED_BY_RE.search(line))


def group_rows(lines: list[str]) -> list[list[str]]:
    """Group lines into rows. Lines before the first row start are dropped."""
    rows = []
    current = None
    for line in lines:
        if is_row_start(line):
            if current:
                rows.append(current)
            current = [line]
        elif current is not None:
            current.append(line)
    if current:
        rows.append(current)
    return rows


def triage_amounts(joined: str, time_end: int) -> tuple[list[DollarAmount], list[DollarAmount]]:
    """Split dollar amounts into (column values, name-embedded amounts).

    An amount belongs to the event name when it is a guarantee, is
    followed by PER/REBUY/GUARANTEE, or is preceded by a comma (a list of
    prices inside the name). Remaining amounts after the time token are
    column values.
    """
    columns, embedded = [], []
    for m in DOLLAR_RE.finditer(joined):
        amount = DollarAmount(int(m.group(0)[1:].replace(',', '') or 0), m.start(), m.group(0))
        after = joined[amount.end:amount.end + 20]
        before = joined[max(0, amount.index - 5):amount.index]
        if NAME_AMOUNT_SUFFIX_RE.search(after) or re.search(r',\s*$', before):
            embedded.append(amount)
        elif amount.index > time_end:
            columns.append(amount)
    return columns, embedded


def clean_event_name(name: str) -> str:
    name = re.sub(r'\$[\d,]+\s*GUARANTEED\s*', '', name, flags=re.IGNORECASE)
    name = re.sub(r'["“”]$', '', name)
    name = re.sub(r'\s*INVITE\s*ONLY\s*', ' ', name, flags=re.IGNORECASE)
    return re.sub(r'\s+', ' ', name).strip()


def collect_notes(joined: str, name: str) -> str | None:
    notes = []
    guarantee = GUARANTEE_RE.search(joined)
    if guarantee:
        notes.append(f'${guarantee.group(1)} Guaranteed')
    notes.extend(note for pattern, note in NOTE_KEYWORDS if pattern.search(name))
    multi_day = MULTI_DAY_RE.search(name)
    if multi_day:
        notes.append(f'{multi_day.group(1)}-Day Event')
    if SINGLE_REENTRY_RE.search(name):
        notes.append('Single Re-Entry')
    return ', '.join(notes) if notes else None


def resolve_reference(name: str, pattern: re.Pattern) -> str | None:
    """Event number referenced by pattern, else "MAIN EVENT" if mentioned."""
    m = pattern.search(name)
    if m:
        return m.group(1)
    if MAIN_EVENT_RE.search(name):
        return 'MAIN EVENT'
    return None


class RowAdapter(BaseAdapter):
    """Rebuild tournaments from schedules with one text row per event."""

    def parse(self, text: str) -> list[TournamentRecord]:
        pages = segmenter.split_pages(text)
        all_text = '\n'.join(pages)
        year = self.config.year or detect_year(all_text)
        venue = self.config.venue or detect_venue(all_text)

        lines = []
        for page in pages:
            lines.extend(self.data_lines(page, year))

        tournaments = []
        for row in group_rows(lines):
            record = self.parse_row(row, year, venue)
            if record is None:
                logger.debug("Discarding unparseable row: %s", ' '.join(row)[:80])
                continue
            tournaments.append(record)

        return tournaments

    @staticmethod
    def data_lines(page: str, year: int) -> list[str]:
        """Table lines of a page, without header, metadata and footer lines."""
        lines = []
        header_done = False
        for line in segmenter.clean_lines(page):
            if is_column_header_line(line):
                header_done = True
                continue
            if not header_done:
                if is_metadata_line(line, year) or not is_row_start(line):
                    continue
                header_done = True
            lines.append(line)
        return lines

    def parse_row(self, row_lines: list[str], year: int, venue: str) -> TournamentRecord | None:
        """Extract one tournament from a grouped row, or None if it has no date."""
        joined = re.sub(r'\s+', ' ', ' '.join(row_lines)).strip()
        first_line = row_lines[0].replace('\t', ' ')

        date_match = DATE_RE.search(joined)
        if not date_match:
            return None
        month = date_match.group(2).upper()
        date = f'{MONTH_FULL.get(month, month)} {int(date_match.group(3))}, {year}'

        number_match = EVENT_NUMBER_RE.match(first_line)
        event_number = number_match.group(1) if number_match else None

        time_match = TIME_RE.search(joined)
        time = re.sub(r'\s+', '', time_match.group(1)).upper() if time_match else 'TBD'
        # Name and column values follow the time, or the date when no time is given
        name_start = time_match.end() if time_match else date_match.end()

        columns, _ = triage_amounts(joined, name_start)
        values = [c.value for c in columns[:4]] + [None] * (4 - min(len(columns), 4))
        total_entry, prize_pool, house_fee, opt_add_on = values

        chips_match = CHIPS_RE.search(joined)
        starting_chips = int(chips_match.group(1)) * 1000 if chips_match else None

        levels_match = LEVELS_RE.search(joined)
        level_duration = re.sub(r'\s', '', levels_match.group(1)) if levels_match else None

        name = self._extract_name(joined, name_start, columns)

        is_restart = bool(RESTART_RE.search(name))
        is_satellite = bool(SATELLITE_RE.search(name))
        is_freeroll = bool(FREEROLL_RE.search(name) or INVITE_ONLY_RE.search(joined))

        target_event = resolve_reference(name, SATELLITE_TARGET_RE) if is_satellite else None
        parent_event = resolve_reference(name, EVENT_REF_RE) if is_restart else None

        event_name = clean_event_name(name)
        if not event_name:
            logger.debug("Row on %s has no event name", date)
            return None
        if not total_entry and not (is_restart or is_freeroll):
            logger.debug("Row %r has no buy-in", event_name)
            return None

        record = TournamentRecord(
            event_number=event_number,
            event_name=event_name,
            date=date,
            time=time,
            buyin=0 if (is_restart or is_freeroll) else total_entry,
            starting_chips=starting_chips,
            level_duration=level_duration,
            game_variant=classify_game_variant(name),
            venue=venue,
            notes=collect_notes(joined, name),
            is_satellite=is_satellite,
            is_restart=is_restart,
            is_freeroll=is_freeroll,
            target_event=target_event,
            parent_event=parent_event,
        )

        if total_entry and prize_pool:
            rake_dollars = total_entry - prize_pool
            record.prize_pool = prize_pool
            record.house_fee = house_fee
            record.opt_add_on = opt_add_on
            record.rake_dollars = rake_dollars
            record.rake_pct = math.floor(rake_dollars / total_entry * 1000 + 0.5) / 10
        return record

    @staticmethod
    def _extract_name(joined: str, start: int, columns: list[DollarAmount]) -> str:
        """Text between the time and the first column amount.

        Rows without column amounts (restarts, freerolls) run to the end
        of the row, minus the trailing chips/levels tokens.
        """
        if columns:
            return joined[start:columns[0].index].strip()
        raw = joined[start:].strip()
        raw = TRAILING_CHIPS_LEVELS_RE.sub('', raw).strip()
        return TRAILING_CHIPS_RE.sub('', raw).strip()
