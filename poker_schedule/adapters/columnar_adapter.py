"""Adapter for fixed-columnar schedule dumps (e.g. the WSOP schedule PDF).

Text extraction of these PDFs emits each table column as one long run of
lines, introduced by its header word(s):

    EVENT NAME ... DATE  -> dates      ("May 27")
    DAY                  -> day names  (ignored)
    TIME                 -> start times
    BUY-IN               -> buy-ins ("-" for non-tournament rows)
    STARTING / CHIPS     -> starting stacks
    LVL / DURATION       -> level durations
    RE-ENTRY             -> re-entry rules
    LATE / REG.          -> late registration, followed by event names
    EV#                  -> event numbers

Dates, times and buy-ins list one entry per physical table row, including
rows with no event ("Registration Opens", main-event restart days). Names,
numbers, chips, durations, re-entries and late-reg list one entry per
event. Rows are reassembled by mapping the i-th event onto the i-th table
row whose buy-in is not "-".

A missing entry in a per-event column shifts every later event's value
for that column; there is no way to detect this from the text alone.
"""

import enum
import logging
import re
from dataclasses import dataclass, field

from poker_schedule.core import segmenter
from poker_schedule.core.game_variant import classify_game_variant
from poker_schedule.core.models import TournamentRecord
from poker_schedule.core.rake import compute_rake
from poker_schedule.core.venue import COLUMNAR_VENUE, detect_year
from .base import BaseAdapter

logger = logging.getLogger(__name__)


class Column(enum.Enum):
    NONE = 'none'
    DATES = 'dates'
    DAYS = 'days'
    TIMES = 'times'
    BUYINS = 'buyins'
    CHIPS = 'chips'
    DURATIONS = 'durations'
    REENTRIES = 'reentries'
    LATE_REGS = 'late_regs'
    EVENT_NAMES = 'event_names'
    EVENT_NUMBERS = 'event_numbers'


# Header lines that belong to the current column header but start nothing new
STAY = None


def _exact(*words: str):
    return lambda line: line in words


# (trigger, next column). First matching trigger wins.
TRANSITIONS = [
    (lambda line: 'EVENT NAME' in line and 'DATE' in line, Column.DATES),
    (_exact('DAY'), Column.DAYS),
    (_exact('TIME'), Column.TIMES),
    (_exact('BUY-IN'), Column.BUYINS),
    (_exact('STARTING'), Column.CHIPS),
    (_exact('CHIPS'), STAY),
    (_exact('LVL'), Column.DURATIONS),
    (_exact('DURATION', '(MINUTES)'), STAY),
    (_exact('RE-ENTRY'), Column.REENTRIES),
    (_exact('LATE'), Column.LATE_REGS),
    (_exact('REG.'), STAY),
    (_exact('EV#'), Column.EVENT_NUMBERS),
]


def transition(line: str) -> tuple[bool, Column | None]:
    """Return (is_header, next_column) for a line.

    is_header is True when the line is a column header and must not be
    treated as data. next_column is None for header lines that keep the
    current column (e.g. "CHIPS" under "STARTING").
    """
    for trigger, target in TRANSITIONS:
        if trigger(line):
            return True, target
    return False, None


SKIP_PAGE_MARKERS = ('Consult structure sheets', 'Specialty Landmark',
                     'Take-Out Percentages')

MONTH_NAMES = {
    'jan': 'January', 'feb': 'February', 'mar': 'March', 'apr': 'April',
    'may': 'May', 'jun': 'June', 'jul': 'July', 'aug': 'August',
    'sep': 'September', 'oct': 'October', 'nov': 'November', 'dec': 'December',
}

DATE_RE = re.compile(r'^([A-Za-z]{3})[a-z]*\.?\s+(\d{1,2})$')
TIME_RE = re.compile(r'^\d{1,2}(:\d{2})?\s*(AM|PM)$', re.IGNORECASE)
BUYIN_RE = re.compile(r'^\$([\d,]+)')
CHIPS_RE = re.compile(r'^[\d,]+$')
DURATION_RE = re.compile(r'^[\d\s/]+$')
LATE_REG_RE = re.compile(r'^\d+\s*levels?$|^First', re.IGNORECASE)
EVENT_NUMBER_RE = re.compile(r'^\d{1,3}[A-E]?$')
REENTRY_RE = re.compile(r'^\d+$|^\d+\s*/\s*flight', re.IGNORECASE)

CONTINUATION_DAY_RE = re.compile(
    r'^MAIN EVENT\s*-\s*(Day\s+\d|Day\s+Off|Plays|Final)', re.IGNORECASE)
MULTI_DAY_SUFFIX_RE = re.compile(r'\(\d+-day event\)\s*$', re.IGNORECASE)

# Lines that open a new event name rather than continuing the previous one
NAME_STARTERS = [re.compile(p, re.IGNORECASE) for p in (
    r'^Mystery', r'^Industry', r'^\d+-Handed', r'^Omaha Hi-Lo', r'^Pot-Limit',
    r'^Seven Card Stud\s+\(', r'^Heads Up', r'^Dealers Choice', r'^No-Limit',
    r'^COLOSSUS', r'^SHOOTOUT', r'^High Roller', r'^Badugi\s+\(', r'^Big O',
    r'^Mixed[:\s]', r'^Super Turbo', r'^Freezeout', r'^MONSTER', r'^Seniors',
    r'^MILLIONAIRE', r'^Battle', r'^SUPER SENIORS', r'^TAG TEAM',
    r'^Poker Players', r'^Gladiators', r'^LADIES', r'^Limit 2-7',
    r'^Limit Hold', r'^MINI', r'^Pokernews', r'^Summer', r'^MAIN EVENT',
    r'^Ultra Stack', r'^Mid-Stakes', r'^Lucky', r'^Poker Hall',
    r'^T\.O\.R\.S\.E', r'^The Closer', r'^H\.O\.R\.S\.E', r'^Razz\s+\(',
    r'^SALUTE', r'^6-Handed', r'^8-Handed',
)]


def starts_new_event_name(line: str, buffer: list[str]) -> bool:
    """True if line begins a new event name instead of continuing buffer."""
    if not buffer:
        return True
    # Inside a semicolon game list the name keeps going until its
    # "(N-day event)" suffix closes it
    buffered = ' '.join(buffer)
    if ';' in buffered and not MULTI_DAY_SUFFIX_RE.search(buffered):
        return False
    return any(p.search(line) for p in NAME_STARTERS)


def normalize_date(raw: str, year: int) -> str | None:
    m = DATE_RE.match(raw)
    if not m:
        return None
    month = MONTH_NAMES.get(m.group(1).lower())
    if not month:
        return None
    return f'{month} {int(m.group(2))}, {year}'


def compact_time(raw: str) -> str:
    return re.sub(r'\s+', '', raw).upper()


@dataclass
class ColumnStreams:
    """Raw per-column sequences collected from one page."""
    dates: list = field(default_factory=list)
    times: list = field(default_factory=list)
    buyins: list = field(default_factory=list)        # None for "-" rows
    chips: list = field(default_factory=list)
    durations: list = field(default_factory=list)
    reentries: list = field(default_factory=list)
    late_regs: list = field(default_factory=list)
    event_names: list = field(default_factory=list)
    event_numbers: list = field(default_factory=list)

    def valid_row_indices(self) -> list[int]:
        """Table rows that hold an actual tournament (buy-in not "-")."""
        return [i for i, b in enumerate(self.buyins) if b is not None]


class ColumnarAdapter(BaseAdapter):
    """Rebuild tournaments from a column-per-attribute text dump."""

    def parse(self, text: str) -> list[TournamentRecord]:
        year = self.config.year or detect_year(text)
        tournaments = []
        for page_num, page in enumerate(segmenter.split_pages(text), start=1):
            if any(marker in page for marker in SKIP_PAGE_MARKERS):
                logger.debug("Skipping info page %d", page_num)
                continue
            records = self._parse_page(page, year)
            if not records:
                logger.debug("Page %d produced no events", page_num)
            tournaments.extend(records)
        return tournaments

    def _parse_page(self, page: str, year: int) -> list[TournamentRecord]:
        streams = self.collect_columns(segmenter.clean_lines(page))
        if not streams.event_numbers:
            return []

        valid_rows = streams.valid_row_indices()
        venue = self.config.venue or COLUMNAR_VENUE
        tournaments = []

        for i, event_number in enumerate(streams.event_numbers):
            name = _at(streams.event_names, i) or ''
            if not name.strip() or CONTINUATION_DAY_RE.search(name):
                continue

            row = _at(valid_rows, i)
            if row is None:
                logger.debug("Event %s has no matching table row", event_number)
                continue

            buyin = streams.buyins[row]
            if not buyin or buyin < self.config.min_buyin:
                continue

            date = _at(streams.dates, row)
            record = TournamentRecord(
                event_number=event_number,
                event_name=name,
                date=normalize_date(date, year) if date else '',
                time=_at(streams.times, row) or 'TBD',
                buyin=buyin,
                starting_chips=_at(streams.chips, i),
                level_duration=_at(streams.durations, i) or None,
                reentry=_at(streams.reentries, i),
                late_reg=_at(streams.late_regs, i),
                game_variant=classify_game_variant(name),
                venue=venue,
            )
            record.apply_rake(compute_rake(buyin, event_number))
            tournaments.append(record)

        return tournaments

    def collect_columns(self, lines: list[str]) -> ColumnStreams:
        """Run the column state machine over a page's lines."""
        streams = ColumnStreams()
        column = Column.NONE
        name_buffer = []

        def flush_names():
            if name_buffer:
                streams.event_names.append(' '.join(name_buffer))
                name_buffer.clear()

        for line in lines:
            is_header, target = transition(line)
            if is_header:
                if target is Column.EVENT_NUMBERS:
                    flush_names()
                if target is not STAY:
                    column = target
                continue

            if column is Column.LATE_REGS:
                if LATE_REG_RE.search(line):
                    streams.late_regs.append(line)
                    continue
                # First non-late-reg line is the start of the event names
                column = Column.EVENT_NAMES

            if column is Column.EVENT_NAMES:
                if starts_new_event_name(line, name_buffer):
                    flush_names()
                name_buffer.append(line)
            else:
                self._accept(streams, column, line)

        flush_names()
        streams.event_names = [n for n in streams.event_names
                               if 'registration opens' not in n.lower()
                               and not CONTINUATION_DAY_RE.search(n)]
        return streams

    @staticmethod
    def _accept(streams: ColumnStreams, column: Column, line: str):
        """Append line to its column's stream if it fits that column."""
        if column is Column.DATES:
            if DATE_RE.match(line) and line[:3].lower() in MONTH_NAMES:
                streams.dates.append(line)
        elif column is Column.TIMES:
            if TIME_RE.match(line) or line == 'TBD':
                streams.times.append(compact_time(line))
        elif column is Column.BUYINS:
            if line == '-':
                streams.buyins.append(None)
            elif line.startswith('$'):
                m = BUYIN_RE.match(line)
                streams.buyins.append(int(m.group(1).replace(',', '')) if m else None)
        elif column is Column.CHIPS:
            if line == '-':
                streams.chips.append(None)
            elif CHIPS_RE.match(line):
                streams.chips.append(int(line.replace(',', '')))
        elif column is Column.DURATIONS:
            if line == '-':
                streams.durations.append(None)
            elif DURATION_RE.match(line):
                streams.durations.append(line)
        elif column is Column.REENTRIES:
            lower = line.lower()
            if REENTRY_RE.search(line) or 'unlimited' in lower or 'bust' in lower:
                streams.reentries.append(line)
        elif column is Column.EVENT_NUMBERS:
            if EVENT_NUMBER_RE.match(line):
                streams.event_numbers.append(line)


def _at(seq: list, i: int):
    return seq[i] if 0 <= i < len(seq) else None
