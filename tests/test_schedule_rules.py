"""Unit tests for the shared rules: classifier, rake tiers, linker, column
state machine, segmenter and row field extraction."""

import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from poker_schedule.core import segmenter
from poker_schedule.core.format_detector import COLUMNAR, ROW, detect_format, is_row_start
from poker_schedule.core.game_variant import (
    DEFAULT_VARIANT, VARIANT_LABELS, classify_game_variant
)
from poker_schedule.core.linker import base_event_number, link_restarts
from poker_schedule.core.models import TournamentRecord, UNKNOWN_RAKE
from poker_schedule.core.rake import RAKE_TIERS, compute_rake, find_tier
from poker_schedule.core.venue import detect_series_name, detect_venue, detect_year
from poker_schedule.adapters.columnar_adapter import (
    Column, ColumnarAdapter, normalize_date, starts_new_event_name, transition
)
from poker_schedule.adapters.row_adapter import (
    RowAdapter, clean_event_name, group_rows, triage_amounts
)


# ─── Game variant classifier ────────────────────────────────────────

@pytest.mark.parametrize('name,expected', [
    ("Dealers Choice 6-Handed", 'Dealers Choice'),
    ("Mixed: 8-Game", 'Mixed Games'),
    ("9-Game Mix", 'Mixed Games'),
    ("H.O.R.S.E.", 'H.O.R.S.E.'),
    ("T.O.R.S.E. Championship", 'T.O.R.S.E.'),
    ("Mixed PLO/PLO8/Big O", 'PLO'),
    ("Mixed Games Championship", 'Mixed Games'),
    ("Pot-Limit Omaha Hi-Lo 8 or Better", 'PLO Hi-Lo'),
    ("PLO 8 Bounty", 'PLO Hi-Lo'),
    ("5-Card PLO", '5-Card PLO'),
    ("Pot-Limit Omaha (8-Handed)", 'PLO'),
    ("Big O", 'Big O'),
    ("Omaha Hi-Lo 8 or Better", 'Omaha Hi-Lo'),
    ("Limit 2-7 Triple Draw", '2-7 Triple Draw'),
    ("No-Limit 2-7 Lowball Draw", '2-7 Lowball'),
    ("Seven Card Stud Hi-Lo 8 or Better", 'Stud Hi-Lo'),
    ("Seven Card Stud (8-Handed)", '7-Card Stud'),
    ("Razz (8-Handed)", 'Razz'),
    ("Badugi (8-Handed)", 'Badugi'),
    ("Limit Hold'em", 'Limit Holdem'),
    ("No-Limit Hold'em Mystery Millions", 'NLHE'),
    ("SALUTE TO WARRIORS", 'NLHE'),
])
def test_classify_game_variant(name, expected):
    assert classify_game_variant(name) == expected


def test_classifier_ignores_semicolon_game_list():
    name = "Dealers Choice 6-Handed; Razz, Badugi, PLO"
    assert classify_game_variant(name) == 'Dealers Choice'
    assert classify_game_variant("No-Limit Hold'em; Razz") == 'NLHE'


def test_limit_holdem_excludes_no_limit():
    assert classify_game_variant("No-Limit Hold'em") == 'NLHE'


@pytest.mark.parametrize('name', [None, '', '   '])
def test_classifier_never_empty(name):
    assert classify_game_variant(name) == DEFAULT_VARIANT


@pytest.mark.parametrize('label', sorted(VARIANT_LABELS))
def test_labels_classify_to_themselves(label):
    assert classify_game_variant(label) == label


# ─── Rake engine ────────────────────────────────────────────────────

class TestRake:
    def test_standard_tier(self):
        rake = compute_rake(500)
        assert rake.rake_dollars == 85
        assert rake.prize_pool == 415

    def test_event_override(self):
        rake = compute_rake(500, '59')
        assert rake.rake_dollars == 50
        assert rake.prize_pool == 450

    def test_override_matches_flight_base(self):
        assert compute_rake(500, '59B').rake_dollars == 50

    def test_below_lowest_tier_uses_lowest(self):
        assert find_tier(275) == RAKE_TIERS[300]
        rake = compute_rake(275)
        assert rake.rake_dollars == 47
        assert rake.prize_pool == 228

    def test_between_tiers_uses_tier_below(self):
        assert find_tier(700) == RAKE_TIERS[600]
        assert find_tier(1000000) == RAKE_TIERS[250000]

    @pytest.mark.parametrize('buyin', [275, 300, 555, 1000, 1234, 1500, 3333, 10000, 50000])
    def test_breakdown_adds_up(self, buyin):
        rake = compute_rake(buyin)
        assert rake.prize_pool + rake.rake_dollars == buyin
        assert abs(rake.house_fee + rake.opt_add_on - rake.rake_dollars) <= 1

    def test_empty_table_is_unknown_not_zero(self):
        rake = compute_rake(500, tiers={}, overrides={})
        assert rake == UNKNOWN_RAKE
        assert not rake.resolved
        assert rake.prize_pool is None and rake.rake_dollars is None

    def test_unknown_rake_leaves_record_untouched(self):
        record = TournamentRecord(event_name='Event', date='May 27, 2026', buyin=500)
        record.apply_rake(UNKNOWN_RAKE)
        assert record.prize_pool is None
        record.apply_rake(compute_rake(500))
        assert record.prize_pool == 415
        assert record.rake_pct == 17.0


# ─── Linker ─────────────────────────────────────────────────────────

def _record(name, number=None, restart=False, parent=None):
    return TournamentRecord(event_name=name, date='January 10, 2026',
                            event_number=number, is_restart=restart,
                            parent_event=parent)


class TestLinker:
    def test_base_event_number(self):
        assert base_event_number('14A') == '14'
        assert base_event_number('14') == '14'

    def test_links_by_event_reference(self):
        records = [
            _record('NLH DEEPSTACK', '7A'),
            _record('NLH DEEPSTACK', '7B'),
            _record('PLO', '8'),
            _record('EVENT 8 PLO DAY 2 RESTART', restart=True),
        ]
        link_restarts(records)
        assert records[3].parent_event == '8'

    def test_keeps_existing_parent(self):
        records = [_record('PLO', '8'),
                   _record('EVENT 8 DAY 2 RESTART', restart=True, parent='MAIN EVENT')]
        link_restarts(records)
        assert records[1].parent_event == 'MAIN EVENT'

    def test_restarts_are_not_parents(self):
        records = [_record('EVENT 3 FINAL TABLE', '3', restart=True),
                   _record('EVENT 3 DAY 2 RESTART', restart=True)]
        link_restarts(records)
        assert records[1].parent_event is None


# ─── Column state machine ───────────────────────────────────────────

class TestColumnTransitions:
    @pytest.mark.parametrize('line,target', [
        ('DATE EVENT NAME', Column.DATES),
        ('DAY', Column.DAYS),
        ('TIME', Column.TIMES),
        ('BUY-IN', Column.BUYINS),
        ('STARTING', Column.CHIPS),
        ('LVL', Column.DURATIONS),
        ('RE-ENTRY', Column.REENTRIES),
        ('LATE', Column.LATE_REGS),
        ('EV#', Column.EVENT_NUMBERS),
    ])
    def test_header_starts_column(self, line, target):
        assert transition(line) == (True, target)

    @pytest.mark.parametrize('line', ['CHIPS', 'DURATION', '(MINUTES)', 'REG.'])
    def test_continuation_headers_keep_column(self, line):
        assert transition(line) == (True, None)

    def test_data_line_is_not_header(self):
        assert transition('$1,500') == (False, None)

    def test_unmatched_lines_are_ignored(self):
        streams = ColumnarAdapter().collect_columns(
            ['BUY-IN', '$500', 'n/a', '-', 'TIME', '$600', '7 PM'])
        assert streams.buyins == [500, None]
        assert streams.times == ['7PM']

    def test_late_reg_falls_through_to_names(self):
        streams = ColumnarAdapter().collect_columns(
            ['LATE', 'REG.', '8 levels', 'No-Limit Hold\'em', 'Deepstack',
             'Omaha Hi-Lo 8 or Better', 'EV#', '12', '13'])
        assert streams.late_regs == ['8 levels']
        assert streams.event_names == ["No-Limit Hold'em Deepstack", 'Omaha Hi-Lo 8 or Better']
        assert streams.event_numbers == ['12', '13']

    def test_name_buffer_waits_for_end_of_game_list(self):
        assert not starts_new_event_name('Razz (8-Handed)', ['Mixed: Razz;'])
        assert starts_new_event_name('Razz (8-Handed)', ['Mixed; Stud (3-day event)'])
        assert starts_new_event_name('Anything', [])

    def test_normalize_date(self):
        assert normalize_date('May 27', 2026) == 'May 27, 2026'
        assert normalize_date('Jul 4', 2026) == 'July 4, 2026'
        assert normalize_date('Tue', 2026) is None

    def test_misaligned_columns_shift_values(self):
        # Stacks are assigned by event order; a missing entry is not detected
        lines = ['BUY-IN', '$1,000', '$1,500', 'STARTING', 'CHIPS', '60,000',
                 'LATE', 'No-Limit Hold\'em', 'Pot-Limit Omaha', 'EV#', '1', '2']
        text = '\n'.join(['DATE EVENT NAME', 'May 27', 'May 28', 'TIME', '11AM', '3PM']
                         + lines) + '\n-- 1 of 1 --\n'
        records = ColumnarAdapter().parse(text)
        assert [r.starting_chips for r in records] == [60000, None]


# ─── Segmenter, detector, metadata ─────────────────────────────────

class TestSegmenter:
    def test_split_pages(self):
        text = 'a\n-- 1 of 3 --\nb\n-- 2 of 3 --\n  \n-- 3 of 3 --\n'
        assert [p.strip() for p in segmenter.split_pages(text)] == ['a', 'b']

    def test_clean_lines_drops_noise_and_footers(self):
        page = 'WOHLD SERIES\n3/10\n  data  \nMust be 21+ to play\n\nmore'
        assert segmenter.clean_lines(page) == ['data', 'more']


class TestFormatDetector:
    def test_columnar_markers(self):
        assert detect_format('EV#\nLVL\nRE-ENTRY') == COLUMNAR
        assert detect_format('EV#\nLVL\nLATE') == COLUMNAR

    def test_row_start(self):
        assert detect_format('HEADER\n12 FRI JAN 9 11AM NLH $400') == ROW
        assert is_row_start('14A TUES MAR 3 7PM')
        assert not is_row_start('NLH FRI JAN 9')

    def test_defaults_to_row(self):
        assert detect_format('nothing recognisable here') == ROW
        assert detect_format('') == ROW


class TestMetadata:
    def test_year(self):
        assert detect_year('2026 POTOMAC POKER OPEN') == 2026

    def test_year_falls_back_to_current(self):
        import datetime
        assert detect_year('no year') == datetime.date.today().year

    def test_venue(self):
        assert detect_venue('Live at the BELLAGIO') == 'Bellagio'
        assert detect_venue('somewhere') == 'Unknown Venue'

    def test_series_name(self):
        assert detect_series_name('2026 POTOMAC POKER OPEN\nJAN 8') == '2026 POTOMAC POKER OPEN'


# ─── Row grouping and field extraction ──────────────────────────────

class TestRowFields:
    def test_group_rows_drops_leading_noise(self):
        rows = group_rows(['junk', 'FRI JAN 9 11AM A', 'cont', 'SAT JAN 10 1PM B'])
        assert rows == [['FRI JAN 9 11AM A', 'cont'], ['SAT JAN 10 1PM B']]

    def test_triage_amounts(self):
        joined = 'FRI JAN 9 11AM NLH $5,000 GUARANTEED $100, $200 ADD-ONS $300 PER TEAM $400 $350'
        columns, embedded = triage_amounts(joined, joined.index('NLH'))
        assert [c.value for c in columns] == [100, 400, 350]
        assert [e.value for e in embedded] == [5000, 200, 300]

    def test_row_without_date_is_discarded(self):
        assert RowAdapter().parse_row(['EVENT 1 NLH $400 $340'], 2026, 'Aria') is None

    def test_time_defaults_to_tbd(self):
        record = RowAdapter().parse_row(['FRI JAN 9 NLH DEEPSTACK $400 $340'], 2026, 'Aria')
        assert record.time == 'TBD'
        assert record.event_name == 'NLH DEEPSTACK'
        assert record.buyin == 400

    def test_row_without_buyin_is_dropped(self):
        assert RowAdapter().parse_row(['FRI JAN 9 11AM NLH DEEPSTACK 20K 30'], 2026, 'Aria') is None

    def test_caller_year_and_venue(self):
        from poker_schedule.core.models import ScheduleConfig
        text = 'FRI JAN 9 11AM NLH $400 $340 $35 $25 20K 30\n'
        records = RowAdapter(ScheduleConfig(year=2030, venue='Aria')).parse(text)
        assert records[0].date == 'January 9, 2030'
        assert records[0].venue == 'Aria'

    def test_trailing_add_on_is_not_a_level_duration(self):
        record = RowAdapter().parse_row(
            ['FRI JAN 9 11AM NLH DEEPSTACK $400 $340 $35 $25'], 2026, 'Aria')
        assert record.opt_add_on == 25
        assert record.level_duration is None
        assert record.starting_chips is None

    def test_level_duration_after_chips(self):
        record = RowAdapter().parse_row(
            ['FRI JAN 9 11AM NLH DEEPSTACK $400 $340 $35 $25 20K 30'], 2026, 'Aria')
        assert record.starting_chips == 20000
        assert record.level_duration == '30'

    def test_two_amount_row_keeps_fee_columns_unknown(self):
        record = RowAdapter().parse_row(['FRI JAN 9 11AM NLH DEEPSTACK $400 $340'], 2026, 'Aria')
        assert record.prize_pool == 340
        assert record.rake_dollars == 60
        assert record.rake_pct == 15.0
        assert record.house_fee is None
        assert record.opt_add_on is None

    @pytest.mark.parametrize('line,target,buyin', [
        ('SAT JAN 10 2PM MAIN EVENT SUPER SATELLITE $250 $220 $20 $10', 'MAIN EVENT', 250),
        ('SAT JAN 10 2PM EVENT 14 NLH SATELLITE $120 $100 $12 $8', '14', 120),
        ('SAT JAN 10 2PM NLH SUPER SAT $250 $220 $20 $10', None, 250),
    ])
    def test_satellite_rows(self, line, target, buyin):
        record = RowAdapter().parse_row([line], 2026, 'Aria')
        assert record.is_satellite
        assert not record.is_restart
        assert record.target_event == target
        assert record.buyin == buyin

    def test_final_table_row_is_restart(self):
        record = RowAdapter().parse_row(
            ['SUN JAN 11 12PM EVENT 3 NLH TURBO FREEZEOUT FINAL TABLE'], 2026, 'Aria')
        assert record.is_restart
        assert record.parent_event == '3'
        assert record.buyin == 0
        assert record.time == '12PM'
        assert record.event_name == 'EVENT 3 NLH TURBO FREEZEOUT FINAL TABLE'
        assert record.notes == 'Freezeout, Turbo'
        assert record.prize_pool is None

    @pytest.mark.parametrize('name,notes', [
        ('NLH TURBO', 'Turbo'),
        ('NLH FREEZEOUT', 'Freezeout'),
        ('PLO BOUNTY TURBO', 'Bounty, Turbo'),
        ('NLH DEEPSTACK', None),
    ])
    def test_note_keywords(self, name, notes):
        record = RowAdapter().parse_row(
            [f'FRI JAN 9 11AM {name} $400 $340 $35 $25 20K 20'], 2026, 'Aria')
        assert record.notes == notes

    @pytest.mark.parametrize('raw', ['NLH DEEPSTACK"', 'NLH DEEPSTACK”', 'NLH DEEPSTACK “'])
    def test_trailing_quote_stripped(self, raw):
        assert clean_event_name(raw) == 'NLH DEEPSTACK'

    def test_trailing_quote_stripped_in_row(self):
        record = RowAdapter().parse_row(
            ['FRI JAN 9 11AM NLH DEEPSTACK" $400 $340 $35 $25 20K 20'], 2026, 'Aria')
        assert record.event_name == 'NLH DEEPSTACK'
