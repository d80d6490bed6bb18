"""Pick the reconstruction pipeline for a block of schedule text.

Two layouts are recognised:
  columnar -- one global column per attribute, with header words
              (EV#, LVL, RE-ENTRY, LATE) marking where each column starts
  row      -- one logical row per event, each row starting with a
              day-of-week and date, e.g. "12 FRI JAN 9 11AM ..."
"""

import re


COLUMNAR = 'columnar'
ROW = 'row'
FORMATS = (COLUMNAR, ROW)

DAY_NAMES = r'(MON|TUES|WED|THURS|FRI|SAT|SUN)'
MONTH_ABBRS = r'(JAN|FEB|MAR|APR|MAY|JUN|JUL|AUG|SEP|OCT|NOV|DEC)'

# Optional event number, then day-of-week, month abbreviation and day
ROW_START_RE = re.compile(
    rf'^(\d{{1,3}}[A-G]?\s+)?{DAY_NAMES}\s+{MONTH_ABBRS}\s+\d{{1,2}}\b',
    re.IGNORECASE,
)


def is_row_start(line: str) -> bool:
    return bool(ROW_START_RE.match(line))


def has_columnar_markers(text: str) -> bool:
    return 'EV#' in text and 'LVL' in text and ('RE-ENTRY' in text or 'LATE' in text)


def detect_format(text: str) -> str:
    """Return COLUMNAR or ROW.

    Text with row starts and unrecognised text both go to the row
    pipeline, so only the columnar header words need checking.
    """
    if has_columnar_markers(text):
        return COLUMNAR
    return ROW
