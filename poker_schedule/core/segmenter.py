"""Split extracted schedule text into pages and clean noise lines.

The upstream PDF-to-text step separates pages with markers like
"-- 3 of 10 --". Everything between two markers is one page unit.
"""

import re


PAGE_BREAK_RE = re.compile(r'-- \d+ of \d+ --')

# Page-number lines such as "1/10"
PAGE_NUMBER_RE = re.compile(r'^\d+/\d+$')

# OCR-garbled masthead tokens seen in the columnar schedule dumps
NOISE_TOKENS = frozenset({'WOHLD SERIES', 'PDi<ER'})

FOOTER_RE = re.compile(
    r'MUST BE 21\+|PLEASE PLAY RESPONSIBLY|GAMBLER|GAMBLING ?HELP|'
    r'NO LONGER WITHHOLDS|AUTO-GRATUITY|OPTIONAL ADD-ON|'
    r'STRUCTURE SHEETS FOR A COMPLETE',
    re.IGNORECASE,
)


def split_pages(text: str) -> list[str]:
    """Split text on page-break markers, dropping blank pages."""
    return [p for p in PAGE_BREAK_RE.split(text) if p.strip()]


def page_lines(page: str) -> list[str]:
    """Return the stripped, non-empty lines of a page."""
    return [line.strip() for line in page.split('\n') if line.strip()]


def is_noise_line(line: str) -> bool:
    """Page numbers and garbled masthead text carry no schedule data."""
    return bool(PAGE_NUMBER_RE.match(line)) or line in NOISE_TOKENS


def is_footer_line(line: str) -> bool:
    return bool(FOOTER_RE.search(line))


def clean_lines(page: str) -> list[str]:
    """Lines of a page with footer, disclaimer and noise lines removed."""
    return [line for line in page_lines(page)
            if not is_noise_line(line) and not is_footer_line(line)]
