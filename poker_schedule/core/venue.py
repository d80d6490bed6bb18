"""Detect schedule metadata (year, venue, series name) from header text."""

import datetime
import re


# Venue token -> display name. Checked in order; first hit wins.
VENUE_DISPLAY = {
    'MGM NATIONAL HARBOR': 'MGM National Harbor',
    'MGM GRAND': 'MGM Grand',
    'WYNN': 'Wynn Las Vegas',
    'ENCORE': 'Wynn Las Vegas',
    'VENETIAN': 'Venetian',
    'ARIA': 'Aria',
    'BELLAGIO': 'Bellagio',
    'RESORTS WORLD': 'Resorts World',
    'GOLDEN NUGGET': 'Golden Nugget',
    'SOUTH POINT': 'South Point',
    'ORLEANS': 'Orleans',
    'HORSESHOE': 'Horseshoe / Paris Las Vegas',
    'PARIS LAS VEGAS': 'Horseshoe / Paris Las Vegas',
    'SEMINOLE HARD ROCK': 'Seminole Hard Rock',
    'BORGATA': 'Borgata',
    'FOXWOODS': 'Foxwoods',
    'MOHEGAN SUN': 'Mohegan Sun',
    'THUNDER VALLEY': 'Thunder Valley',
    'CHOCTAW': 'Choctaw',
    'BIKE': 'The Bicycle Casino',
    'COMMERCE': 'Commerce Casino',
    'HARD ROCK HOLLYWOOD': 'Hard Rock Hollywood',
}
KNOWN_VENUES = list(VENUE_DISPLAY)

UNKNOWN_VENUE = 'Unknown Venue'
COLUMNAR_VENUE = 'WSOP Las Vegas'

HEADER_CHARS = 500

YEAR_RE = re.compile(r'\b(202\d|203\d)\b')
SERIES_RE = re.compile(
    r'(\w[\w\s]*(?:POKER OPEN|CLASSIC|CHAMPIONSHIP|SERIES|FESTIVAL|OPEN|CIRCUIT))',
    re.IGNORECASE,
)


def detect_year(text: str) -> int:
    """First plausible year in the header area, else the current year."""
    m = YEAR_RE.search(text[:HEADER_CHARS])
    if m:
        return int(m.group(1))
    return datetime.date.today().year


def find_venue_token(line: str) -> str | None:
    upper = line.upper()
    for token in KNOWN_VENUES:
        if token in upper:
            return token
    return None


def detect_venue(text: str) -> str:
    token = find_venue_token(text)
    return VENUE_DISPLAY[token] if token else UNKNOWN_VENUE


def detect_series_name(text: str) -> str | None:
    m = SERIES_RE.search(text[:HEADER_CHARS])
    return m.group(1).strip() if m else None
