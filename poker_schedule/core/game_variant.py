"""Classify a tournament name into a canonical game variant.

Rules are tried in order and the first match wins, so more specific
patterns sit above the generic ones they would otherwise be masked by
(e.g. "Mixed PLO" before "Mixed", "PLO Hi-Lo" before "PLO").
"""

import re


DEFAULT_VARIANT = 'NLHE'


def _contains(*needles: str):
    return lambda name: any(n in name for n in needles)


def _matches(pattern: str):
    regex = re.compile(pattern, re.IGNORECASE)
    return lambda name: bool(regex.search(name))


def _all_of(*needles: str):
    return lambda name: all(n in name for n in needles)


# (predicate over the lower-cased main name, label)
VARIANT_RULES = [
    (_contains('dealers choice'), 'Dealers Choice'),
    (_contains('8-game', '8 game mix', 'nine game', '9-game', '9 game mix'), 'Mixed Games'),
    (_contains('h.o.r.s.e'), 'H.O.R.S.E.'),
    (_matches(r'\bt\.?o\.?r\.?s\.?e\.?(?!\w)|torse'), 'T.O.R.S.E.'),
    (_contains('mixed plo'), 'PLO'),
    (_matches(r'^mixed[:\s]|\bmixed game'), 'Mixed Games'),
    (_contains('pot-limit omaha hi-lo', 'plo hi-lo'), 'PLO Hi-Lo'),
    (_matches(r'\bplo\s*8\b|plo hi/lo'), 'PLO Hi-Lo'),
    (_contains('5 card plo', '5-card plo'), '5-Card PLO'),
    (_matches(r'pot-limit omaha|\bplo\b'), 'PLO'),
    (_matches(r'\bbig[- ]?o\b'), 'Big O'),
    (_contains('omaha hi-lo'), 'Omaha Hi-Lo'),
    (_all_of('2-7', 'triple draw'), '2-7 Triple Draw'),
    (_all_of('2-7', 'lowball'), '2-7 Lowball'),
    (_contains('stud hi-lo'), 'Stud Hi-Lo'),
    (_contains('seven card stud', '7-card stud'), '7-Card Stud'),
    (_contains('razz'), 'Razz'),
    (_contains('badugi'), 'Badugi'),
    (lambda name: ('limit hold' in name and 'no-limit' not in name
                   and 'no limit' not in name), 'Limit Holdem'),
]

VARIANT_LABELS = frozenset([label for _, label in VARIANT_RULES] + [DEFAULT_VARIANT])


def main_event_name(event_name: str) -> str:
    """The part of a name before the first semicolon.

    Text after a semicolon lists the games rotated in a mixed event and
    must not influence classification.
    """
    return event_name.split(';', 1)[0]


def classify_game_variant(event_name: str | None) -> str:
    """Map an event name to one of VARIANT_LABELS. Never returns empty."""
    if not event_name:
        return DEFAULT_VARIANT
    name = main_event_name(event_name).lower()
    for predicate, label in VARIANT_RULES:
        if predicate(name):
            return label
    return DEFAULT_VARIANT
