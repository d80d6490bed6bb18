"""Buy-in tiered rake lookup for the columnar (WSOP-style) schedules.

Each tier lists the percentage of the buy-in withheld as the house
entry fee and the percentage withheld for dealers/staff. The prize pool
is whatever is left.
"""

import logging
import math
from dataclasses import dataclass

from .models import RakeBreakdown, UNKNOWN_RAKE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RakeTier:
    entry_fee_pct: float
    dealer_staff_pct: float
    total_pct: float


# Take-out percentages keyed by buy-in amount
RAKE_TIERS = {
    300: RakeTier(11, 6, 17),
    400: RakeTier(11, 6, 17),
    500: RakeTier(11, 6, 17),
    600: RakeTier(10, 6, 16),
    800: RakeTier(9, 6, 15),
    1000: RakeTier(8, 6, 14),
    1500: RakeTier(7, 6, 13),
    2000: RakeTier(6, 6, 12),
    2500: RakeTier(6, 5, 11),
    3000: RakeTier(6, 5, 11),
    5000: RakeTier(5, 5, 10),
    10000: RakeTier(4, 4, 8),
    25000: RakeTier(3, 3, 6),
    50000: RakeTier(2, 3, 5),
    100000: RakeTier(2, 2, 4),
    250000: RakeTier(1, 2, 3),
}

# Charity and reduced-rake events, keyed by event number
EVENT_OVERRIDES = {
    '59': RakeTier(4, 6, 10),
}


def _round(value: float) -> int:
    """Round half up."""
    return int(math.floor(value + 0.5))


def _base_event_number(event_number: str | None) -> str | None:
    if not event_number:
        return None
    return event_number.strip().rstrip('ABCDEFGabcdefg') or None


def find_tier(buyin: int, event_number: str | None = None,
              tiers: dict | None = None,
              overrides: dict | None = None) -> RakeTier | None:
    """Resolve the rake tier for a buy-in.

    Lookup order: event-number override, exact buy-in match, then the
    highest tier at or below the buy-in (the lowest tier when the buy-in
    is below every key). Returns None only for an empty tier table.
    """
    tiers = RAKE_TIERS if tiers is None else tiers
    overrides = EVENT_OVERRIDES if overrides is None else overrides

    base = _base_event_number(event_number)
    if event_number in overrides:
        return overrides[event_number]
    if base in overrides:
        return overrides[base]

    if buyin in tiers:
        return tiers[buyin]
    if not tiers:
        return None

    keys = sorted(tiers)
    below = [k for k in keys if k <= buyin]
    return tiers[below[-1]] if below else tiers[keys[0]]


def compute_rake(buyin: int, event_number: str | None = None,
                 tiers: dict | None = None,
                 overrides: dict | None = None) -> RakeBreakdown:
    """Compute prize pool, house fee, staff add-on and rake for a buy-in.

    Returns UNKNOWN_RAKE (all fields None) when no tier can be resolved.
    """
    tier = find_tier(buyin, event_number, tiers, overrides)
    if tier is None:
        logger.debug("No rake tier for buy-in %s (event %s)", buyin, event_number)
        return UNKNOWN_RAKE

    rake_dollars = _round(buyin * tier.total_pct / 100)
    return RakeBreakdown(
        prize_pool=buyin - rake_dollars,
        house_fee=_round(buyin * tier.entry_fee_pct / 100),
        opt_add_on=_round(buyin * tier.dealer_staff_pct / 100),
        rake_pct=float(tier.total_pct),
        rake_dollars=rake_dollars,
    )
