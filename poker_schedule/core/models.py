"""Data models for the tournament schedule parser."""

from dataclasses import asdict, dataclass, field


@dataclass
class ScheduleConfig:
    """Caller-supplied hints for a single schedule parse."""
    year: int | None = None        # Overrides the year detected from the header
    venue: str | None = None       # Overrides the detected venue name
    format: str | None = None      # "columnar" or "row"; None = auto-detect
    source_pdf: str = ''           # Original file name, stored alongside records
    min_buyin: int = 100           # Columnar rows priced below this are dropped


@dataclass(frozen=True)
class RakeBreakdown:
    """Result of a rake tier lookup. All fields None when no tier resolved."""
    prize_pool: int | None = None
    house_fee: int | None = None
    opt_add_on: int | None = None
    rake_pct: float | None = None
    rake_dollars: int | None = None

    @property
    def resolved(self) -> bool:
        return self.rake_dollars is not None


UNKNOWN_RAKE = RakeBreakdown()


@dataclass
class TournamentRecord:
    """A single tournament reconstructed from schedule text."""
    event_name: str
    date: str                      # "May 27, 2026"
    time: str = 'TBD'              # "11AM", "12:30PM"
    buyin: int = 0
    event_number: str | None = None
    starting_chips: int | None = None
    level_duration: str | None = None
    reentry: str | None = None
    late_reg: str | None = None
    prize_pool: int | None = None
    house_fee: int | None = None
    opt_add_on: int | None = None
    rake_pct: float | None = None
    rake_dollars: int | None = None
    game_variant: str = 'NLHE'
    venue: str = ''
    notes: str | None = None
    is_satellite: bool = False
    is_restart: bool = False
    is_freeroll: bool = False
    target_event: str | None = None
    parent_event: str | None = None

    def apply_rake(self, rake: RakeBreakdown):
        """Copy a rake breakdown onto the record (all fields or none)."""
        if not rake.resolved:
            return
        self.prize_pool = rake.prize_pool
        self.house_fee = rake.house_fee
        self.opt_add_on = rake.opt_add_on
        self.rake_pct = rake.rake_pct
        self.rake_dollars = rake.rake_dollars

    def to_dict(self) -> dict:
        """Plain dict with camelCase keys, as consumed by the upload layer."""
        return {_camel(k): v for k, v in asdict(self).items()}


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)
