"""Parse extracted schedule text into tournament records.

    text -> format detection -> columnar or row adapter -> restart linking

Each call builds its own adapter and state, so independent documents
can be parsed concurrently.
"""

import logging

from poker_schedule.adapters.base import BaseAdapter
from poker_schedule.adapters.columnar_adapter import ColumnarAdapter
from poker_schedule.adapters.row_adapter import RowAdapter
from .format_detector import COLUMNAR, FORMATS, ROW, detect_format
from .linker import link_restarts
from .models import ScheduleConfig, TournamentRecord

logger = logging.getLogger(__name__)

ADAPTERS = {
    COLUMNAR: ColumnarAdapter,
    ROW: RowAdapter,
}


def get_adapter(fmt: str, config: ScheduleConfig | None = None) -> BaseAdapter:
    if fmt not in ADAPTERS:
        raise ValueError(f"Unknown schedule format: {fmt!r} (expected one of {FORMATS})")
    return ADAPTERS[fmt](config)


def parse_schedule(text: str, config: ScheduleConfig | None = None) -> list[TournamentRecord]:
    """Reconstruct tournaments from schedule text, in order of appearance."""
    config = config or ScheduleConfig()
    fmt = config.format or detect_format(text)
    logger.info("Parsing schedule as %s layout", fmt)

    records = get_adapter(fmt, config).parse(text)
    link_restarts(records)

    logger.info("Parsed %d tournaments", len(records))
    return records
