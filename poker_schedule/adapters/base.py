"""Abstract base adapter for reconstructing tournaments from schedule text."""

from abc import ABC, abstractmethod

from poker_schedule.core.models import ScheduleConfig, TournamentRecord


class BaseAdapter(ABC):
    def __init__(self, config: ScheduleConfig | None = None):
        self.config = config or ScheduleConfig()

    @abstractmethod
    def parse(self, text: str) -> list[TournamentRecord]:
        """Parse extracted schedule text and return tournament records.

        Records come back in order of appearance in the text. Pages or
        rows that cannot be reconstructed yield no records; malformed
        input never raises.
        """
        pass
