"""Daily progress summaries."""

from dataclasses import dataclass
from datetime import date

from calorie_ledger.domain.models import DayRecord
from calorie_ledger.domain.progress import Progress, classify
from calorie_ledger.domain.targets import MacroEstimate, estimate_macros
from calorie_ledger.services.ledger import LedgerService
from calorie_ledger.services.profile import ProfileService


@dataclass(frozen=True)
class DailySummary:
    """A day's intake against the current target."""

    record: DayRecord
    target: int
    progress: Progress
    target_macros: MacroEstimate

    @property
    def remaining_calories(self) -> int:
        """Calories left for the day; negative once the target is exceeded."""
        return self.target - self.record.total_calories


@dataclass
class ProgressService:
    """Combines the ledger and the profile target."""

    ledger_service: LedgerService
    profile_service: ProfileService

    async def get_summary(self, day: date) -> DailySummary:
        """Return the summary for a day."""
        record = await self.ledger_service.get_day(day)
        target = await self.profile_service.get_target()
        return DailySummary(
            record=record,
            target=target,
            progress=classify(record.total_calories, target),
            target_macros=estimate_macros(target),
        )

    async def get_current_summary(self) -> DailySummary | None:
        """Return the summary for the open current day, if any."""
        current = await self.ledger_service.current_day()
        if current is None:
            return None
        return await self.get_summary(current)
