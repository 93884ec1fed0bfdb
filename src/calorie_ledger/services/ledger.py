"""Daily meal ledger service."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo

from pydantic import ValidationError as PydanticValidationError

from calorie_ledger.domain.documents import LedgerDocument
from calorie_ledger.domain.errors import NotFoundError, ValidationError
from calorie_ledger.domain.models import DayRecord, Meal
from calorie_ledger.services.storage import LEDGER_KEY, StorageGateway

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class LedgerState:
    """Snapshot of every day record and the open current day."""

    records: dict[date, DayRecord] = field(default_factory=dict)
    current_day: date | None = None

    def get(self, day: date) -> DayRecord:
        return self.records.get(day) or DayRecord(day=day)

    def with_record(self, record: DayRecord) -> "LedgerState":
        records = dict(self.records)
        records[record.day] = record
        return replace(self, records=records)


@dataclass
class LedgerService:
    """Owns per-day meal records and keeps them in sync with storage.

    Every read and mutation runs under one lock. Mutations build a new
    snapshot from the latest state, persist it, and only then make it
    visible, so a failed write leaves the previous state in place.
    """

    storage: StorageGateway
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = _utc_now
    _state: LedgerState | None = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    _last_id_ms: int = field(default=0, init=False, repr=False)
    _zone: ZoneInfo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._zone = ZoneInfo(self.timezone_name)

    async def add_meal(self, day: date, name: str, calories: int) -> Meal:
        """Append a new meal to a day and persist it."""
        cleaned = _validate_name(name)
        _validate_calories(calories)
        async with self._lock:
            state = await self._load()
            now = self.clock()
            meal = Meal(
                id=self._new_meal_id(now),
                name=cleaned,
                calories=calories,
                timestamp=now,
            )
            record = state.get(day)
            await self._commit(
                state.with_record(replace(record, meals=(*record.meals, meal)))
            )
        logger.info("Added meal %s (%s kcal) on %s", meal.id, calories, day)
        return meal

    async def update_meal(
        self, day: date, meal_id: str, name: str, calories: int
    ) -> Meal:
        """Replace a meal in place, keeping its id, position and timestamp."""
        cleaned = _validate_name(name)
        _validate_calories(calories)
        async with self._lock:
            state = await self._load()
            record = state.get(day)
            index = record.find(meal_id)
            if index is None:
                raise NotFoundError(meal_id, day)
            updated = replace(record.meals[index], name=cleaned, calories=calories)
            meals = list(record.meals)
            meals[index] = updated
            await self._commit(state.with_record(replace(record, meals=tuple(meals))))
        logger.info("Updated meal %s on %s", meal_id, day)
        return updated

    async def delete_meal(self, day: date, meal_id: str) -> None:
        """Remove a meal from a day."""
        async with self._lock:
            state = await self._load()
            record = state.get(day)
            index = record.find(meal_id)
            if index is None:
                raise NotFoundError(meal_id, day)
            meals = record.meals[:index] + record.meals[index + 1 :]
            await self._commit(state.with_record(replace(record, meals=meals)))
        logger.info("Deleted meal %s on %s", meal_id, day)

    async def get_day(self, day: date) -> DayRecord:
        """Return a day's record, empty when nothing was logged."""
        async with self._lock:
            state = await self._load()
        return state.get(day)

    async def current_day(self) -> date | None:
        """Return the open current day, if a rollover check has run."""
        async with self._lock:
            state = await self._load()
        return state.current_day

    async def list_days(self) -> list[DayRecord]:
        """Return days with at least one meal, newest first."""
        async with self._lock:
            state = await self._load()
        return [
            record
            for _, record in sorted(state.records.items(), reverse=True)
            if record.meals
        ]

    async def all_meals(self) -> list[Meal]:
        """Return every logged meal ordered by time."""
        async with self._lock:
            state = await self._load()
        meals = [meal for record in state.records.values() for meal in record.meals]
        return sorted(meals, key=lambda meal: (meal.timestamp, meal.id))

    async def rollover_if_needed(self, now: datetime) -> bool:
        """Close the current day once the local date moves past it.

        Returns True when the open day changed. Calling again for the same
        boundary, or with an instant before the open day, changes nothing.
        """
        today = self._local_date(now)
        async with self._lock:
            state = await self._load()
            previous = state.current_day
            if previous is not None and today <= previous:
                return False
            records = dict(state.records)
            if previous is not None and not state.get(previous).meals:
                records.pop(previous, None)
            records.setdefault(today, DayRecord(day=today))
            await self._commit(LedgerState(records=records, current_day=today))
        if previous is None:
            logger.info("Opened current day %s", today)
        else:
            logger.info("Rolled over from %s to %s", previous, today)
        return True

    async def clear_history(self) -> None:
        """Remove every day record, including the current day."""
        async with self._lock:
            await self.storage.remove(LEDGER_KEY)
            self._state = LedgerState()
        logger.info("Cleared meal history")

    async def _load(self) -> LedgerState:
        if self._state is not None:
            return self._state
        raw = await self.storage.get(LEDGER_KEY)
        self._state = _parse_state(raw)
        return self._state

    async def _commit(self, state: LedgerState) -> None:
        document = LedgerDocument.from_records(state.records, state.current_day)
        await self.storage.set(LEDGER_KEY, document.model_dump_json())
        self._state = state

    def _local_date(self, now: datetime) -> date:
        if now.tzinfo is None:
            return now.date()
        return now.astimezone(self._zone).date()

    def _new_meal_id(self, now: datetime) -> str:
        millis = max(int(now.timestamp() * 1000), self._last_id_ms + 1)
        self._last_id_ms = millis
        return f"{millis:013d}-{uuid4().hex[:8]}"


def _parse_state(raw: str | None) -> LedgerState:
    if raw is None:
        return LedgerState()
    try:
        document = LedgerDocument.model_validate_json(raw)
    except PydanticValidationError as exc:
        logger.warning("Stored ledger is malformed, starting empty: %s", exc)
        return LedgerState()
    return LedgerState(records=document.to_records(), current_day=document.current_day)


def _validate_name(name: str) -> str:
    cleaned = name.strip() if isinstance(name, str) else ""
    if not cleaned:
        raise ValidationError("name", "Meal name is required")
    return cleaned


def _validate_calories(calories: int) -> None:
    if isinstance(calories, bool) or not isinstance(calories, int) or calories <= 0:
        raise ValidationError("calories", "Calories must be a positive integer")
