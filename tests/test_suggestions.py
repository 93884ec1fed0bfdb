"""Tests for meal name suggestions."""

import asyncio
from datetime import UTC, date, datetime, timedelta

from calorie_ledger.domain.models import Meal
from calorie_ledger.domain.suggestions import suggest
from calorie_ledger.services.suggestions import SuggestionService
from tests.conftest import FakeClock, make_ledger

BASE = datetime(2026, 10, 1, 8, 0, tzinfo=UTC)


def _meal(meal_id: str, name: str, calories: int, minutes: int) -> Meal:
    return Meal(
        id=meal_id,
        name=name,
        calories=calories,
        timestamp=BASE + timedelta(minutes=minutes),
    )


def test_empty_query_returns_nothing() -> None:
    history = [_meal("1", "Eggs", 150, 0)]

    assert suggest(history, "") == []
    assert suggest(history, "   ") == []


def test_matches_case_insensitive_substring() -> None:
    history = [
        _meal("1", "Scrambled Eggs", 200, 0),
        _meal("2", "Toast", 120, 1),
        _meal("3", "EGG sandwich", 350, 2),
    ]

    names = [meal.name for meal in suggest(history, "egg")]

    assert names == ["EGG sandwich", "Scrambled Eggs"]


def test_deduplicates_by_name_and_calories() -> None:
    history = [
        _meal("1", "Eggs", 150, 0),
        _meal("2", "eggs", 150, 5),
        _meal("3", "Eggs", 180, 1),
    ]

    results = suggest(history, "egg")
    pairs = [(meal.name.lower(), meal.calories) for meal in results]

    assert len(pairs) == len(set(pairs))
    assert [meal.id for meal in results] == ["2", "3"]


def test_ranks_by_recency_then_frequency() -> None:
    history = [
        _meal("1", "Oatmeal", 300, 0),
        _meal("2", "Oat milk", 90, 10),
        _meal("3", "Oatmeal", 300, 10),
        _meal("4", "Oat bar", 200, 3),
    ]

    names = [meal.name for meal in suggest(history, "oat")]

    assert names == ["Oatmeal", "Oat milk", "Oat bar"]


def test_limit_caps_results() -> None:
    history = [_meal(str(index), f"Rice {index}", 100, index) for index in range(10)]

    assert len(suggest(history, "rice", limit=3)) == 3
    assert suggest(history, "rice", limit=0) == []


def test_suggestion_service_reads_ledger_history() -> None:
    clock = FakeClock()
    ledger = make_ledger(clock=clock)
    service = SuggestionService(ledger_service=ledger, default_limit=2)

    async def scenario() -> list[Meal]:
        await ledger.add_meal(date(2026, 10, 18), "Greek yogurt", 120)
        clock.advance(hours=1)
        await ledger.add_meal(date(2026, 10, 19), "Greek salad", 300)
        clock.advance(hours=1)
        await ledger.add_meal(date(2026, 10, 19), "Green tea", 2)
        return await service.suggest("GREEK")

    results = asyncio.run(scenario())

    assert [meal.name for meal in results] == ["Greek salad", "Greek yogurt"]
    assert asyncio.run(service.suggest(None)) == []
