"""Name-based autocomplete over previously logged meals."""

from collections.abc import Sequence
from dataclasses import dataclass

from calorie_ledger.domain.models import Meal

DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class _Candidate:
    meal: Meal
    use_count: int


def suggest(
    history: Sequence[Meal], query: str, limit: int = DEFAULT_LIMIT
) -> list[Meal]:
    """Return past meals whose name contains the query.

    Each (lowercased name, calories) pair appears once, represented by its
    most recent meal. Results are ranked by recency, then by how often the
    pair occurs in the history, then by name.
    """
    needle = query.strip().lower()
    if not needle or limit <= 0:
        return []

    candidates: dict[tuple[str, int], _Candidate] = {}
    for meal in history:
        if needle not in meal.name.lower():
            continue
        key = (meal.name.lower(), meal.calories)
        existing = candidates.get(key)
        if existing is None:
            candidates[key] = _Candidate(meal=meal, use_count=1)
            continue
        latest = existing.meal
        if (meal.timestamp, meal.id) > (latest.timestamp, latest.id):
            latest = meal
        candidates[key] = _Candidate(meal=latest, use_count=existing.use_count + 1)

    return [candidate.meal for candidate in _rank(list(candidates.values()))[:limit]]


def _rank(candidates: list[_Candidate]) -> list[_Candidate]:
    """Rank by recent use, then frequency, then name."""
    by_name = sorted(
        candidates, key=lambda item: (item.meal.name.lower(), item.meal.calories)
    )
    return sorted(
        by_name,
        key=lambda item: (item.meal.timestamp, item.use_count),
        reverse=True,
    )
