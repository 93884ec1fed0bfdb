"""Meal name suggestions backed by the ledger history."""

from dataclasses import dataclass

from calorie_ledger.domain.models import Meal
from calorie_ledger.domain.suggestions import DEFAULT_LIMIT, suggest
from calorie_ledger.services.ledger import LedgerService


@dataclass
class SuggestionService:
    """Application service for autocomplete lookups."""

    ledger_service: LedgerService
    default_limit: int = DEFAULT_LIMIT

    async def suggest(self, query: str | None, limit: int | None = None) -> list[Meal]:
        """Return suggestions for a partially typed meal name."""
        if not query:
            return []
        history = await self.ledger_service.all_meals()
        return suggest(
            history, query, self.default_limit if limit is None else limit
        )
