"""Domain models for the calorie ledger."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class Sex(str, Enum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityTier(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class Meal:
    """A single food-intake event."""

    id: str
    name: str
    calories: int
    timestamp: datetime


@dataclass(frozen=True)
class DayRecord:
    """Meals logged on one calendar day, in insertion order."""

    day: date
    meals: tuple[Meal, ...] = field(default_factory=tuple)

    @property
    def total_calories(self) -> int:
        """Sum of calories across the day's meals."""
        return sum(meal.calories for meal in self.meals)

    def find(self, meal_id: str) -> int | None:
        """Return the position of a meal by id, if present."""
        for index, meal in enumerate(self.meals):
            if meal.id == meal_id:
                return index
        return None


@dataclass(frozen=True)
class Profile:
    """User biometrics and target preferences."""

    weight_kg: float = 70.0
    height_cm: float = 170.0
    age_years: int = 30
    sex: Sex = Sex.MALE
    activity_tier: ActivityTier = ActivityTier.MODERATE
    manual_target_enabled: bool = False
    manual_target_kcal: int = 2000
    dark_mode: bool = False
