"""Serialized forms of the ledger and profile."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from calorie_ledger.domain.models import ActivityTier, DayRecord, Meal, Profile, Sex

PROFILE_SCHEMA_VERSION = 2
LEDGER_SCHEMA_VERSION = 1


class MealDocument(BaseModel):
    """Stored meal."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    calories: int = Field(gt=0)
    timestamp: datetime

    @classmethod
    def from_meal(cls, meal: Meal) -> "MealDocument":
        return cls(
            id=meal.id,
            name=meal.name,
            calories=meal.calories,
            timestamp=meal.timestamp,
        )

    def to_meal(self) -> Meal:
        return Meal(
            id=self.id,
            name=self.name,
            calories=self.calories,
            timestamp=self.timestamp,
        )


class DayDocument(BaseModel):
    """Stored day record. The total is informational and recomputed on load."""

    meals: list[MealDocument] = Field(default_factory=list)
    total_calories: int = 0


class LedgerDocument(BaseModel):
    """Stored ledger: every day record plus the open current day."""

    schema_version: int = LEDGER_SCHEMA_VERSION
    current_day: date | None = None
    days: dict[date, DayDocument] = Field(default_factory=dict)

    @classmethod
    def from_records(
        cls, records: dict[date, DayRecord], current_day: date | None
    ) -> "LedgerDocument":
        return cls(
            current_day=current_day,
            days={
                day: DayDocument(
                    meals=[MealDocument.from_meal(meal) for meal in record.meals],
                    total_calories=record.total_calories,
                )
                for day, record in sorted(records.items())
            },
        )

    def to_records(self) -> dict[date, DayRecord]:
        return {
            day: DayRecord(
                day=day, meals=tuple(meal.to_meal() for meal in document.meals)
            )
            for day, document in self.days.items()
        }


class ProfileDocument(BaseModel):
    """Stored profile.

    Version 1 documents predate the manual target override and dark mode;
    they are upgraded with explicit defaults before validation.
    """

    schema_version: int = PROFILE_SCHEMA_VERSION
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    age_years: int = Field(gt=0)
    sex: Sex
    activity_tier: ActivityTier
    manual_target_enabled: bool
    manual_target_kcal: int = Field(gt=0)
    dark_mode: bool

    @model_validator(mode="before")
    @classmethod
    def _upgrade(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        version = data.get("schema_version", 1)
        upgraded = dict(data)
        if not isinstance(version, int) or version < PROFILE_SCHEMA_VERSION:
            defaults = Profile()
            upgraded.setdefault(
                "manual_target_enabled", defaults.manual_target_enabled
            )
            upgraded.setdefault("manual_target_kcal", defaults.manual_target_kcal)
            upgraded.setdefault("dark_mode", defaults.dark_mode)
        upgraded["schema_version"] = PROFILE_SCHEMA_VERSION
        return upgraded

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileDocument":
        return cls(
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            age_years=profile.age_years,
            sex=profile.sex,
            activity_tier=profile.activity_tier,
            manual_target_enabled=profile.manual_target_enabled,
            manual_target_kcal=profile.manual_target_kcal,
            dark_mode=profile.dark_mode,
        )

    def to_profile(self) -> Profile:
        return Profile(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age_years=self.age_years,
            sex=self.sex,
            activity_tier=self.activity_tier,
            manual_target_enabled=self.manual_target_enabled,
            manual_target_kcal=self.manual_target_kcal,
            dark_mode=self.dark_mode,
        )
