"""Daily energy target calculations."""

import math
from dataclasses import dataclass
from enum import Enum

from calorie_ledger.domain.models import ActivityTier, Profile, Sex

ACTIVITY_MULTIPLIERS: dict[ActivityTier, float] = {
    ActivityTier.SEDENTARY: 1.2,
    ActivityTier.LIGHT: 1.375,
    ActivityTier.MODERATE: 1.55,
    ActivityTier.ACTIVE: 1.725,
    ActivityTier.VERY_ACTIVE: 1.9,
}

SEX_OFFSETS: dict[Sex, float] = {
    Sex.MALE: 5.0,
    Sex.FEMALE: -161.0,
}

BMI_UNDERWEIGHT = 18.5
BMI_NORMAL = 25.0
BMI_OVERWEIGHT = 30.0

CARBS_SHARE = 0.5
PROTEIN_SHARE = 0.2
FAT_SHARE = 0.3
KCAL_PER_G_CARBS = 4
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_FAT = 9


class BmiCategory(str, Enum):
    """Body mass index category."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


@dataclass(frozen=True)
class MacroEstimate:
    """Gram split of a calorie budget using a fixed 50/20/30 ratio."""

    carbs_g: int
    protein_g: int
    fat_g: int


def compute_bmr(profile: Profile) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal."""
    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age_years
    return base + SEX_OFFSETS[profile.sex]


def compute_target(profile: Profile) -> int:
    """Return the daily calorie target for a profile.

    The manual target wins when enabled. Otherwise the BMR is scaled by the
    activity multiplier and rounded; pathological inputs clamp to zero.
    """
    if profile.manual_target_enabled:
        return profile.manual_target_kcal
    energy = compute_bmr(profile) * ACTIVITY_MULTIPLIERS[profile.activity_tier]
    if not math.isfinite(energy):
        return 0
    target = round(energy)
    return max(target, 0)


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Return the body mass index."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(bmi: float) -> BmiCategory:
    """Map a BMI value to its category."""
    if bmi < BMI_UNDERWEIGHT:
        return BmiCategory.UNDERWEIGHT
    if bmi < BMI_NORMAL:
        return BmiCategory.NORMAL
    if bmi < BMI_OVERWEIGHT:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def estimate_macros(calories: int) -> MacroEstimate:
    """Split a calorie budget into carbs, protein and fat grams."""
    return MacroEstimate(
        carbs_g=round(calories * CARBS_SHARE / KCAL_PER_G_CARBS),
        protein_g=round(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        fat_g=round(calories * FAT_SHARE / KCAL_PER_G_FAT),
    )
