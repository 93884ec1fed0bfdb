"""Consumption-versus-target classification."""

import math
from dataclasses import dataclass
from enum import Enum

# Tier breakpoints as integer percentages of the target.
ON_TARGET_PERCENT = 100
OVER_TARGET_PERCENT = 135


class Tier(str, Enum):
    """Severity of a day's intake relative to its target."""

    UNDER_OR_ON_TARGET = "under_or_on_target"
    OVER_TARGET = "over_target"
    FAR_OVER_TARGET = "far_over_target"


@dataclass(frozen=True)
class Progress:
    """Ratio of consumed calories to the target and its tier."""

    ratio: float
    tier: Tier

    @property
    def percent(self) -> int | None:
        """Rounded percentage for display, or None when unbounded."""
        if math.isinf(self.ratio):
            return None
        return round(self.ratio * 100)


def classify(total_calories: int, target: int) -> Progress:
    """Classify a day's total against a target.

    Breakpoints are compared as exact integer percentages so that 135%
    stays in the over tier and anything above it is far over.
    """
    if target <= 0:
        if total_calories <= 0:
            return Progress(ratio=0.0, tier=Tier.UNDER_OR_ON_TARGET)
        return Progress(ratio=math.inf, tier=Tier.FAR_OVER_TARGET)

    scaled = total_calories * 100
    if scaled <= ON_TARGET_PERCENT * target:
        tier = Tier.UNDER_OR_ON_TARGET
    elif scaled <= OVER_TARGET_PERCENT * target:
        tier = Tier.OVER_TARGET
    else:
        tier = Tier.FAR_OVER_TARGET
    return Progress(ratio=total_calories / target, tier=tier)
