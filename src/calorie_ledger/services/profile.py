"""Profile settings service."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError as PydanticValidationError

from calorie_ledger.domain.documents import ProfileDocument
from calorie_ledger.domain.errors import ValidationError
from calorie_ledger.domain.models import ActivityTier, Profile, Sex
from calorie_ledger.domain.targets import compute_target
from calorie_ledger.services.storage import PROFILE_KEY, StorageGateway

logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Loads, validates and saves the user profile."""

    storage: StorageGateway
    _profile: Profile | None = field(default=None, init=False, repr=False)

    async def get_profile(self) -> Profile:
        """Return the stored profile, or defaults on first run."""
        if self._profile is None:
            raw = await self.storage.get(PROFILE_KEY)
            self._profile = _parse_profile(raw)
        return self._profile

    async def save_profile(self, profile: Profile) -> Profile:
        """Validate and persist a profile."""
        validate_profile(profile)
        document = ProfileDocument.from_profile(profile)
        await self.storage.set(PROFILE_KEY, document.model_dump_json())
        self._profile = document.to_profile()
        logger.info("Saved profile settings")
        return self._profile

    async def get_target(self) -> int:
        """Return the daily calorie target for the current profile."""
        return compute_target(await self.get_profile())


def validate_profile(profile: Profile) -> None:
    """Raise ValidationError for the first invalid profile field."""
    if not _is_positive_number(profile.weight_kg):
        raise ValidationError("weight_kg", "Weight must be greater than zero")
    if not _is_positive_number(profile.height_cm):
        raise ValidationError("height_cm", "Height must be greater than zero")
    if not _is_positive_int(profile.age_years):
        raise ValidationError("age_years", "Age must be a positive integer")
    if not _is_member(Sex, profile.sex):
        raise ValidationError("sex", "Sex must be male or female")
    if not _is_member(ActivityTier, profile.activity_tier):
        raise ValidationError("activity_tier", "Unknown activity tier")
    if not _is_positive_int(profile.manual_target_kcal):
        raise ValidationError(
            "manual_target_kcal", "Manual target must be a positive integer"
        )


def _is_positive_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value > 0
    )


def _is_member(enum_type: type[Enum], value: object) -> bool:
    try:
        enum_type(value)
    except ValueError:
        return False
    return True


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _parse_profile(raw: str | None) -> Profile:
    if raw is None:
        return Profile()
    try:
        return ProfileDocument.model_validate_json(raw).to_profile()
    except PydanticValidationError as exc:
        logger.warning("Stored profile is malformed, using defaults: %s", exc)
        return Profile()
