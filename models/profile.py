"""
models/profile.py
─────────────────
Player profile as seen by the compatibility scorer.

Raw user rows are loose: goals may be missing or stored as a bare string,
skill levels may be misspelled, blank locations arrive as "" or NaN.
All of that is normalised here, once, so the scorer can trust its inputs.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    PRO = "PRO"

    @property
    def ordinal(self) -> int:
        return _SKILL_ORDER.index(self)

    @classmethod
    def parse(cls, raw: Any) -> "SkillLevel":
        """Map any raw value onto a level; anything unrecognised is BEGINNER."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw)
            except ValueError:
                pass
        return cls.BEGINNER


_SKILL_ORDER = [
    SkillLevel.BEGINNER,
    SkillLevel.INTERMEDIATE,
    SkillLevel.ADVANCED,
    SkillLevel.PRO,
]


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def coerce_str_list(value: Any) -> list[str]:
    """Lists, tuples and sets become a list of strings; anything else is empty."""
    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, (set, frozenset)):
        items = sorted(value, key=str)
    else:
        return []
    return [str(v) for v in items if not _is_missing(v)]


def coerce_optional_str(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value)
    return text if text.strip() else None


class Profile(BaseModel):
    """Read-only matching view of a user row."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skill_level: SkillLevel = Field(SkillLevel.BEGINNER, alias="skillLevel")
    primary_goals: list[str] = Field(default_factory=list, alias="primaryGoals")
    coaching_style_preference: Optional[str] = Field(None, alias="coachingStylePreference")
    preferred_days: list[str] = Field(default_factory=list, alias="preferredDays")
    location: Optional[str] = None

    @field_validator("skill_level", mode="before")
    @classmethod
    def _parse_skill(cls, v: Any) -> SkillLevel:
        return SkillLevel.parse(v)

    @field_validator("primary_goals", "preferred_days", mode="before")
    @classmethod
    def _parse_list(cls, v: Any) -> list[str]:
        return coerce_str_list(v)

    @field_validator("coaching_style_preference", "location", mode="before")
    @classmethod
    def _parse_optional(cls, v: Any) -> Optional[str]:
        return coerce_optional_str(v)

    @classmethod
    def from_record(cls, record: dict) -> "Profile":
        """Build a profile from a raw user dict, ignoring unrelated keys."""
        return cls.model_validate({
            "skillLevel":              record.get("skillLevel"),
            "primaryGoals":            record.get("primaryGoals"),
            "coachingStylePreference": record.get("coachingStylePreference"),
            "preferredDays":           record.get("preferredDays"),
            "location":                record.get("location"),
        })
