"""
models/matchmaker.py
════════════════════
PartnerMatchmaker — turns a requester and a list of candidate rows into the
ranked partner cards returned by GET /api/partners/find.

Per candidate
─────────────
  • compatibility score + shared goals/days  (models.scorer)
  • rating        parsed float, settings.default_rating when unusable
  • isAvailable   lastActiveAt within settings.availability_window_days
  • distance      None unless the placeholder is switched on (see below)
  • matchLabel    Excellent / Great / Good / Potential

Ordering
────────
  matchScore descending, stable: equal scores keep repository order.

Distance
────────
  There is no geocoding behind user locations. When
  settings.distance_placeholder_enabled is set, a seeded placeholder in
  [1, 21) miles is attached to candidates where both sides have a location.
  Otherwise distance is always None.

Usage
─────
  matchmaker = PartnerMatchmaker(settings)
  cards = matchmaker.rank(requester_row, repo.find_candidates(user_id))
  cards = apply_filters(cards, PartnerFilters(skill_level="PRO"))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import numpy as np
import pandas as pd

from config.settings import Settings, get_settings
from models.profile import Profile, coerce_optional_str, coerce_str_list
from models.repository import parse_timestamp
from models.scorer import compute_compatibility_score
from utils.logger import logger

NO_DISTANCE_LIMIT = 50.0
DISTANCE_PLACEHOLDER_RANGE = (1.0, 21.0)


def match_label(score: float) -> str:
    if score >= 90: return "Excellent Match"
    if score >= 75: return "Great Match"
    if score >= 60: return "Good Match"
    return "Potential Match"


def parse_rating(raw: Any, default: float = 2.0) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return value


@dataclass(frozen=True)
class PartnerFilters:
    """Client-side narrowing of the ranked list; order is preserved."""
    q: Optional[str] = None
    skill_level: Optional[str] = None
    max_distance: Optional[float] = None

    def matches(self, card: dict) -> bool:
        if self.q:
            needle = self.q.lower()
            name = (card.get("name") or "").lower()
            location = (card.get("location") or "").lower()
            if needle not in name and needle not in location:
                return False

        if self.skill_level and self.skill_level.lower() != "all":
            if card.get("skillLevel") != self.skill_level:
                return False

        if self.max_distance is not None and self.max_distance < NO_DISTANCE_LIMIT:
            distance = card.get("distance")
            if distance is not None and distance > self.max_distance:
                return False

        return True


def apply_filters(cards: list[dict], filters: PartnerFilters) -> list[dict]:
    return [c for c in cards if filters.matches(c)]


class PartnerMatchmaker:
    """
    Parameters
    ----------
    settings : matching knobs (rating default, availability window,
               distance placeholder). Defaults to get_settings().
    now      : reference time for availability; defaults to the call time.
    """

    def __init__(self, settings: Settings | None = None, now: datetime | None = None) -> None:
        self.settings = settings or get_settings()
        self._now = now
        self._rng = np.random.default_rng(self.settings.distance_seed)

    # ── public API ────────────────────────────────────────────────────────────

    def rank(self, requester: dict, candidates: list[dict]) -> list[dict]:
        """Score every candidate and return cards sorted best-first."""
        me = Profile.from_record(requester)
        now = self._now or datetime.now(timezone.utc)

        cards = [self._build_card(me, c, now) for c in candidates]
        if not cards:
            return []

        df = pd.DataFrame({"pos": range(len(cards)), "matchScore": [c["matchScore"] for c in cards]})
        order = df.sort_values("matchScore", ascending=False, kind="stable")["pos"].tolist()
        ranked = [cards[i] for i in order]

        logger.info(
            f"Ranked {len(ranked)} candidates for user {requester.get('id')} "
            f"(top score={ranked[0]['matchScore']})"
        )
        return ranked

    # ── helpers ───────────────────────────────────────────────────────────────

    def _build_card(self, me: Profile, candidate: dict, now: datetime) -> dict:
        them = Profile.from_record(candidate)
        result = compute_compatibility_score(me, them)

        return {
            "id":             str(candidate.get("id")),
            "name":           coerce_optional_str(candidate.get("name")) or "Player",
            "rating":         parse_rating(candidate.get("rating"), self.settings.default_rating),
            "skillLevel":     them.skill_level.value,
            "location":       them.location,
            "distance":       self._distance(me, them),
            "isAvailable":    self._is_available(candidate.get("lastActiveAt"), now),
            "matchScore":     result.match_score,
            "matchLabel":     match_label(result.match_score),
            "commonGoals":    result.common_goals,
            "commonDays":     result.common_days,
            "playingStyle":   coerce_optional_str(candidate.get("playingStyle")),
            "availability":   coerce_str_list(candidate.get("preferredDays")),
            "scoreBreakdown": result.breakdown.to_dict(),
        }

    def _is_available(self, last_active: Any, now: datetime) -> bool:
        seen = parse_timestamp(last_active)
        if seen is None:
            return False
        return now - seen <= timedelta(days=self.settings.availability_window_days)

    def _distance(self, me: Profile, them: Profile) -> Optional[float]:
        if not self.settings.distance_placeholder_enabled:
            return None
        if not me.location or not them.location:
            return None
        low, high = DISTANCE_PLACEHOLDER_RANGE
        value = round(float(self._rng.uniform(low, high)), 1)
        logger.debug(f"Placeholder distance {value} for {me.location!r} -> {them.location!r}")
        return value
