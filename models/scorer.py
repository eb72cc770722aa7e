"""
models/scorer.py
════════════════
Compatibility scorer — how well a candidate fits the requesting player (0–100).

Five Scoring Terms
──────────────────
  Skill proximity         30 pts   ordinal distance 0/1/2/3 → 30/20/10/0
  Shared goals            25 pts   8 per shared goal, saturating
  Coaching style          15 pts   exact string equality only
  Shared availability     15 pts   3 per shared day, saturating
  Location                15 pts   same place 15, one contains the other 10

Goals and days are counted from the requester's side, so
score(a, b) and score(b, a) can differ.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from models.profile import Profile

MAX_SCORE = 100

TERM_MAX_POINTS = {
    "skill":    30,
    "goals":    25,
    "style":    15,
    "days":     15,
    "location": 15,
}

SKILL_POINTS_BY_DISTANCE = (30, 20, 10, 0)
POINTS_PER_SHARED_GOAL = 8
POINTS_PER_SHARED_DAY = 3
LOCATION_EXACT_POINTS = 15
LOCATION_PARTIAL_POINTS = 10


@dataclass(frozen=True)
class ScoreBreakdown:
    skill: int = 0
    goals: int = 0
    style: int = 0
    days: int = 0
    location: int = 0

    @property
    def total(self) -> int:
        return self.skill + self.goals + self.style + self.days + self.location

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class CompatibilityResult:
    match_score: int
    common_goals: list[str] = field(default_factory=list)
    common_days: list[str] = field(default_factory=list)
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)


# ─────────────────────────────────────────────────────────────────────────────
#  Individual terms
# ─────────────────────────────────────────────────────────────────────────────

def skill_points(requester: Profile, candidate: Profile) -> int:
    distance = abs(requester.skill_level.ordinal - candidate.skill_level.ordinal)
    if distance < len(SKILL_POINTS_BY_DISTANCE):
        return SKILL_POINTS_BY_DISTANCE[distance]
    return 0


def shared_items(mine: list[str], theirs: list[str]) -> list[str]:
    """Items of `mine`, in order, that also appear in `theirs` (exact match)."""
    lookup = set(theirs)
    return [item for item in mine if item in lookup]


def saturating(count: int, per_item: int, cap: int) -> int:
    return min(count * per_item, cap)


def style_points(requester: Profile, candidate: Profile) -> int:
    a = requester.coaching_style_preference
    b = candidate.coaching_style_preference
    if a and b and a == b:
        return TERM_MAX_POINTS["style"]
    return 0


def location_points(requester: Profile, candidate: Profile) -> int:
    if not requester.location or not candidate.location:
        return 0
    a = requester.location.lower()
    b = candidate.location.lower()
    if a == b:
        return LOCATION_EXACT_POINTS
    if a in b or b in a:
        return LOCATION_PARTIAL_POINTS
    return 0


# ─────────────────────────────────────────────────────────────────────────────
#  Public entry point
# ─────────────────────────────────────────────────────────────────────────────

def compute_compatibility_score(requester: Profile, candidate: Profile) -> CompatibilityResult:
    """
    Score one candidate against the requester.

    Pure: no I/O, no randomness, never raises for a validated Profile.
    """
    common_goals = shared_items(requester.primary_goals, candidate.primary_goals)
    common_days = shared_items(requester.preferred_days, candidate.preferred_days)

    breakdown = ScoreBreakdown(
        skill=skill_points(requester, candidate),
        goals=saturating(len(common_goals), POINTS_PER_SHARED_GOAL, TERM_MAX_POINTS["goals"]),
        style=style_points(requester, candidate),
        days=saturating(len(common_days), POINTS_PER_SHARED_DAY, TERM_MAX_POINTS["days"]),
        location=location_points(requester, candidate),
    )

    # Term maxima sum to exactly MAX_SCORE today; the clamp keeps that true
    # if a weight is ever raised.
    score = max(0, min(breakdown.total, MAX_SCORE))

    return CompatibilityResult(
        match_score=score,
        common_goals=common_goals,
        common_days=common_days,
        breakdown=breakdown,
    )
