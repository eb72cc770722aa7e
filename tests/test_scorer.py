"""compute_compatibility_score unit tests."""

import pytest

from models.profile import Profile
from models.scorer import MAX_SCORE, compute_compatibility_score, skill_points


def profile(**fields) -> Profile:
    return Profile.model_validate(fields)


class TestSkillProximity:

    @pytest.mark.parametrize("other, expected", [
        ("BEGINNER", 30),
        ("INTERMEDIATE", 20),
        ("ADVANCED", 10),
        ("PRO", 0),
    ])
    def test_points_by_distance_from_beginner(self, other, expected):
        result = compute_compatibility_score(
            profile(skillLevel="BEGINNER"), profile(skillLevel=other)
        )
        assert result.breakdown.skill == expected

    def test_skill_term_is_symmetric(self):
        a = profile(skillLevel="ADVANCED")
        b = profile(skillLevel="INTERMEDIATE")
        assert skill_points(a, b) == skill_points(b, a) == 20

    def test_unknown_skill_counts_as_beginner(self):
        result = compute_compatibility_score(
            profile(skillLevel="WIZARD"), profile(skillLevel="BEGINNER")
        )
        assert result.breakdown.skill == 30


class TestSharedGoals:

    def test_goal_points_saturate_at_25(self):
        goals = ["serve", "volley", "dinking", "strategy", "fitness"]
        result = compute_compatibility_score(
            profile(primaryGoals=goals), profile(primaryGoals=list(reversed(goals)))
        )
        assert result.breakdown.goals == 25
        assert result.common_goals == goals

    def test_goal_match_is_case_sensitive(self):
        result = compute_compatibility_score(
            profile(primaryGoals=["Serve"]), profile(primaryGoals=["serve"])
        )
        assert result.breakdown.goals == 0
        assert result.common_goals == []

    def test_common_goals_follow_requester_order(self):
        a = profile(primaryGoals=["strategy", "serve"])
        b = profile(primaryGoals=["serve", "strategy"])
        assert compute_compatibility_score(a, b).common_goals == ["strategy", "serve"]
        assert compute_compatibility_score(b, a).common_goals == ["serve", "strategy"]

    def test_score_is_directional(self):
        requester = profile(primaryGoals=["serve", "serve", "volley"])
        candidate = profile(primaryGoals=["serve"])

        forward = compute_compatibility_score(requester, candidate)
        backward = compute_compatibility_score(candidate, requester)

        assert forward.breakdown.skill == backward.breakdown.skill
        assert forward.breakdown.goals == 16
        assert backward.breakdown.goals == 8
        assert forward.match_score != backward.match_score


class TestCoachingStyle:

    def test_exact_match_scores_15(self):
        result = compute_compatibility_score(
            profile(coachingStylePreference="BALANCED"),
            profile(coachingStylePreference="BALANCED"),
        )
        assert result.breakdown.style == 15

    def test_no_case_folding(self):
        result = compute_compatibility_score(
            profile(coachingStylePreference="BALANCED"),
            profile(coachingStylePreference="balanced"),
        )
        assert result.breakdown.style == 0

    def test_missing_on_either_side_scores_zero(self):
        result = compute_compatibility_score(
            profile(coachingStylePreference="BALANCED"), profile()
        )
        assert result.breakdown.style == 0


class TestSharedDays:

    def test_three_points_per_day(self):
        result = compute_compatibility_score(
            profile(preferredDays=["Mon", "Wed", "Fri"]),
            profile(preferredDays=["Wed", "Fri"]),
        )
        assert result.breakdown.days == 6
        assert result.common_days == ["Wed", "Fri"]

    def test_day_match_is_exact(self):
        result = compute_compatibility_score(
            profile(preferredDays=["Monday"]), profile(preferredDays=["monday"])
        )
        assert result.breakdown.days == 0

    def test_day_points_saturate_at_15(self):
        days = [f"day{i}" for i in range(7)]
        result = compute_compatibility_score(
            profile(preferredDays=days), profile(preferredDays=days)
        )
        assert result.breakdown.days == 15


class TestLocation:

    def test_exact_match_ignores_case(self):
        result = compute_compatibility_score(
            profile(location="Austin"), profile(location="AUSTIN")
        )
        assert result.breakdown.location == 15

    def test_substring_match_scores_10(self):
        result = compute_compatibility_score(
            profile(location="Austin"), profile(location="Austin, TX")
        )
        assert result.breakdown.location == 10

    def test_containment_works_both_ways(self):
        result = compute_compatibility_score(
            profile(location="austin, tx"), profile(location="Austin")
        )
        assert result.breakdown.location == 10

    def test_unrelated_locations_score_zero(self):
        result = compute_compatibility_score(
            profile(location="Austin"), profile(location="Dallas")
        )
        assert result.breakdown.location == 0

    def test_missing_location_is_not_evaluated(self):
        result = compute_compatibility_score(profile(location="Austin"), profile(location=None))
        assert result.breakdown.location == 0


class TestTotals:

    def test_end_to_end_example(self):
        requester = profile(
            skillLevel="INTERMEDIATE", primaryGoals=["serve", "strategy"],
            coachingStylePreference="BALANCED", preferredDays=["Mon", "Wed"],
            location="Austin",
        )
        candidate = profile(
            skillLevel="INTERMEDIATE", primaryGoals=["serve"],
            coachingStylePreference="BALANCED", preferredDays=["Mon"],
            location="Austin, TX",
        )
        result = compute_compatibility_score(requester, candidate)

        assert result.breakdown.to_dict() == {
            "skill": 30, "goals": 8, "style": 15, "days": 3, "location": 10,
        }
        assert result.match_score == 66
        assert result.common_goals == ["serve"]
        assert result.common_days == ["Mon"]

    def test_perfect_match_is_exactly_100(self):
        full = dict(
            skillLevel="PRO", primaryGoals=["a", "b", "c", "d"],
            coachingStylePreference="INTENSE",
            preferredDays=["Mon", "Tue", "Wed", "Thu", "Fri"], location="Austin",
        )
        assert compute_compatibility_score(profile(**full), profile(**full)).match_score == MAX_SCORE

    def test_missing_optional_fields_never_crash(self):
        candidate = profile(location=None, coachingStylePreference=None, primaryGoals=[])
        result = compute_compatibility_score(
            profile(primaryGoals=["serve"], coachingStylePreference="BALANCED", location="Austin"),
            candidate,
        )
        assert result.breakdown.location == 0
        assert result.breakdown.style == 0
        assert result.breakdown.goals == 0
        assert 0 <= result.match_score <= 100

    @pytest.mark.parametrize("a, b", [
        ({}, {}),
        ({"skillLevel": "PRO"}, {"skillLevel": "BEGINNER"}),
        ({"primaryGoals": ["x"] * 20, "preferredDays": ["Mon"] * 20},
         {"primaryGoals": ["x"], "preferredDays": ["Mon"]}),
        ({"location": "a"}, {"location": "A"}),
    ])
    def test_score_stays_in_bounds(self, a, b):
        score = compute_compatibility_score(profile(**a), profile(**b)).match_score
        assert 0 <= score <= 100
