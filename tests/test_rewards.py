"""Tests for XP, level, streak and badge arithmetic."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from accessiquest.analyzer import ActivityResult
from accessiquest.progress import (
    CompletionContext,
    StreakState,
    activity_xp,
    calculate_level,
    day_badge,
    reward_activity,
    streak_badges,
    update_streak,
    xp_for_next_level,
)

PASSED = ActivityResult(passed=True, message="ok")
FAILED = ActivityResult(passed=False, message="nope")
TODAY = date(2026, 3, 10)


class TestActivityXp:
    @pytest.mark.parametrize(
        "time_spent, hints_used, expected",
        [(60, 0, 175), (300, 0, 150), (60, 2, 125), (300, 1, 100), (120, 0, 150)],
    )
    def test_bonuses(self, time_spent, hints_used, expected):
        assert activity_xp(time_spent, hints_used) == expected


class TestLevels:
    @pytest.mark.parametrize(
        "xp, level",
        [(0, 1), (499, 1), (500, 2), (1999, 2), (2000, 3), (4500, 4), (-10, 1)],
    )
    def test_calculate_level(self, xp, level):
        assert calculate_level(xp) == level

    def test_next_level_threshold_matches_level(self):
        for level in range(1, 6):
            threshold = xp_for_next_level(level)
            assert calculate_level(threshold - 1) == level
            assert calculate_level(threshold) == level + 1


class TestRewardActivity:
    def test_failed_activity_earns_nothing(self):
        reward = reward_activity(FAILED, CompletionContext(day_number=1, time_spent=30, hints_used=0, current_xp=600))
        assert reward.xp_gained == 0
        assert reward.total_xp == 600
        assert reward.level == 2
        assert reward.badges == []

    def test_regular_completion(self):
        context = CompletionContext(day_number=1, time_spent=200, hints_used=1, current_xp=450)
        reward = reward_activity(PASSED, context)
        assert reward.xp_gained == 100
        assert reward.total_xp == 550
        assert reward.level == 2
        assert reward.day_completed is False

    def test_last_activity_of_day_awards_bonus_and_badge(self):
        context = CompletionContext(
            day_number=1, time_spent=60, hints_used=0, current_xp=0, day_activities_completed=2
        )
        reward = reward_activity(PASSED, context)
        assert reward.day_completed is True
        assert reward.xp_gained == 675
        assert reward.total_xp == 675
        assert [badge.id for badge in reward.badges] == ["visual-hero"]

    def test_day_badge_only_once(self):
        context = CompletionContext(
            day_number=2, time_spent=300, hints_used=1, day_activities_completed=2, day_badge_earned=True
        )
        reward = reward_activity(PASSED, context)
        assert reward.xp_gained == 600
        assert reward.badges == []

    def test_completion_after_day_is_done(self):
        context = CompletionContext(
            day_number=1, time_spent=300, hints_used=1, day_activities_completed=3, day_badge_earned=True
        )
        reward = reward_activity(PASSED, context)
        assert reward.day_completed is False
        assert reward.xp_gained == 100

    def test_days_without_badge(self):
        assert day_badge(5) is None
        context = CompletionContext(day_number=5, time_spent=300, hints_used=1, day_activities_completed=2)
        assert reward_activity(PASSED, context).badges == []


class TestStreaks:
    def test_first_day(self):
        assert update_streak(StreakState(), [TODAY], TODAY) == StreakState(current=1, longest=1)

    def test_consecutive_day_extends(self):
        state = StreakState(current=3, longest=3)
        dates = [TODAY - timedelta(days=1), TODAY]
        assert update_streak(state, dates, TODAY) == StreakState(current=4, longest=4)

    def test_longest_is_kept(self):
        state = StreakState(current=2, longest=9)
        dates = [TODAY - timedelta(days=1), TODAY]
        assert update_streak(state, dates, TODAY) == StreakState(current=3, longest=9)

    def test_gap_resets(self):
        state = StreakState(current=5, longest=5)
        dates = [TODAY - timedelta(days=3)]
        assert update_streak(state, dates, TODAY) == StreakState(current=0, longest=5)

    def test_yesterday_only_keeps_streak(self):
        state = StreakState(current=5, longest=5)
        assert update_streak(state, [TODAY - timedelta(days=1)], TODAY) == state

    def test_streak_badges(self):
        badges = streak_badges(7, {"streak-3"})
        assert [badge.id for badge in badges] == ["streak-7"]
        assert badges[0].name == "7 Day Streak"
        assert badges[0].category == "streak"
        assert streak_badges(2, set()) == []
        assert [b.id for b in streak_badges(30, ())] == ["streak-3", "streak-7", "streak-14", "streak-30"]
