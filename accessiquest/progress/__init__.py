"""
Progress module for rewarding completed activities.

Contains the XP, level, streak and badge arithmetic used by the
progress store.
"""

from .rewards import (
    Badge,
    CompletionContext,
    ActivityReward,
    StreakState,
    activity_xp,
    calculate_level,
    xp_for_next_level,
    day_badge,
    reward_activity,
    update_streak,
    streak_badges,
)

__all__ = [
    "Badge",
    "CompletionContext",
    "ActivityReward",
    "StreakState",
    "activity_xp",
    "calculate_level",
    "xp_for_next_level",
    "day_badge",
    "reward_activity",
    "update_streak",
    "streak_badges",
]
