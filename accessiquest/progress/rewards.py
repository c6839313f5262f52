"""
Reward calculator for completed activities.

Turns activity verdicts into experience points, levels, streaks and
badges. Everything here is arithmetic over plain values: time spent,
hints used and dates are supplied by the caller's progress store.
"""

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Collection, Dict, Iterable, List, Optional

from ..analyzer.activities import ActivityResult
from ..utils.constants import (
    XP_PER_ACTIVITY,
    XP_PER_DAY_COMPLETION,
    XP_BONUS_NO_HINTS,
    XP_BONUS_FAST_COMPLETION,
    FAST_COMPLETION_SECONDS,
    ACTIVITIES_PER_DAY,
    XP_PER_LEVEL_STEP,
    STREAK_MILESTONES,
)


@dataclass(frozen=True)
class Badge:
    """A badge a learner can earn."""
    id: str
    name: str
    description: str
    category: str


DAY_BADGES: Dict[int, Badge] = {
    1: Badge(
        id="visual-hero",
        name="Visual Accessibility Hero",
        description="Mastered alt text, headings, and color contrast",
        category="daily",
    ),
    2: Badge(
        id="keyboard-master",
        name="Keyboard Navigation Master",
        description="Conquered tab order, focus, and skip links",
        category="daily",
    ),
    3: Badge(
        id="screen-reader-ally",
        name="Screen Reader Ally",
        description="Implemented ARIA labels and live regions",
        category="daily",
    ),
    4: Badge(
        id="universal-champion",
        name="Universal Design Champion",
        description="Achieved comprehensive accessibility mastery",
        category="daily",
    ),
}


@dataclass(frozen=True)
class CompletionContext:
    """
    Progress state around one activity completion.

    ``day_activities_completed`` counts the distinct activities of the day
    already completed before this one. Callers must not count a repeat of
    the activity being completed, or the day bonus fires early or never.
    """
    day_number: int
    time_spent: int
    hints_used: int
    current_xp: int = 0
    day_activities_completed: int = 0
    day_badge_earned: bool = False


@dataclass(frozen=True)
class ActivityReward:
    """What one activity completion earned."""
    xp_gained: int
    total_xp: int
    level: int
    day_completed: bool = False
    badges: List[Badge] = field(default_factory=list)


@dataclass(frozen=True)
class StreakState:
    """Current and longest run of consecutive active days."""
    current: int = 0
    longest: int = 0


def activity_xp(time_spent: int, hints_used: int) -> int:
    """XP for one completed activity, with no-hint and fast-finish bonuses."""
    xp = XP_PER_ACTIVITY
    if hints_used == 0:
        xp += XP_BONUS_NO_HINTS
    if time_spent < FAST_COMPLETION_SECONDS:
        xp += XP_BONUS_FAST_COMPLETION
    return xp


def calculate_level(xp: int) -> int:
    """Level 1 covers 0-499 XP, level 2 500-1999, level 3 2000-4499, ..."""
    return int(math.floor(math.sqrt(max(0, xp) / XP_PER_LEVEL_STEP))) + 1


def xp_for_next_level(current_level: int) -> int:
    """Total XP at which ``current_level + 1`` starts."""
    return current_level ** 2 * XP_PER_LEVEL_STEP


def day_badge(day_number: int) -> Optional[Badge]:
    """Badge awarded for finishing every activity of a day, if any."""
    return DAY_BADGES.get(day_number)


def reward_activity(result: ActivityResult, context: CompletionContext) -> ActivityReward:
    """
    Compute the reward for an activity attempt.

    A failed verdict earns nothing. A passed one earns the activity XP;
    when it completes the day it also earns the day bonus and, once,
    the day badge.

    Args:
        result: Verdict from ``verify_activity``
        context: Progress state before this completion

    Returns:
        ActivityReward with gained and total XP, level and new badges
    """
    if not result.passed:
        return ActivityReward(
            xp_gained=0,
            total_xp=context.current_xp,
            level=calculate_level(context.current_xp),
        )

    xp_gained = activity_xp(context.time_spent, context.hints_used)
    badges = []

    day_completed = context.day_activities_completed + 1 == ACTIVITIES_PER_DAY
    if day_completed:
        xp_gained += XP_PER_DAY_COMPLETION
        badge = day_badge(context.day_number)
        if badge is not None and not context.day_badge_earned:
            badges.append(badge)

    total_xp = context.current_xp + xp_gained
    return ActivityReward(
        xp_gained=xp_gained,
        total_xp=total_xp,
        level=calculate_level(total_xp),
        day_completed=day_completed,
        badges=badges,
    )


def update_streak(state: StreakState, activity_dates: Iterable[date], today: date) -> StreakState:
    """
    Advance the streak after activity on ``today``.

    The streak grows when there was activity today and either yesterday
    or never before; it resets when the latest activity is more than a
    day old.

    Args:
        state: Streak before the update
        activity_dates: Dates on which activities were completed
        today: The caller's current date

    Returns:
        Updated StreakState
    """
    dates = set(activity_dates)
    current = state.current

    if today in dates:
        if today - timedelta(days=1) in dates or current == 0:
            current += 1
    elif dates and (today - max(dates)).days > 1:
        current = 0

    return StreakState(current=current, longest=max(state.longest, current))


def streak_badges(current_streak: int, earned_badge_ids: Collection[str]) -> List[Badge]:
    """Milestone badges reached by ``current_streak`` and not yet earned."""
    return [
        Badge(
            id=f"streak-{milestone}",
            name=f"{milestone} Day Streak",
            description=f"Completed activities for {milestone} consecutive days",
            category="streak",
        )
        for milestone in STREAK_MILESTONES
        if current_streak >= milestone and f"streak-{milestone}" not in earned_badge_ids
    ]
