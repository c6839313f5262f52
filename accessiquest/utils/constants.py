"""
Shared constants for the audit engine.

Contains the penalties, thresholds and lookup tables used across the
rule analyzers, the activity verifier and the reward calculator.
"""

# Every analyzer starts from a perfect score and subtracts penalties
BASE_SCORE = 100

# Score reported when a snippet contains no headings at all
NO_HEADINGS_SCORE = 80

# Alt-text analyzer penalties
PENALTY_ALT_MISSING = 30
PENALTY_ALT_EMPTY = 5
PENALTY_ALT_SHORT = 10
PENALTY_ALT_REDUNDANT = 10

# Alt text shorter than this is flagged by the document audit
ALT_TEXT_MIN_LENGTH = 3

# Alt text must be longer than this to count as meaningful in an exercise
ACTIVITY_ALT_TEXT_MIN_LENGTH = 8

# Words that make alt text redundant ("image of ...", "picture of ...")
REDUNDANT_ALT_WORDS = ("image", "picture")

# Heading analyzer penalties
PENALTY_HEADING_MULTIPLE_H1 = 25
PENALTY_HEADING_NO_H1 = 15
PENALTY_HEADING_SKIP = 10
PENALTY_HEADING_EMPTY = 15

# Form analyzer penalties
PENALTY_INPUT_ID_MISSING = 10
PENALTY_INPUT_LABEL_MISSING = 20
PENALTY_PLACEHOLDER_LABEL = 15

# ARIA analyzer penalties
PENALTY_BUTTON_NO_NAME = 25
PENALTY_ARIA_UNKNOWN = 5

# ARIA attributes the analyzer recognises
ALLOWED_ARIA_ATTRIBUTES = frozenset({
    "aria-label",
    "aria-labelledby",
    "aria-describedby",
    "aria-hidden",
    "aria-expanded",
    "aria-live",
    "aria-atomic",
    "aria-relevant",
    "aria-busy",
    "aria-disabled",
    "aria-invalid",
    "aria-required",
})

# aria-label values must be longer than this in the labelling exercise
ACTIVITY_ARIA_LABEL_MIN_LENGTH = 15

# Named colors understood by the contrast evaluator
NAMED_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "gray": "#808080",
    "grey": "#808080",
    "lightgray": "#d3d3d3",
    "lightgrey": "#d3d3d3",
    "darkgray": "#a9a9a9",
    "darkgrey": "#a9a9a9",
}

# Colors used when a value cannot be parsed
DEFAULT_FOREGROUND = "#000000"
DEFAULT_BACKGROUND = "#ffffff"

# WCAG 2.x contrast thresholds
AAA_CONTRAST_THRESHOLD = 7.0
AA_CONTRAST_THRESHOLD = 4.5
A_CONTRAST_THRESHOLD = 3.0

# Skip-link targets accepted by the keyboard exercise
SKIP_LINK_TARGETS = ("main-content", "main")

# Reward arithmetic
XP_PER_ACTIVITY = 100
XP_PER_DAY_COMPLETION = 500
XP_BONUS_NO_HINTS = 50
XP_BONUS_FAST_COMPLETION = 25
FAST_COMPLETION_SECONDS = 120
ACTIVITIES_PER_DAY = 3
XP_PER_LEVEL_STEP = 500
STREAK_MILESTONES = (3, 7, 14, 30)
