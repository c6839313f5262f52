"""
Activity verifier module for single-exercise pass/fail gating.

Each learning activity has its own narrow check, separate from the
document audit in ``accessibility``. Only the scanner and the contrast
math are shared. Thresholds are per exercise and differ from the audit
rules: meaningful alt text is longer than 8 characters here, while the
audit only warns below 3.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union, Any

from . import scanner
from .colors import compute_contrast, resolve_color
from ..utils.constants import (
    ACTIVITY_ALT_TEXT_MIN_LENGTH,
    ACTIVITY_ARIA_LABEL_MIN_LENGTH,
    REDUNDANT_ALT_WORDS,
    DEFAULT_FOREGROUND,
    DEFAULT_BACKGROUND,
    SKIP_LINK_TARGETS,
)
from ..utils.log import get_logger


class ActivityType(Enum):
    """Learning activities with a dedicated check."""
    ALT_TEXT = "alt-text"
    HEADING = "heading"
    CONTRAST = "contrast"
    TAB_ORDER = "tab-order"
    FOCUS = "focus"
    SKIP_LINK = "skip-link"
    ARIA_LABEL = "aria-label"
    FORM_LABEL = "form-label"
    LIVE_REGION = "live-region"
    RESPONSIVE = "responsive"
    MOTION = "motion"
    CAPTIONS = "captions"


@dataclass(frozen=True)
class ActivityResult:
    """Outcome of verifying one activity."""
    passed: bool
    message: str
    details: List[str] = field(default_factory=list)
    announcement: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'passed': self.passed,
            'message': self.message,
            'details': list(self.details),
            'announcement': self.announcement,
        }


# CSS declarations; the lookbehind keeps "background-color" out of "color"
COLOR_DECLARATION_PATTERN = re.compile(r'(?<![\w-])color\s*:\s*([^;{}<>\n"\']+)', re.IGNORECASE)
BACKGROUND_DECLARATION_PATTERN = re.compile(
    r'(?<![\w-])background(?:-color)?\s*:\s*([^;{}<>\n"\']+)',
    re.IGNORECASE
)
FIXED_WIDTH_PATTERN = re.compile(r'(?<![\w-])width\s*:\s*300px', re.IGNORECASE)
RELATIVE_UNIT_PATTERN = re.compile(r'\d(?:r?em(?![a-z])|%)', re.IGNORECASE)
TABINDEX_PATTERN = re.compile(r'^\d+$')


def _declaration_value(pattern, source: str) -> Optional[str]:
    """First value of a CSS declaration, without any !important flag."""
    match = pattern.search(source)
    if match is None:
        return None
    return match.group(1).split('!')[0].strip()


class ActivityVerifier:
    """
    Verifies a code snippet against one learning activity.

    Every check returns a fixed message, remediation bullets and, where
    the exercise has one, the text a screen reader would announce.
    """

    def __init__(self):
        """Initialize the activity verifier."""
        self.logger = get_logger("activities")
        self._checks: Dict[ActivityType, Callable[[str], ActivityResult]] = {
            ActivityType.ALT_TEXT: self._verify_alt_text,
            ActivityType.HEADING: self._verify_heading,
            ActivityType.CONTRAST: self._verify_contrast,
            ActivityType.TAB_ORDER: self._verify_tab_order,
            ActivityType.FOCUS: self._verify_focus,
            ActivityType.SKIP_LINK: self._verify_skip_link,
            ActivityType.ARIA_LABEL: self._verify_aria_label,
            ActivityType.FORM_LABEL: self._verify_form_label,
            ActivityType.LIVE_REGION: self._verify_live_region,
            ActivityType.RESPONSIVE: self._verify_responsive,
            ActivityType.MOTION: self._verify_motion,
            ActivityType.CAPTIONS: self._verify_captions,
        }

    def verify(self, source: str, activity_type: Union[str, ActivityType]) -> ActivityResult:
        """
        Run the check for one activity.

        Args:
            source: Code submitted for the exercise
            activity_type: One of the ActivityType values or its tag

        Returns:
            ActivityResult describing the verdict
        """
        if not isinstance(source, str):
            source = ""

        try:
            activity = ActivityType(activity_type)
        except ValueError:
            self.logger.warning("Unknown activity type %r, using generic check", activity_type)
            return self._verify_generic(source)

        result = self._checks[activity](source)
        self.logger.debug("Activity %s: passed=%s", activity.value, result.passed)
        return result

    def _verify_generic(self, source: str) -> ActivityResult:
        alt_texts = scanner.find_attribute_values(source, "alt")
        passed = bool(alt_texts) and "" not in alt_texts
        return ActivityResult(
            passed=passed,
            message="Test passed!" if passed else "Test failed - check your code",
        )

    def _verify_alt_text(self, source: str) -> ActivityResult:
        alt_texts = scanner.find_attribute_values(source, "alt")

        if "" in alt_texts:
            return ActivityResult(
                passed=False,
                message="Some images still have empty alt attributes",
                details=['Empty alt="" found - add descriptive text'],
                announcement="Image, no description available",
            )

        if not alt_texts:
            return ActivityResult(
                passed=False,
                message="Images need alt attributes for screen readers",
                details=['Add alt="description" to all img tags'],
                announcement="Image, no description available",
            )

        meaningful = [
            alt for alt in alt_texts
            if len(alt) > ACTIVITY_ALT_TEXT_MIN_LENGTH
            and not any(word in alt.lower() for word in REDUNDANT_ALT_WORDS)
        ]

        if len(meaningful) < len(alt_texts):
            return ActivityResult(
                passed=False,
                message="Alt text should be more descriptive",
                details=[
                    "Avoid generic words like 'image' or 'picture'",
                    "Describe what you see in the image",
                ],
                announcement="Image, generic description",
            )

        return ActivityResult(
            passed=True,
            message="Perfect! All images have descriptive alt text",
            details=[f"Found {len(meaningful)} well-described images"],
            announcement=meaningful[0],
        )

    def _verify_heading(self, source: str) -> ActivityResult:
        headings = scanner.iter_tags(source, "h[1-6]")
        levels = [int(tag.name[1]) for tag in headings]
        h1_count = levels.count(1)

        if h1_count > 1:
            return ActivityResult(
                passed=False,
                message="Page should have only one h1 element",
                details=["Use h1 for main title, h2-h6 for subsections"],
                announcement="Multiple main headings found - confusing for navigation",
            )

        if h1_count == 0:
            return ActivityResult(
                passed=False,
                message="Page needs an h1 element for the main title",
                details=["Add an h1 tag for the main page title"],
                announcement="No main heading found",
            )

        if any(current > previous + 1 for previous, current in zip(levels, levels[1:])):
            return ActivityResult(
                passed=False,
                message="Heading levels should not skip (e.g., h1 → h3)",
                details=[
                    "Use sequential heading levels: h1 → h2 → h3",
                    "Don't skip from h1 directly to h3",
                ],
                announcement="Heading structure is confusing - levels are skipped",
            )

        outline = []
        for tag, level in zip(headings, levels):
            text = scanner.leading_text(source, tag.end).strip() or "heading"
            outline.append(f"level {level}: {text}")

        return ActivityResult(
            passed=True,
            message="Great! Heading structure is logical and accessible",
            details=[f"Found {len(headings)} properly structured headings"],
            announcement="Heading structure: " + ", ".join(outline),
        )

    def _verify_contrast(self, source: str) -> ActivityResult:
        foreground = resolve_color(
            _declaration_value(COLOR_DECLARATION_PATTERN, source) or DEFAULT_FOREGROUND,
            DEFAULT_FOREGROUND
        )
        background = resolve_color(
            _declaration_value(BACKGROUND_DECLARATION_PATTERN, source) or DEFAULT_BACKGROUND,
            DEFAULT_BACKGROUND
        )

        contrast = compute_contrast(foreground, background)
        ratio = f"{contrast.ratio:g}"

        if contrast.passes:
            message = f"Contrast ratio: {ratio}:1 - Passes WCAG {contrast.level.value} standards"
        else:
            message = f"Contrast ratio: {ratio}:1 - Fails WCAG standards. Use darker colors."

        return ActivityResult(
            passed=contrast.passes,
            message=message,
            details=[f"Text color: {foreground}", f"Background color: {background}"],
        )

    def _verify_tab_order(self, source: str) -> ActivityResult:
        values = sorted(
            int(value) for value in scanner.find_attribute_values(source, "tabindex")
            if TABINDEX_PATTERN.match(value)
        )

        if values != list(range(1, len(values) + 1)):
            return ActivityResult(
                passed=False,
                message="Tab order should be sequential (1, 2, 3, 4...)",
                details=[
                    "Use tabindex values in logical order",
                    "Start with tabindex='1' for first element",
                ],
                announcement="Tab order is confusing",
            )

        return ActivityResult(
            passed=True,
            message="Perfect! Tab order follows logical sequence",
            details=[f"Found {len(values)} elements with proper tab order"],
            announcement="Tab navigation flows logically through the form",
        )

    def _verify_focus(self, source: str) -> ActivityResult:
        lowered = source.lower()
        has_focus_styles = ":focus" in lowered and ("outline" in lowered or "border" in lowered)

        if not has_focus_styles:
            return ActivityResult(
                passed=False,
                message="Missing visible focus indicators",
                details=[
                    "Add :focus styles with outline or border",
                    "Ensure focus indicators are visible",
                ],
                announcement="No visible focus indicators",
            )

        return ActivityResult(
            passed=True,
            message="Great! Focus indicators are clearly visible",
            details=["Focus styles will help keyboard users navigate"],
            announcement="Clear focus indicators present",
        )

    def _verify_skip_link(self, source: str) -> ActivityResult:
        link_targets = {
            href[1:] for href in scanner.find_attribute_values(source, "href")
            if href.startswith("#") and href[1:] in SKIP_LINK_TARGETS
        }

        if not link_targets:
            return ActivityResult(
                passed=False,
                message="Missing skip navigation link",
                details=[
                    "Add a skip link at the beginning",
                    "Use href='#main-content' to link to main content",
                ],
                announcement="No skip link available",
            )

        if not link_targets & set(scanner.find_attribute_values(source, "id")):
            return ActivityResult(
                passed=False,
                message="Skip link target not found",
                details=[
                    "Add id='main-content' to the main content area",
                    "Ensure skip link has a valid target",
                ],
                announcement="Skip link target missing",
            )

        return ActivityResult(
            passed=True,
            message="Excellent! Skip link is properly implemented",
            details=["Keyboard users can now skip to main content"],
            announcement="Skip to main content link available",
        )

    def _verify_aria_label(self, source: str) -> ActivityResult:
        labels = scanner.find_attribute_values(source, "aria-label")

        if not labels:
            return ActivityResult(
                passed=False,
                message="Missing aria-label attributes",
                details=["Add aria-label to icon buttons", "Describe what each button does"],
                announcement="Button with no description",
            )

        meaningful = [label for label in labels if len(label) > ACTIVITY_ARIA_LABEL_MIN_LENGTH]

        if len(meaningful) < len(labels):
            return ActivityResult(
                passed=False,
                message="Aria labels should be more descriptive",
                details=[
                    "Describe the action, not just the icon",
                    "Use clear, concise descriptions",
                ],
                announcement="Button with unclear description",
            )

        return ActivityResult(
            passed=True,
            message="Perfect! All buttons have clear aria-labels",
            details=[f"Found {len(meaningful)} well-labeled buttons"],
            announcement=meaningful[0],
        )

    def _verify_form_label(self, source: str) -> ActivityResult:
        if not (scanner.has_attribute(source, "for") and scanner.has_attribute(source, "id")):
            return ActivityResult(
                passed=False,
                message="Labels not properly connected to inputs",
                details=[
                    "Use 'for' attribute on labels",
                    "Add matching 'id' attribute on inputs",
                ],
                announcement="Form field with no label",
            )

        for_values = scanner.find_attribute_values(source, "for")
        id_values = set(scanner.find_attribute_values(source, "id"))

        if not all(value in id_values for value in for_values):
            return ActivityResult(
                passed=False,
                message="Some labels don't match their inputs",
                details=[
                    "Ensure each 'for' attribute matches an 'id'",
                    "Check spelling and case sensitivity",
                ],
                announcement="Form field with mismatched label",
            )

        return ActivityResult(
            passed=True,
            message="Excellent! All form labels are properly connected",
            details=[f"Found {len(for_values)} properly labeled form fields"],
            announcement="Form field with proper label connection",
        )

    def _verify_live_region(self, source: str) -> ActivityResult:
        if not scanner.has_attribute(source, "aria-live"):
            return ActivityResult(
                passed=False,
                message="Missing aria-live attribute for status updates",
                details=[
                    "Add aria-live='polite' to status messages",
                    "This announces changes to screen readers",
                ],
                announcement="Status update not announced",
            )

        return ActivityResult(
            passed=True,
            message="Great! Status messages will be announced",
            details=["Screen readers will announce status changes"],
            announcement="Status update will be announced",
        )

    def _verify_responsive(self, source: str) -> ActivityResult:
        lowered = source.lower()
        has_max_width = "max-width" in lowered or "max-w-" in lowered

        if FIXED_WIDTH_PATTERN.search(source) and "max-width" not in lowered:
            return ActivityResult(
                passed=False,
                message="Fixed width prevents proper scaling",
                details=["Use max-width instead of width", "Allow content to scale with zoom"],
                announcement="Content may be cut off when zoomed",
            )

        if not has_max_width or not RELATIVE_UNIT_PATTERN.search(source):
            return ActivityResult(
                passed=False,
                message="Layout needs to be more flexible for zoom",
                details=["Use max-width for containers", "Use relative units like rem or em"],
                announcement="Layout may not work well when zoomed",
            )

        return ActivityResult(
            passed=True,
            message="Perfect! Layout supports high zoom levels",
            details=["Content will remain accessible when zoomed to 200%"],
            announcement="Layout works well at high zoom levels",
        )

    def _verify_motion(self, source: str) -> ActivityResult:
        if "prefers-reduced-motion" not in source.lower():
            return ActivityResult(
                passed=False,
                message="Missing reduced motion support",
                details=[
                    "Add @media (prefers-reduced-motion: reduce)",
                    "Disable animations for sensitive users",
                ],
                announcement="Animations may cause discomfort",
            )

        return ActivityResult(
            passed=True,
            message="Excellent! Respects user motion preferences",
            details=["Animations will be disabled for sensitive users"],
            announcement="Motion preferences respected",
        )

    def _verify_captions(self, source: str) -> ActivityResult:
        has_captions = any(
            (scanner.extract_attribute(track, "kind") or "").strip().lower() == "captions"
            for track in scanner.find_tags(source, "track")
        )

        if not has_captions:
            return ActivityResult(
                passed=False,
                message="Missing video captions",
                details=[
                    "Add <track> element with kind='captions'",
                    "Provide captions for video content",
                ],
                announcement="Video has no captions",
            )

        # A missing transcript is advisory only
        if "transcript" not in source.lower():
            return ActivityResult(
                passed=True,
                message="Captions found. Consider adding transcript link",
                details=[
                    "Provide a link to full transcript",
                    "Transcripts help users who can't use video",
                ],
                announcement="Video has captions but no transcript",
            )

        return ActivityResult(
            passed=True,
            message="Perfect! Video is fully accessible",
            details=["Captions and transcript provide multiple access methods"],
            announcement="Video has captions and transcript available",
        )


# Stateless, shared by the module-level entry point
_verifier = ActivityVerifier()


def verify_activity(source: str, activity_type: Union[str, ActivityType]) -> ActivityResult:
    """
    Verify a snippet against a single learning activity.

    Args:
        source: Code submitted for the exercise
        activity_type: Activity tag such as ``"tab-order"``

    Returns:
        ActivityResult with verdict, message, remediation and announcement
    """
    return _verifier.verify(source, activity_type)
