"""
Accessibility audit module for analyzing markup snippets.

Runs four independent rule analyzers (alt text, heading structure, form
labels and ARIA usage) over raw source text and aggregates their findings
into a single scored report.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from . import scanner
from ..utils.constants import (
    BASE_SCORE,
    NO_HEADINGS_SCORE,
    PENALTY_ALT_MISSING,
    PENALTY_ALT_EMPTY,
    PENALTY_ALT_SHORT,
    PENALTY_ALT_REDUNDANT,
    ALT_TEXT_MIN_LENGTH,
    REDUNDANT_ALT_WORDS,
    PENALTY_HEADING_MULTIPLE_H1,
    PENALTY_HEADING_NO_H1,
    PENALTY_HEADING_SKIP,
    PENALTY_HEADING_EMPTY,
    PENALTY_INPUT_ID_MISSING,
    PENALTY_INPUT_LABEL_MISSING,
    PENALTY_PLACEHOLDER_LABEL,
    PENALTY_BUTTON_NO_NAME,
    PENALTY_ARIA_UNKNOWN,
    ALLOWED_ARIA_ATTRIBUTES,
)
from ..utils.log import get_logger


class IssueLevel(Enum):
    """Severity level of accessibility issues."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class AccessibilityIssue:
    """Represents an accessibility issue found."""
    level: IssueLevel
    rule_id: str
    message: str
    suggestion: str
    element: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'severity': self.level.value,
            'rule': self.rule_id,
            'message': self.message,
            'element': self.element,
            'suggestion': self.suggestion,
        }


@dataclass
class AnalysisResult:
    """Result of a single rule analyzer."""
    passed: bool = True
    score: int = BASE_SCORE
    issues: List[AccessibilityIssue] = field(default_factory=list)
    details: Dict[str, int] = field(default_factory=dict)

    @property
    def errors_count(self) -> int:
        return sum(1 for i in self.issues if i.level == IssueLevel.ERROR)

    @property
    def warnings_count(self) -> int:
        return sum(1 for i in self.issues if i.level == IssueLevel.WARNING)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'passed': self.passed,
            'score': self.score,
            'issues': [i.to_dict() for i in self.issues],
            'details': dict(self.details),
        }


@dataclass
class AuditResult:
    """Aggregated result of all rule analyzers."""
    passed: bool = True
    score: int = BASE_SCORE
    issues: List[AccessibilityIssue] = field(default_factory=list)
    details: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def errors_count(self) -> int:
        return sum(1 for i in self.issues if i.level == IssueLevel.ERROR)

    @property
    def warnings_count(self) -> int:
        return sum(1 for i in self.issues if i.level == IssueLevel.WARNING)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'passed': self.passed,
            'score': self.score,
            'issues': [i.to_dict() for i in self.issues],
            'details': {name: dict(d) for name, d in self.details.items()},
        }


def _finish(issues: List[AccessibilityIssue], score: int, details: Dict[str, int]) -> AnalysisResult:
    """Build an analyzer result; only errors fail, the score floors at 0."""
    return AnalysisResult(
        passed=not any(i.level == IssueLevel.ERROR for i in issues),
        score=max(0, score),
        issues=issues,
        details=details,
    )


class AccessibilityChecker:
    """
    Checks markup snippets for accessibility issues.

    Each ``analyze_*`` method is independent and pure: it starts from a
    perfect score, subtracts a fixed penalty per issue and never raises,
    whatever the input looks like.
    """

    # Analyzer names in report order
    ANALYZERS = ("alt_text", "headings", "forms", "aria")

    def __init__(self):
        """Initialize the accessibility checker."""
        self.logger = get_logger("accessibility")

    def check(self, source: str) -> AuditResult:
        """
        Run every analyzer and aggregate the findings.

        Args:
            source: Markup to analyze

        Returns:
            AuditResult with the concatenated issues and the mean score
        """
        results = {
            "alt_text": self.analyze_alt_text(source),
            "headings": self.analyze_heading_structure(source),
            "forms": self.analyze_form_accessibility(source),
            "aria": self.analyze_aria(source),
        }

        issues = []
        for name in self.ANALYZERS:
            issues.extend(results[name].issues)

        mean = sum(r.score for r in results.values()) / len(results)

        result = AuditResult(
            passed=not any(i.level == IssueLevel.ERROR for i in issues),
            score=int(math.floor(mean + 0.5)),
            issues=issues,
            details={name: results[name].details for name in self.ANALYZERS},
        )

        self.logger.debug(
            "Audit complete: score=%d, errors=%d, warnings=%d",
            result.score, result.errors_count, result.warnings_count
        )
        return result

    def analyze_alt_text(self, source: str) -> AnalysisResult:
        """Check images for missing, empty, short or redundant alt text."""
        images = scanner.find_tags(source, "img")

        if not images:
            return AnalysisResult(details={"image_count": 0})

        issues = []
        score = BASE_SCORE

        for index, img in enumerate(images, start=1):
            alt = scanner.extract_attribute(img, "alt")

            if alt is None:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.ERROR,
                    rule_id="img-alt",
                    message=f"Image {index} is missing alt attribute",
                    element=img,
                    suggestion='Add alt="descriptive text" to describe the image content'
                ))
                score -= PENALTY_ALT_MISSING
            elif alt == "":
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="img-alt-empty",
                    message=f"Image {index} has empty alt text",
                    element=img,
                    suggestion="If decorative, empty alt is fine. If meaningful, add description."
                ))
                score -= PENALTY_ALT_EMPTY
            elif len(alt) < ALT_TEXT_MIN_LENGTH:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="img-alt-short",
                    message=f"Image {index} has very short alt text",
                    element=img,
                    suggestion="Provide more descriptive alt text"
                ))
                score -= PENALTY_ALT_SHORT
            elif any(word in alt.lower() for word in REDUNDANT_ALT_WORDS):
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="img-alt-redundant",
                    message=f"Image {index} alt text contains redundant words",
                    element=img,
                    suggestion='Remove words like "image" or "picture" from alt text'
                ))
                score -= PENALTY_ALT_REDUNDANT

        self.logger.debug("Alt text: %d images, %d issues", len(images), len(issues))
        return _finish(issues, score, {"image_count": len(images)})

    def analyze_heading_structure(self, source: str) -> AnalysisResult:
        """Check heading count, h1 usage, level skips and empty headings."""
        headings = [
            (element.level, element.text.strip(), element.raw)
            for element in scanner.find_elements_with_text(source, "h[1-6]")
        ]

        if not headings:
            # No headings still passes, with a reduced score
            return AnalysisResult(
                passed=True,
                score=NO_HEADINGS_SCORE,
                issues=[AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="heading-missing",
                    message="No headings found",
                    suggestion="Add headings to structure your content"
                )],
                details={"heading_count": 0, "h1_count": 0},
            )

        issues = []
        score = BASE_SCORE

        h1_count = len([h for h in headings if h[0] == 1])
        if h1_count > 1:
            issues.append(AccessibilityIssue(
                level=IssueLevel.ERROR,
                rule_id="heading-h1-multiple",
                message=f"Found {h1_count} h1 elements, should have only one",
                suggestion="Use only one h1 per page for the main title"
            ))
            score -= PENALTY_HEADING_MULTIPLE_H1
        elif h1_count == 0:
            issues.append(AccessibilityIssue(
                level=IssueLevel.WARNING,
                rule_id="heading-h1-missing",
                message="No h1 element found",
                suggestion="Add an h1 element for the main page title"
            ))
            score -= PENALTY_HEADING_NO_H1

        # Only forward jumps are penalized
        for previous, current in zip(headings, headings[1:]):
            if current[0] > previous[0] + 1:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="heading-skip-level",
                    message=f"Heading level jumps from h{previous[0]} to h{current[0]}",
                    element=current[2],
                    suggestion="Don't skip heading levels (e.g., h2 should follow h1, not h3)"
                ))
                score -= PENALTY_HEADING_SKIP

        for index, (level, text, raw) in enumerate(headings, start=1):
            if not text:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.ERROR,
                    rule_id="heading-empty",
                    message=f"Heading {index} is empty",
                    element=raw,
                    suggestion="Add descriptive text to all headings"
                ))
                score -= PENALTY_HEADING_EMPTY

        self.logger.debug("Headings: %d found, %d h1, %d issues", len(headings), h1_count, len(issues))
        return _finish(issues, score, {"heading_count": len(headings), "h1_count": h1_count})

    def analyze_form_accessibility(self, source: str) -> AnalysisResult:
        """Check that inputs carry ids with matching ``<label for>`` elements."""
        inputs = scanner.find_tags(source, "input")
        labels = scanner.find_tags(source, "label")

        if not inputs:
            return AnalysisResult(details={"input_count": 0, "label_count": len(labels)})

        label_targets = {
            target for target in (scanner.extract_attribute(label, "for") for label in labels)
            if target is not None
        }

        issues = []
        score = BASE_SCORE

        for index, input_tag in enumerate(inputs, start=1):
            input_type = scanner.extract_attribute(input_tag, "type") or "text"
            if input_type.strip().lower() == "hidden":
                continue

            input_id = scanner.extract_attribute(input_tag, "id")

            if input_id is None:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="input-id-missing",
                    message=f"Input {index} missing id attribute",
                    element=input_tag,
                    suggestion="Add id attribute to associate with label"
                ))
                score -= PENALTY_INPUT_ID_MISSING
            elif input_id not in label_targets:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.ERROR,
                    rule_id="input-label-missing",
                    message=f"Input {index} has no associated label",
                    element=input_tag,
                    suggestion=f'Add <label for="{input_id}">Label text</label>'
                ))
                score -= PENALTY_INPUT_LABEL_MISSING

            if input_id is None and scanner.extract_attribute(input_tag, "placeholder") is not None:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="placeholder-label",
                    message=f"Input {index} uses placeholder as label",
                    element=input_tag,
                    suggestion="Use proper label element instead of relying on placeholder"
                ))
                score -= PENALTY_PLACEHOLDER_LABEL

        self.logger.debug("Forms: %d inputs, %d labels, %d issues", len(inputs), len(labels), len(issues))
        return _finish(issues, score, {"input_count": len(inputs), "label_count": len(labels)})

    def analyze_aria(self, source: str) -> AnalysisResult:
        """Check button accessible names and flag unknown aria-* attributes."""
        issues = []
        score = BASE_SCORE

        for button in scanner.find_elements_with_text(source, "button"):
            if button.text.strip():
                continue
            if not scanner.has_attribute(button.open_tag, "aria-label"):
                issues.append(AccessibilityIssue(
                    level=IssueLevel.ERROR,
                    rule_id="button-accessible-name",
                    message="Button has no accessible name",
                    element=button.raw,
                    suggestion='Add aria-label="description" or text content to button'
                ))
                score -= PENALTY_BUTTON_NO_NAME

        aria_names = scanner.find_aria_attribute_names(source)
        for name in aria_names:
            if name not in ALLOWED_ARIA_ATTRIBUTES:
                issues.append(AccessibilityIssue(
                    level=IssueLevel.WARNING,
                    rule_id="aria-invalid-attribute",
                    message=f"Unknown ARIA attribute: {name}",
                    element=name,
                    suggestion="Check ARIA attribute spelling and validity"
                ))
                score -= PENALTY_ARIA_UNKNOWN

        self.logger.debug("ARIA: %d attributes, %d issues", len(aria_names), len(issues))
        return _finish(issues, score, {"aria_attribute_count": len(aria_names)})


# Stateless, shared by the module-level entry points
_checker = AccessibilityChecker()


def analyze_alt_text(source: str) -> AnalysisResult:
    """Run the alt-text analyzer."""
    return _checker.analyze_alt_text(source)


def analyze_heading_structure(source: str) -> AnalysisResult:
    """Run the heading-structure analyzer."""
    return _checker.analyze_heading_structure(source)


def analyze_form_accessibility(source: str) -> AnalysisResult:
    """Run the form-label analyzer."""
    return _checker.analyze_form_accessibility(source)


def analyze_aria(source: str) -> AnalysisResult:
    """Run the ARIA analyzer."""
    return _checker.analyze_aria(source)


def run_audit(source: str) -> AuditResult:
    """
    Run the comprehensive audit over a markup snippet.

    Args:
        source: Markup to analyze

    Returns:
        AuditResult combining all four analyzers
    """
    return _checker.check(source)
