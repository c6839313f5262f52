"""
Analyzer module for the accessibility audit engine.

Contains the markup scanner, the contrast evaluator, the four rule
analyzers with their aggregate audit, and the per-activity verifier.
"""

from .colors import (
    ContrastLevel,
    ContrastResult,
    compute_contrast,
    check_wcag_compliance,
    parse_color,
)
from .accessibility import (
    AccessibilityChecker,
    AccessibilityIssue,
    AnalysisResult,
    AuditResult,
    IssueLevel,
    analyze_alt_text,
    analyze_heading_structure,
    analyze_form_accessibility,
    analyze_aria,
    run_audit,
)
from .activities import ActivityType, ActivityResult, ActivityVerifier, verify_activity

__all__ = [
    # Contrast
    "ContrastLevel",
    "ContrastResult",
    "compute_contrast",
    "check_wcag_compliance",
    "parse_color",
    # Document audit
    "AccessibilityChecker",
    "AccessibilityIssue",
    "AnalysisResult",
    "AuditResult",
    "IssueLevel",
    "analyze_alt_text",
    "analyze_heading_structure",
    "analyze_form_accessibility",
    "analyze_aria",
    "run_audit",
    # Activities
    "ActivityType",
    "ActivityResult",
    "ActivityVerifier",
    "verify_activity",
]
