"""
AccessiQuest - accessibility audit engine for learning exercises.

This package provides heuristic static analyzers that inspect markup and
style snippets, score them, and explain how to fix what they find.
"""

from .analyzer import run_audit, verify_activity, compute_contrast

__version__ = "1.0.0"
__author__ = "AccessiQuest Team"

__all__ = [
    "run_audit",
    "verify_activity",
    "compute_contrast",
]
