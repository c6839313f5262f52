"""
Color contrast module for evaluating text legibility.

Resolves hex, rgb() and named color values and computes the WCAG 2.x
contrast ratio between a foreground and a background color.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Any

from ..utils.constants import (
    NAMED_COLORS,
    DEFAULT_FOREGROUND,
    DEFAULT_BACKGROUND,
    AAA_CONTRAST_THRESHOLD,
    AA_CONTRAST_THRESHOLD,
    A_CONTRAST_THRESHOLD,
)
from ..utils.log import get_logger


logger = get_logger("colors")


class ContrastLevel(Enum):
    """WCAG tier reached by a contrast ratio."""
    AAA = "AAA"
    AA = "AA"
    A = "A"
    FAIL = "FAIL"


@dataclass(frozen=True)
class ContrastResult:
    """Result of a contrast computation."""
    ratio: float
    level: ContrastLevel
    passes: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ratio': self.ratio,
            'level': self.level.value,
            'passes': self.passes,
        }


# Color value patterns
HEX_PATTERN = re.compile(r'^#([0-9a-f]{3}|[0-9a-f]{6})$')
RGB_PATTERN = re.compile(r'^rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)(?:\s*,\s*[\d.]+)?\s*\)$')


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up, independent of float banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def parse_color(value: str) -> Optional[str]:
    """
    Normalize a color value to 6-digit lowercase hex.

    Args:
        value: ``#rgb``, ``#rrggbb``, ``rgb(r, g, b)`` or a named color

    Returns:
        Normalized hex string, or None when the value is not understood
    """
    if not isinstance(value, str):
        return None

    value = value.strip().lower()

    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    match = HEX_PATTERN.match(value)
    if match:
        hex_val = match.group(1)
        if len(hex_val) == 3:
            # Expand 3-digit hex
            hex_val = ''.join(c * 2 for c in hex_val)
        return f"#{hex_val}"

    match = RGB_PATTERN.match(value)
    if match:
        r, g, b = (max(0, min(255, int(match.group(i)))) for i in (1, 2, 3))
        return f"#{r:02x}{g:02x}{b:02x}"

    return None


def resolve_color(value: str, default: str) -> str:
    """Parse a color, falling back to ``default`` when it is not understood."""
    hex_color = parse_color(value)
    if hex_color is None:
        logger.debug("Unrecognized color %r, using %s", value, default)
        return default
    return hex_color


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert normalized hex color to RGB."""
    hex_val = hex_color.lstrip('#')
    return tuple(int(hex_val[i:i + 2], 16) for i in (0, 2, 4))


def relative_luminance(hex_color: str) -> float:
    """Relative luminance of a normalized hex color."""
    rgb_normalized = [c / 255 for c in hex_to_rgb(hex_color)]
    rgb_linear = [
        c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4
        for c in rgb_normalized
    ]
    return 0.2126 * rgb_linear[0] + 0.7152 * rgb_linear[1] + 0.0722 * rgb_linear[2]


def get_contrast_ratio(foreground: str, background: str) -> float:
    """
    Calculate the unrounded contrast ratio between two colors.

    Unparseable values fall back to black text on a white background.

    Returns:
        Contrast ratio (1.0 to 21.0)
    """
    l1 = relative_luminance(resolve_color(foreground, DEFAULT_FOREGROUND))
    l2 = relative_luminance(resolve_color(background, DEFAULT_BACKGROUND))

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def contrast_level(ratio: float) -> ContrastLevel:
    """Map a contrast ratio onto its WCAG tier."""
    if ratio >= AAA_CONTRAST_THRESHOLD:
        return ContrastLevel.AAA
    if ratio >= AA_CONTRAST_THRESHOLD:
        return ContrastLevel.AA
    if ratio >= A_CONTRAST_THRESHOLD:
        return ContrastLevel.A
    return ContrastLevel.FAIL


def compute_contrast(color_a: str, color_b: str) -> ContrastResult:
    """
    Compute the contrast between a text color and a background color.

    The ratio is rounded to two decimals before the tier and the AA
    verdict are decided, so the reported ratio always agrees with them.

    Args:
        color_a: Text color
        color_b: Background color

    Returns:
        ContrastResult with ratio, tier and AA pass flag
    """
    ratio = round_half_up(get_contrast_ratio(color_a, color_b), 2)
    return ContrastResult(
        ratio=ratio,
        level=contrast_level(ratio),
        passes=ratio >= AA_CONTRAST_THRESHOLD,
    )


def check_wcag_compliance(foreground: str, background: str) -> Dict[str, Any]:
    """
    Check WCAG color contrast compliance for normal and large text.

    Args:
        foreground: Foreground color
        background: Background color

    Returns:
        Dictionary with compliance results for different levels
    """
    ratio = round_half_up(get_contrast_ratio(foreground, background), 2)

    return {
        'ratio': ratio,
        'aa_normal': ratio >= 4.5,
        'aa_large': ratio >= 3.0,
        'aaa_normal': ratio >= 7.0,
        'aaa_large': ratio >= 4.5,
    }
