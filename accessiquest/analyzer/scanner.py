"""
Best-effort markup scanner shared by the analyzers.

Locates tag-like and attribute-like fragments in raw source text with
regular expressions. It performs no validation: unclosed tags, stray
quotes and other malformed markup simply produce fewer matches.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Pattern


@dataclass(frozen=True)
class TagMatch:
    """An opening tag found in the source."""
    name: str
    raw: str
    start: int
    end: int


@dataclass(frozen=True)
class ElementMatch:
    """An element with distinguishable open and close tags."""
    name: str
    open_tag: str
    text: str
    raw: str
    start: int

    @property
    def level(self) -> Optional[int]:
        """Numeric level for heading elements (h1-h6), otherwise None."""
        if len(self.name) == 2 and self.name[0] == "h" and self.name[1] in "123456":
            return int(self.name[1])
        return None


# Text up to the next tag
LEADING_TEXT_PATTERN = re.compile(r'[^<]*')


def _coerce(source) -> str:
    return source if isinstance(source, str) else ""


@lru_cache(maxsize=64)
def _tag_pattern(tag_name_pattern: str) -> Pattern:
    return re.compile(
        r'<(' + tag_name_pattern + r')(?![\w-])[^>]*>',
        re.IGNORECASE
    )


@lru_cache(maxsize=64)
def _element_pattern(tag_name_pattern: str) -> Pattern:
    return re.compile(
        r'<(' + tag_name_pattern + r')(?![\w-])([^>]*)>([^<]*)</(?:' + tag_name_pattern + r')\s*>',
        re.IGNORECASE
    )


@lru_cache(maxsize=64)
def _attribute_pattern(attr_name: str) -> Pattern:
    # Quoted value with matching quote characters
    return re.compile(
        r'(?<![\w-])' + re.escape(attr_name) + r'\s*=\s*(["\'])(.*?)\1',
        re.IGNORECASE | re.DOTALL
    )


@lru_cache(maxsize=64)
def _attribute_name_pattern(attr_name: str) -> Pattern:
    return re.compile(
        r'(?<![\w-])' + re.escape(attr_name) + r'\s*=',
        re.IGNORECASE
    )


ARIA_NAME_PATTERN = re.compile(r'(?<![\w-])(aria-[\w-]+)\s*=', re.IGNORECASE)


def iter_tags(source: str, tag_name_pattern: str) -> List[TagMatch]:
    """
    Find opening tags whose name matches a regex fragment.

    Args:
        source: Raw markup text
        tag_name_pattern: Regex fragment for the tag name, e.g. ``"img"``
            or ``"h[1-6]"``

    Returns:
        Tag matches in document order
    """
    source = _coerce(source)
    return [
        TagMatch(
            name=match.group(1).lower(),
            raw=match.group(0),
            start=match.start(),
            end=match.end(),
        )
        for match in _tag_pattern(tag_name_pattern).finditer(source)
    ]


def find_tags(source: str, tag_name_pattern: str) -> List[str]:
    """Return the raw text of every opening tag matching the pattern."""
    return [tag.raw for tag in iter_tags(source, tag_name_pattern)]


def extract_attribute(tag_text: str, attr_name: str) -> Optional[str]:
    """
    Extract a quoted attribute value from a tag.

    Single and double quotes are both accepted. Unquoted values,
    valueless attributes and escaped quotes are not handled.

    Args:
        tag_text: Raw tag text, e.g. ``<img src="a.png" alt="A cat">``
        attr_name: Attribute name, matched case-insensitively

    Returns:
        The attribute value, or None when absent
    """
    match = _attribute_pattern(attr_name).search(_coerce(tag_text))
    if match is None:
        return None
    return match.group(2)


def has_attribute(text: str, attr_name: str) -> bool:
    """Check whether ``name=`` appears in the text, quoted or not."""
    return _attribute_name_pattern(attr_name).search(_coerce(text)) is not None


def find_attribute_values(source: str, attr_name: str) -> List[str]:
    """Return every quoted value of an attribute anywhere in the source."""
    return [
        match.group(2)
        for match in _attribute_pattern(attr_name).finditer(_coerce(source))
    ]


def find_aria_attribute_names(source: str) -> List[str]:
    """Return every ``aria-*`` attribute name used, lowercased, in order."""
    return [
        match.group(1).lower()
        for match in ARIA_NAME_PATTERN.finditer(_coerce(source))
    ]


def find_elements_with_text(source: str, tag_name_pattern: str) -> List[ElementMatch]:
    """
    Find elements whose content is plain text between open and close tags.

    Elements with nested tags inside are not matched.

    Args:
        source: Raw markup text
        tag_name_pattern: Regex fragment for the tag name

    Returns:
        Element matches in document order
    """
    source = _coerce(source)
    return [
        ElementMatch(
            name=match.group(1).lower(),
            open_tag=f"<{match.group(1)}{match.group(2)}>",
            text=match.group(3),
            raw=match.group(0),
            start=match.start(),
        )
        for match in _element_pattern(tag_name_pattern).finditer(source)
    ]


def leading_text(source: str, position: int) -> str:
    """Return the text starting at ``position`` up to the next tag."""
    return LEADING_TEXT_PATTERN.match(_coerce(source), position).group(0)
