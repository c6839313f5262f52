"""Shared test fixtures for AccessiQuest."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


ACCESSIBLE_PAGE = """
<h1>Daily Recipes</h1>
<img src="pancakes.jpg" alt="Stack of blueberry pancakes">
<h2>Subscribe</h2>
<form>
  <input type="hidden" name="token" value="abc">
  <label for="email">Email address</label>
  <input id="email" type="email">
  <button aria-label="Subscribe to the newsletter"></button>
</form>
<div aria-live="polite"></div>
"""

BROKEN_PAGE = """
<h1>Shop</h1>
<h1>Deals</h1>
<h4></h4>
<img src="banner.png">
<img src="logo.png" alt="">
<input type="text" placeholder="Search">
<input id="qty" type="number">
<button></button>
<span aria-labeledby="x"></span>
"""


@pytest.fixture
def accessible_page() -> str:
    """Markup that passes every rule analyzer."""
    return ACCESSIBLE_PAGE


@pytest.fixture
def broken_page() -> str:
    """Markup that trips at least one rule in every analyzer."""
    return BROKEN_PAGE


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str], str]:
    """Write markup to a temp file and return its path."""

    def _write(content: str, name: str = "snippet.html") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
