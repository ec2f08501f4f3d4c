"""Seed keys addressing the slices of the alphabetical index."""

from __future__ import annotations

import string

DIGITS_KEY = "0-9"


def get_seeds() -> list[str]:
    """Return the 27 seed keys in crawl order: ``"0-9"`` then ``"a"``..``"z"``."""
    return [DIGITS_KEY, *string.ascii_lowercase]
