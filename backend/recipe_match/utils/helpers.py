"""
Common utility helper functions.

This module provides reusable utility functions for text normalization,
arithmetic, and formatting used throughout the application.
"""

import math
import re
import logging
from typing import Optional

# Configure logging
logger = logging.getLogger(__name__)

_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_ingredient_name(ingredient: Optional[str]) -> str:
    """
    Canonicalize ingredient text for comparison.

    Performs the following normalization:
    1. Convert to lowercase
    2. Remove every character that is not a letter or whitespace
    3. Collapse runs of whitespace and trim the ends

    Idempotent: normalizing an already normalized string returns it unchanged.

    Args:
        ingredient: Raw ingredient string

    Returns:
        str: Normalized ingredient name ("" for empty input)

    Example:
        >>> normalize_ingredient_name("  Chicken   Breast! ")
        "chicken breast"
        >>> normalize_ingredient_name("Plant-based ground")
        "plantbased ground"
    """
    if not ingredient:
        return ""

    normalized = ingredient.lower()
    # Letters and whitespace only; \w would also keep digits, "_" and "½"
    normalized = "".join(ch for ch in normalized if ch.isalpha() or ch.isspace())
    normalized = _WHITESPACE_PATTERN.sub(" ", normalized).strip()

    return normalized


def significant_tokens(normalized: str, min_length: int = 3) -> list:
    """Split normalized text on whitespace, keeping tokens of min_length or more."""
    return [token for token in normalized.split(" ") if len(token) >= min_length]


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value to return if division by zero (default: 0.0)

    Returns:
        float: Result of division or default value
    """
    if denominator == 0:
        return default
    return numerator / denominator


def round_half_up(value: float, digits: int = 1) -> float:
    """
    Round half away from zero for non-negative values.

    Python's round() uses banker's rounding, which would turn 33.35 into 33.3
    on some inputs and 33.4 on others. Scores are always non-negative.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def parse_minutes(value: Optional[object], default: int) -> int:
    """
    Extract a minute count from values like 40, "40", or "40 min".

    Returns default when no digits are present.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)

    digits = re.sub(r"\D", "", str(value))
    if not digits:
        return default
    return int(digits)


def truncate_text(text: str, max_length: int = 60, suffix: str = "...") -> str:
    """
    Truncate text to max_length characters and append suffix when cut.

    Args:
        text: Text to truncate
        max_length: Number of characters kept from the original text
        suffix: Suffix to append if truncated (default: "...")

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text or ""
    return text[:max_length] + suffix
