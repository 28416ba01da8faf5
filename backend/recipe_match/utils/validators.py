"""
Input validation utilities.

This module provides validation functions for user input to ensure
data integrity before it reaches the matching engine.
"""

import re
import logging
from typing import List, Optional

from recipe_match.utils.constants import SKILL_LEVEL_DIFFICULTIES

# Configure logging
logger = logging.getLogger(__name__)

MAX_INGREDIENTS = 100
MAX_INGREDIENT_LENGTH = 200

_DANGEROUS_PATTERNS = [
    r'<script',
    r'javascript:',
    r'on\w+\s*=',
]


def sanitize_input(text: str) -> str:
    """
    Remove dangerous characters from user input.

    Strips potentially harmful content while preserving
    legitimate ingredient text.

    Args:
        text: Raw user input string

    Returns:
        str: Sanitized string
    """
    if not text:
        return ""

    sanitized = text.strip()
    sanitized = sanitized.replace('\0', '')

    # Remove control characters except newlines and tabs
    sanitized = ''.join(
        char for char in sanitized
        if ord(char) >= 32 or char in '\n\t'
    )

    sanitized = re.sub(r'\s+', ' ', sanitized)
    sanitized = re.sub(r'<[^>]+>', '', sanitized)

    return sanitized.strip()


def clean_ingredient_list(ingredients: Optional[List[str]], allow_empty: bool = True) -> List[str]:
    """
    Validate and tidy a list of free-text ingredient names.

    Ensures the list:
    - Does not exceed MAX_INGREDIENTS items
    - Contains only strings of reasonable length
    - Contains no script-like content

    Blank entries are dropped. Order is preserved.

    Args:
        ingredients: Ingredient strings from the request (None allowed)
        allow_empty: Whether an empty result is acceptable

    Returns:
        List[str]: Sanitized, non-blank ingredient names

    Raises:
        ValueError: If validation fails with specific error message
    """
    if ingredients is None:
        ingredients = []

    if len(ingredients) > MAX_INGREDIENTS:
        raise ValueError(
            f"Ingredient list cannot exceed {MAX_INGREDIENTS} items "
            f"(got {len(ingredients)})"
        )

    cleaned: List[str] = []
    for i, ingredient in enumerate(ingredients):
        if not isinstance(ingredient, str):
            raise ValueError(
                f"Ingredient at index {i} must be a string, "
                f"got {type(ingredient).__name__}"
            )

        if len(ingredient) > MAX_INGREDIENT_LENGTH:
            raise ValueError(
                f"Ingredient at index {i} exceeds maximum length of "
                f"{MAX_INGREDIENT_LENGTH} characters"
            )

        for pattern in _DANGEROUS_PATTERNS:
            if re.search(pattern, ingredient, re.IGNORECASE):
                raise ValueError(
                    f"Ingredient at index {i} contains invalid characters"
                )

        value = sanitize_input(ingredient)
        if value:
            cleaned.append(value)

    if not cleaned and not allow_empty:
        raise ValueError("Add at least one ingredient")

    logger.debug(f"Ingredient list validated: {len(cleaned)} ingredients")
    return cleaned


def validate_skill_level(skill_level: Optional[str]) -> Optional[str]:
    """
    Normalize a skill level name.

    Returns None for a missing value and the lowercase level otherwise.
    Levels outside SKILL_LEVEL_DIFFICULTIES are kept; search treats them
    as "no difficulty filter".
    """
    if skill_level is None or not skill_level.strip():
        return None

    level = skill_level.strip().lower()
    if level not in SKILL_LEVEL_DIFFICULTIES:
        logger.debug(f"Unknown skill level '{skill_level}', difficulty will not be filtered")
    return level
