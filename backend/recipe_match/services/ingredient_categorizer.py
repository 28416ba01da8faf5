"""
Keyword-based ingredient categorizer.

Assigns each ingredient one of four importance categories (key, important,
flavor, base) using an ordered rule table. The first category whose keyword
list overlaps the name wins, so "chicken stock" is a key ingredient because
the key rules are checked before the important ones.
"""

import logging
from typing import Sequence, Tuple

from recipe_match.models.ingredient import IngredientCategory
from recipe_match.utils.constants import DEFAULT_CATEGORY
from recipe_match.utils.helpers import normalize_ingredient_name

# Configure logging
logger = logging.getLogger(__name__)


class IngredientCategorizer:
    """
    Classifies ingredient names into importance categories.

    Attributes:
        rules: Ordered (category, keywords) pairs; keywords stored normalized
    """

    def __init__(self, rules: Sequence[Tuple[str, Sequence[str]]]):
        """
        Initialize categorizer with an ordered rule table.

        Args:
            rules: (category, keywords) pairs in priority order
        """
        self.rules: Tuple[Tuple[IngredientCategory, Tuple[str, ...]], ...] = tuple(
            (
                IngredientCategory(category),
                tuple(
                    keyword
                    for keyword in (normalize_ingredient_name(k) for k in keywords)
                    if keyword
                ),
            )
            for category, keywords in rules
        )

        logger.info(
            "IngredientCategorizer initialized with rule order: "
            + ", ".join(category.value for category, _ in self.rules)
        )

    def categorize(self, ingredient: str) -> IngredientCategory:
        """
        Determine ingredient category based on name.

        A rule matches when one of its keywords is contained in the name or
        the name is contained in the keyword. Rules are tried in order and
        the first match wins. Names matching no rule are "important".

        Args:
            ingredient: Ingredient name (normalized or raw)

        Returns:
            IngredientCategory: Category of the ingredient

        Example:
            >>> categorizer.categorize("chicken breast")
            IngredientCategory.KEY
            >>> categorizer.categorize("dragon fruit")
            IngredientCategory.IMPORTANT
        """
        name = normalize_ingredient_name(ingredient)

        # An empty name is a substring of every keyword
        if not name:
            return IngredientCategory(DEFAULT_CATEGORY)

        for category, keywords in self.rules:
            for keyword in keywords:
                if keyword in name or name in keyword:
                    logger.debug(
                        f"Categorized '{ingredient}' as '{category.value}' "
                        f"(matched keyword: '{keyword}')"
                    )
                    return category

        logger.debug(f"Categorized '{ingredient}' as '{DEFAULT_CATEGORY}' (no keyword match)")
        return IngredientCategory(DEFAULT_CATEGORY)
