"""
Permissive ingredient presence matcher.

Decides whether an ingredient name is "present" in a pool of user-entered
names. The policy is intentionally loose and scoring depends on it:

1. Whole-string containment in either direction
   ("chicken" vs "chicken breast").
2. Token overlap: any token of 3+ letters from the ingredient contains, or is
   contained in, any 3+ letter token of the candidate
   ("chicken breast" vs "chicken thighs" share "chicken").

False positives such as the second example are expected behavior.
"""

import logging
from typing import Optional, Sequence

from recipe_match.utils.helpers import normalize_ingredient_name, significant_tokens

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3


class FuzzyMatcher:
    """
    Containment and token-overlap matching policy.

    Attributes:
        min_token_length: Shortest token considered in the overlap check
    """

    def __init__(self, min_token_length: int = MIN_TOKEN_LENGTH):
        self.min_token_length = min_token_length

    def matches(self, ingredient: str, candidate: str) -> bool:
        """
        Check one ingredient name against one candidate name.

        Args:
            ingredient: Recipe-side name
            candidate: User-side name

        Returns:
            bool: True when the policy considers them the same ingredient
        """
        target = normalize_ingredient_name(ingredient)
        other = normalize_ingredient_name(candidate)

        # Empty text is contained in everything
        if not target or not other:
            return False

        if other in target or target in other:
            return True

        target_tokens = significant_tokens(target, self.min_token_length)
        other_tokens = significant_tokens(other, self.min_token_length)
        for token in target_tokens:
            for other_token in other_tokens:
                if token in other_token or other_token in token:
                    return True

        return False

    def find_match(self, ingredient: str, candidate_pool: Sequence[str]) -> Optional[str]:
        """
        Return the first pool entry that matches the ingredient, or None.

        Args:
            ingredient: Recipe-side name
            candidate_pool: User-side names, in user order

        Returns:
            Optional[str]: The matching pool entry as given
        """
        for candidate in candidate_pool:
            if self.matches(ingredient, candidate):
                logger.debug(f"'{ingredient}' matched pool entry '{candidate}'")
                return candidate
        return None

    def has_match(self, ingredient: str, candidate_pool: Sequence[str]) -> bool:
        """
        Check whether an ingredient is present in a pool of names.

        Example:
            >>> matcher.has_match("chicken breast", ["chicken thighs"])
            True
            >>> matcher.has_match("sour cream", ["greek yogurt"])
            False
        """
        return self.find_match(ingredient, candidate_pool) is not None
