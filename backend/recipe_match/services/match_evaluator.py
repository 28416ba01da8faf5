"""
Per-ingredient match resolution.

For one recipe ingredient, decides whether the user's ingredients satisfy it
exactly, through a substitute, or not at all. Resolution stops at the first
success, in this order:

1. The ingredient itself is present in the user's ingredients -> exact
2. One of the ingredient's own substitutes is present -> substitute
3. One of the substitution index alternates is present -> substitute
4. Otherwise -> none

Base ingredients (salt, oil, water...) are assumed to be in every kitchen and
are always satisfied without checking, as are ingredients marked not
required.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from recipe_match.models.ingredient import (
    MatchResult,
    MatchSource,
    MatchType,
    StructuredIngredient,
)
from recipe_match.services.fuzzy_matcher import FuzzyMatcher
from recipe_match.services.substitution_index import SubstitutionIndex

logger = logging.getLogger(__name__)


class MatchEvaluator:
    """
    Resolves recipe ingredients against a user's query and pantry lists.

    The query and pantry lists form one combined pool; the source is only
    recorded so the scorer can weight pantry matches differently.

    Attributes:
        matcher: Presence-matching policy
        substitution_index: Global alternates lookup
    """

    def __init__(self, matcher: FuzzyMatcher, substitution_index: SubstitutionIndex):
        self.matcher = matcher
        self.substitution_index = substitution_index

    def _locate(
        self,
        name: str,
        query: Sequence[str],
        pantry: Sequence[str],
    ) -> Optional[MatchSource]:
        """Return which list contains the name, preferring the query list."""
        if self.matcher.has_match(name, query):
            return MatchSource.QUERY
        if self.matcher.has_match(name, pantry):
            return MatchSource.PANTRY
        return None

    def _first_available(
        self,
        candidates: Iterable[str],
        query: Sequence[str],
        pantry: Sequence[str],
    ) -> Tuple[Optional[str], Optional[MatchSource]]:
        for candidate in candidates:
            source = self._locate(candidate, query, pantry)
            if source is not None:
                return candidate, source
        return None, None

    def evaluate(
        self,
        ingredient: StructuredIngredient,
        query: Sequence[str],
        pantry: Sequence[str] = (),
    ) -> MatchResult:
        """
        Resolve one recipe ingredient.

        Args:
            ingredient: Recipe ingredient to satisfy
            query: Ingredients entered for this search
            pantry: Staples from the user's profile

        Returns:
            MatchResult: exact / substitute / none, with the satisfying
                         substitute name and source where applicable
        """
        if not ingredient.counts_toward_score:
            return MatchResult(ingredient=ingredient, match_type=MatchType.EXACT)

        source = self._locate(ingredient.name, query, pantry)
        if source is not None:
            logger.debug(f"'{ingredient.name}': exact match ({source.value})")
            return MatchResult(
                ingredient=ingredient,
                match_type=MatchType.EXACT,
                match_source=source,
            )

        candidate, source = self._first_available(ingredient.substitutes, query, pantry)
        if candidate is None:
            candidate, source = self._first_available(
                self.substitution_index.lookup(ingredient.name), query, pantry
            )

        if candidate is not None:
            logger.debug(
                f"'{ingredient.name}': substitute '{candidate}' ({source.value})"
            )
            return MatchResult(
                ingredient=ingredient,
                match_type=MatchType.SUBSTITUTE,
                matched_with=candidate,
                match_source=source,
            )

        logger.debug(f"'{ingredient.name}': no match")
        return MatchResult(ingredient=ingredient, match_type=MatchType.NONE)
