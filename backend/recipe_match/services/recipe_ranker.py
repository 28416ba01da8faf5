"""
Filtering and ranking of scored recipes.

Operates on the whole scored candidate pool of one request:

- Filter: drop recipes below the minimum score, recipes with no satisfied
  key ingredient (when required), and optionally recipes satisfied only from
  the pantry list.
- Rank: score descending, but scores within the tie window of each other
  count as equal and the recipe missing fewer ingredients goes first.

"Within 5 points" is not transitive (70 ~ 74 ~ 78 but 70 !~ 78), so the
ranking groups scores into windows anchored at the highest remaining score:
a window holds every score no more than ``score_tie_window`` below its
anchor. Windows are ordered by anchor, recipes inside a window by missing
count, then score. This is a deterministic stand-in; how long chains of
near-equal scores should rank is not settled yet.
"""

import logging
from typing import Any, List, Sequence, Tuple

from recipe_match.models.ingredient import IngredientCategory, MatchSource, ScoreResult
from recipe_match.services.scoring_config import ScoringConfig

logger = logging.getLogger(__name__)

# (recipe, score) pair; the recipe object is carried through untouched
ScoredCandidate = Tuple[Any, ScoreResult]


class RecipeRanker:
    """
    Filters and orders (recipe, ScoreResult) pairs.

    Attributes:
        config: Threshold and tie-window settings
    """

    def __init__(self, config: ScoringConfig):
        self.config = config

        logger.info(
            f"RecipeRanker initialized with min_score={config.min_score_threshold}, "
            f"require_key={config.require_key_ingredient}, "
            f"tie_window={config.score_tie_window}"
        )

    def passes_filters(self, result: ScoreResult) -> bool:
        """
        Check a single score against the search gates.

        A recipe with no key ingredients can never pass while
        require_key_ingredient is enabled.
        """
        if result.score < self.config.min_score_threshold:
            return False

        if self.config.require_key_ingredient:
            has_key_match = any(
                m.ingredient.category == IngredientCategory.KEY
                and m.ingredient.counts_toward_score
                and m.is_matched
                for m in result.matches
            )
            if not has_key_match:
                return False

        if self.config.require_query_match:
            has_query_match = any(
                m.ingredient.category in (IngredientCategory.KEY, IngredientCategory.IMPORTANT)
                and m.is_matched
                and m.match_source == MatchSource.QUERY
                for m in result.matches
            )
            if not has_query_match:
                return False

        return True

    def filter_by_score(self, candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
        """Keep candidates that pass every gate, in input order."""
        kept = [item for item in candidates if self.passes_filters(item[1])]
        logger.info(f"{len(kept)} of {len(candidates)} recipes passed score filters")
        return kept

    def sort_by_score(self, candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
        """
        Order candidates best first.

        Sort key is (tie window, missing count, -score); input order breaks
        any remaining ties because Python's sort is stable.

        Example:
            Scores 78 (1 missing) and 74 (0 missing) share a window, so the
            74 ranks first.
        """
        by_score = sorted(candidates, key=lambda item: -item[1].score)

        windows = []
        window = -1
        anchor = None
        for _, result in by_score:
            # Round away float noise such as 80.3 - 75.3 = 5.000000000000007
            if anchor is None or round(anchor - result.score, 6) > self.config.score_tie_window:
                window += 1
                anchor = result.score
            windows.append(window)

        ranked = sorted(
            zip(windows, by_score),
            key=lambda pair: (pair[0], pair[1][1].missing_count, -pair[1][1].score),
        )
        return [item for _, item in ranked]

    def select_top(
        self,
        candidates: Sequence[ScoredCandidate],
        limit: int,
    ) -> Tuple[List[ScoredCandidate], bool]:
        """
        Filter, rank, and cut to the requested number of results.

        Args:
            candidates: Every scored recipe of the request
            limit: Number of results wanted

        Returns:
            Tuple[List[ScoredCandidate], bool]: Top results and whether at
                least ``limit`` recipes survived the filters
        """
        ranked = self.sort_by_score(self.filter_by_score(candidates))
        top = ranked[:limit]
        return top, len(top) >= limit
