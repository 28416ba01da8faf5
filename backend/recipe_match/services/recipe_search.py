"""
Recipe search orchestration.

Finds the recipes a user can cook with what they have. The only I/O is a
single fetch of a bounded page of candidates from the recipe store; every
step after that is a pure computation over the fetched snapshot.

Algorithm:
1. Fetch up to RECIPE_POOL_LIMIT candidate recipes
2. Drop recipes over the time budget or outside the skill level
3. Structure each recipe's ingredients and score them
4. Filter by score gates and rank
5. Return the top N with per-ingredient annotations
"""

import logging
from typing import List, Optional, Sequence, Tuple

from recipe_match.models.ingredient import ScoreResult
from recipe_match.models.recipe import (
    RecipeRecord,
    RecipeResult,
    RecipeSearchRequest,
    RecipeSearchResponse,
)
from recipe_match.services.fuzzy_matcher import FuzzyMatcher
from recipe_match.services.ingredient_categorizer import IngredientCategorizer
from recipe_match.services.ingredient_parser import IngredientParser, parse_instructions
from recipe_match.services.match_evaluator import MatchEvaluator
from recipe_match.services.recipe_ranker import RecipeRanker
from recipe_match.services.recipe_store import RecipeStoreError, RecipeStoreService
from recipe_match.services.scoring_config import ScoringConfig
from recipe_match.services.substitution_index import SubstitutionIndex
from recipe_match.services.weighted_scorer import WeightedScorer
from recipe_match.utils.constants import (
    CALORIES_PER_GRAM,
    MACRO_CALORIE_SHARE,
    SKILL_LEVEL_DIFFICULTIES,
)
from recipe_match.utils.helpers import truncate_text

# Configure logging
logger = logging.getLogger(__name__)


def allowed_difficulties(skill_level: Optional[str]) -> Tuple[str, ...]:
    """Map a skill level to difficulty labels; empty means no restriction."""
    if not skill_level:
        return ()
    return SKILL_LEVEL_DIFFICULTIES.get(skill_level.strip().lower(), ())


def estimate_macros(calories: Optional[int]) -> dict:
    """
    Estimate macros in grams from a calorie total.

    Uses a general 15% protein / 30% fat / 55% carbs split.
    """
    if not calories:
        return {"protein": 0, "fats": 0, "carbs": 0}
    return {
        macro: int(round(calories * share / CALORIES_PER_GRAM[macro]))
        for macro, share in MACRO_CALORIE_SHARE.items()
    }


class RecipeSearchService:
    """
    Coordinates fetching, scoring, filtering and ranking for one search.

    Attributes:
        store: Recipe store client
        parser: Free-text ingredient parser
        scorer: Weighted match scorer
        ranker: Filter and ranking policy
    """

    def __init__(
        self,
        store: RecipeStoreService,
        parser: IngredientParser,
        scorer: WeightedScorer,
        ranker: RecipeRanker,
    ):
        self.store = store
        self.parser = parser
        self.scorer = scorer
        self.ranker = ranker

    @classmethod
    def from_config(cls, config: ScoringConfig, store: RecipeStoreService) -> "RecipeSearchService":
        """Wire the engine components from one scoring configuration."""
        index = SubstitutionIndex(
            config.substitution_map,
            prefix_fallback=config.substitution_prefix_fallback,
        )
        categorizer = IngredientCategorizer(config.category_rules)
        evaluator = MatchEvaluator(FuzzyMatcher(), index)
        return cls(
            store=store,
            parser=IngredientParser(categorizer, index),
            scorer=WeightedScorer(config, evaluator, index),
            ranker=RecipeRanker(config),
        )

    def score_recipe(
        self,
        recipe: RecipeRecord,
        ingredients: Sequence[str],
        pantry_ingredients: Sequence[str] = (),
    ) -> ScoreResult:
        """Score one recipe against the user's ingredients (no I/O)."""
        structured = self.parser.structure_recipe(recipe)
        return self.scorer.score(structured, ingredients, pantry_ingredients)

    def _is_eligible(self, recipe: RecipeRecord, max_time: int, difficulties: Tuple[str, ...]) -> bool:
        if recipe.total_time > max_time:
            return False
        if difficulties:
            level = recipe.difficulty.lower()
            return any(d in level for d in difficulties)
        return True

    def _to_result(self, recipe: RecipeRecord, score_result: ScoreResult) -> RecipeResult:
        return RecipeResult.from_score(
            score_result,
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            short_description=truncate_text(recipe.description, 60),
            cooking_time=recipe.total_time,
            difficulty=recipe.difficulty,
            calories=recipe.calories,
            steps=parse_instructions(recipe.instructions),
            tags=recipe.tags,
            source_url=recipe.source_url,
            **estimate_macros(recipe.calories),
        )

    def rank_pool(
        self,
        pool: Sequence[RecipeRecord],
        request: RecipeSearchRequest,
    ) -> Tuple[List[RecipeResult], bool]:
        """
        Score, filter and rank an already fetched pool.

        Args:
            pool: Candidate recipes
            request: Search request

        Returns:
            Tuple[List[RecipeResult], bool]: Ranked results and whether
                at least min_results were found
        """
        difficulties = allowed_difficulties(request.skill_level)
        eligible = [r for r in pool if self._is_eligible(r, request.max_time, difficulties)]

        logger.info(
            f"{len(eligible)} of {len(pool)} recipes within {request.max_time} min "
            f"and difficulty {difficulties or 'any'}"
        )

        scored = [
            (recipe, self.score_recipe(recipe, request.ingredients, request.pantry_ingredients))
            for recipe in eligible
        ]
        top, found_enough = self.ranker.select_top(scored, request.min_results)
        return [self._to_result(recipe, result) for recipe, result in top], found_enough

    def search(self, request: RecipeSearchRequest) -> RecipeSearchResponse:
        """
        Find recipes the user can cook.

        This is the main entry point for recipe search. A store failure is
        reported as an unavailable, empty result rather than an error.

        Args:
            request: Validated search request

        Returns:
            RecipeSearchResponse: Ranked recipes and whether enough were found
        """
        logger.info(
            f"Searching recipes for {len(request.ingredients)} ingredients "
            f"(+{len(request.pantry_ingredients)} pantry), max_time={request.max_time}, "
            f"skill_level={request.skill_level}, min_results={request.min_results}"
        )

        try:
            pool = self.store.fetch_recipe_pool()
        except RecipeStoreError as e:
            logger.error(f"Recipe search unavailable: {e}")
            return RecipeSearchResponse(recipes=[], found_enough=False, unavailable=True)

        if not pool:
            logger.warning("Recipe store returned no candidates")
            return RecipeSearchResponse(recipes=[], found_enough=False)

        recipes, found_enough = self.rank_pool(pool, request)

        logger.info(
            f"Returning {len(recipes)} recipe(s) out of {len(pool)} candidates "
            f"(found_enough={found_enough})"
        )
        return RecipeSearchResponse(
            recipes=recipes,
            found_enough=found_enough,
            total_candidates=len(pool),
        )
