"""
Weighted recipe match scoring.

Scores how well a user's ingredients cover one recipe. Each non-base
ingredient contributes according to its category weight:
- Key ingredients (10 points): main protein or dish base
- Important ingredients (5 points): vegetables, dairy, sauces
- Flavor ingredients (2 points): herbs, spices, condiments
- Base ingredients (0 points): always assumed available, not counted

and the share of the weight earned depends on how it was matched
(exact 100%, substitute 70%, none 0%). The score is the earned share of the
total weight as a percentage, plus a flat bonus when every key ingredient
is covered, capped at 100.
"""

import logging
from typing import List, Sequence

from recipe_match.models.ingredient import (
    IngredientCategory,
    MatchDetails,
    MatchResult,
    MatchSource,
    MatchType,
    MissingIngredient,
    ScoreResult,
    StructuredIngredient,
)
from recipe_match.services.match_evaluator import MatchEvaluator
from recipe_match.services.scoring_config import ScoringConfig
from recipe_match.services.substitution_index import SubstitutionIndex
from recipe_match.utils.helpers import round_half_up, safe_divide

# Configure logging
logger = logging.getLogger(__name__)


class WeightedScorer:
    """
    Computes a 0-100 match score and breakdown for a single recipe.

    Attributes:
        config: Weights, multipliers and bonus settings
        evaluator: Per-ingredient match resolver
        substitution_index: Source of suggestions for missing ingredients
    """

    def __init__(
        self,
        config: ScoringConfig,
        evaluator: MatchEvaluator,
        substitution_index: SubstitutionIndex,
    ):
        self.config = config
        self.evaluator = evaluator
        self.substitution_index = substitution_index

        logger.info(
            f"WeightedScorer initialized with weights={dict(config.category_weights)}, "
            f"multipliers={dict(config.match_multipliers)}, "
            f"all_keys_bonus={config.all_keys_bonus}"
        )

    def suggest_substitutes(self, ingredient: StructuredIngredient) -> List[str]:
        """
        Suggest alternates for a missing ingredient.

        Combines the ingredient's own substitutes with the index entry,
        drops repeats (first occurrence wins), and caps the list.
        """
        suggestions: List[str] = []
        seen = set()
        for candidate in list(ingredient.substitutes) + list(
            self.substitution_index.lookup(ingredient.name)
        ):
            key = candidate.strip().lower()
            if key in seen:
                continue
            seen.add(key)
            suggestions.append(candidate)
            if len(suggestions) >= self.config.max_suggested_substitutes:
                break
        return suggestions

    def _earned_points(self, match: MatchResult, weight: float) -> float:
        points = weight * self.config.multiplier_for(match.match_type.value)
        if match.match_source == MatchSource.PANTRY:
            points *= self.config.pantry_match_weight
        return points

    def score(
        self,
        ingredients: Sequence[StructuredIngredient],
        user_ingredients: Sequence[str],
        pantry_ingredients: Sequence[str] = (),
    ) -> ScoreResult:
        """
        Calculate the weighted match score for one recipe.

        Algorithm:
        1. Resolve every ingredient (base ingredients are auto-satisfied)
        2. Sum category weights of non-base ingredients (denominator)
        3. Sum weight * match multiplier for each (numerator)
        4. Score = numerator / denominator * 100, or 0 without weighted ingredients
        5. Add the all-keys bonus when there is at least one key ingredient
           and none is missing; cap at 100
        6. Round to one decimal

        Args:
            ingredients: Recipe ingredients in recipe order
            user_ingredients: Ingredients entered for this search
            pantry_ingredients: Staples from the user's profile

        Returns:
            ScoreResult: Score, per-ingredient matches, and match details

        Example:
            >>> result = scorer.score(recipe_ingredients, ["chicken", "onion"])
            >>> result.score
            100.0
        """
        total_weight = 0.0
        earned_points = 0.0
        exact_count = 0
        substitute_count = 0
        matches: List[MatchResult] = []
        missing: List[MissingIngredient] = []

        for ingredient in ingredients:
            match = self.evaluator.evaluate(ingredient, user_ingredients, pantry_ingredients)
            matches.append(match)

            if not ingredient.counts_toward_score:
                continue

            category = ingredient.category or IngredientCategory.IMPORTANT
            weight = self.config.weight_for(category.value)
            total_weight += weight
            earned_points += self._earned_points(match, weight)

            if match.match_type == MatchType.EXACT:
                exact_count += 1
            elif match.match_type in (MatchType.SUBSTITUTE, MatchType.PARTIAL):
                substitute_count += 1
            else:
                missing.append(
                    MissingIngredient(
                        name=ingredient.name,
                        candidate_substitutes=self.suggest_substitutes(ingredient),
                    )
                )

        # No weighted ingredients means nothing to match against
        score = safe_divide(earned_points, total_weight) * 100

        key_matches = [
            m for m in matches
            if m.ingredient.category == IngredientCategory.KEY and m.ingredient.counts_toward_score
        ]
        if key_matches and all(m.is_matched for m in key_matches):
            score = min(100.0, score + self.config.all_keys_bonus)

        score = round_half_up(max(0.0, min(100.0, score)), 1)

        logger.debug(
            f"Scored recipe: {score} (earned={earned_points}, total={total_weight}, "
            f"exact={exact_count}, substitute={substitute_count}, missing={len(missing)})"
        )

        return ScoreResult(
            score=score,
            matches=matches,
            missing_count=len(missing),
            match_details=MatchDetails(
                exact_count=exact_count,
                substitute_count=substitute_count,
                missing=missing,
            ),
        )
