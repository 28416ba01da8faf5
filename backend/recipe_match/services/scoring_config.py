"""
Immutable scoring configuration.

Bundles the static tables from ``utils.constants`` with the tunable
thresholds from ``Settings`` into a single frozen object. The object is
built once at startup and handed explicitly to every engine component;
nothing reads the tables through module globals at scoring time.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from recipe_match.utils.constants import (
    ALL_KEYS_BONUS,
    CATEGORY_RULES,
    INGREDIENT_WEIGHTS,
    MATCH_MULTIPLIERS,
    MAX_SUGGESTED_SUBSTITUTES,
    MIN_SCORE_THRESHOLD,
    PANTRY_MATCH_WEIGHT,
    REQUIRE_KEY_INGREDIENT,
    SCORE_TIE_WINDOW,
    SUBSTITUTION_MAP,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringConfig:
    """
    Read-only configuration for the matching engine.

    Attributes:
        category_weights: Points per category (key/important/flavor/base)
        match_multipliers: Share of the weight earned per match type
        min_score_threshold: Recipes scoring below this are filtered out
        require_key_ingredient: At least one key ingredient must be satisfied
        require_query_match: A key/important ingredient must come from the query list
        all_keys_bonus: Flat bonus when every key ingredient is satisfied
        pantry_match_weight: Scale for points earned through the pantry list
        score_tie_window: Score distance treated as a tie when ranking
        max_suggested_substitutes: Cap on suggestions for missing ingredients
        substitution_prefix_fallback: Try shorter name prefixes in the index
        category_rules: Ordered (category, keywords) pairs, first match wins
        substitution_map: Ingredient name -> alternates
    """
    category_weights: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(INGREDIENT_WEIGHTS))
    )
    match_multipliers: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(MATCH_MULTIPLIERS))
    )
    min_score_threshold: float = MIN_SCORE_THRESHOLD
    require_key_ingredient: bool = REQUIRE_KEY_INGREDIENT
    require_query_match: bool = False
    all_keys_bonus: float = ALL_KEYS_BONUS
    pantry_match_weight: float = PANTRY_MATCH_WEIGHT
    score_tie_window: float = SCORE_TIE_WINDOW
    max_suggested_substitutes: int = MAX_SUGGESTED_SUBSTITUTES
    substitution_prefix_fallback: bool = False
    category_rules: Tuple[Tuple[str, Tuple[str, ...]], ...] = CATEGORY_RULES
    substitution_map: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(
            {name: tuple(subs) for name, subs in SUBSTITUTION_MAP.items()}
        )
    )

    def __post_init__(self):
        # Accept plain dicts/lists from callers but store read-only views
        object.__setattr__(self, "category_weights", MappingProxyType(dict(self.category_weights)))
        object.__setattr__(self, "match_multipliers", MappingProxyType(dict(self.match_multipliers)))
        object.__setattr__(
            self,
            "category_rules",
            tuple((category, tuple(keywords)) for category, keywords in self.category_rules),
        )
        object.__setattr__(
            self,
            "substitution_map",
            MappingProxyType({name: tuple(subs) for name, subs in self.substitution_map.items()}),
        )

    def weight_for(self, category: str) -> float:
        return self.category_weights.get(category, 0)

    def multiplier_for(self, match_type: str) -> float:
        return self.match_multipliers.get(match_type, 0.0)

    @classmethod
    def from_settings(cls, settings) -> "ScoringConfig":
        """
        Build the configuration from application settings.

        Args:
            settings: recipe_match.config.Settings instance

        Returns:
            ScoringConfig: Frozen configuration
        """
        config = cls(
            min_score_threshold=settings.MIN_SCORE_THRESHOLD,
            require_key_ingredient=settings.REQUIRE_KEY_INGREDIENT,
            require_query_match=settings.REQUIRE_QUERY_MATCH,
            all_keys_bonus=settings.ALL_KEYS_BONUS,
            pantry_match_weight=settings.PANTRY_MATCH_WEIGHT,
            substitution_prefix_fallback=settings.SUBSTITUTION_PREFIX_FALLBACK,
        )
        logger.info(
            f"ScoringConfig loaded: min_score={config.min_score_threshold}, "
            f"require_key={config.require_key_ingredient}, "
            f"require_query_match={config.require_query_match}, "
            f"all_keys_bonus={config.all_keys_bonus}, "
            f"pantry_weight={config.pantry_match_weight}, "
            f"{len(config.category_rules)} category rules, "
            f"{len(config.substitution_map)} substitution entries"
        )
        return config
