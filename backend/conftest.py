import pytest

from recipe_match.models.ingredient import StructuredIngredient
from recipe_match.services.fuzzy_matcher import FuzzyMatcher
from recipe_match.services.ingredient_categorizer import IngredientCategorizer
from recipe_match.services.ingredient_parser import IngredientParser
from recipe_match.services.match_evaluator import MatchEvaluator
from recipe_match.services.recipe_ranker import RecipeRanker
from recipe_match.services.scoring_config import ScoringConfig
from recipe_match.services.substitution_index import SubstitutionIndex
from recipe_match.services.weighted_scorer import WeightedScorer


def make_ingredient(name, category="important", substitutes=None):
    return StructuredIngredient(name=name, category=category, substitutes=substitutes or [])


@pytest.fixture
def config():
    return ScoringConfig()


@pytest.fixture
def substitution_index(config):
    return SubstitutionIndex(config.substitution_map)


@pytest.fixture
def categorizer(config):
    return IngredientCategorizer(config.category_rules)


@pytest.fixture
def matcher():
    return FuzzyMatcher()


@pytest.fixture
def evaluator(matcher, substitution_index):
    return MatchEvaluator(matcher, substitution_index)


@pytest.fixture
def scorer(config, evaluator, substitution_index):
    return WeightedScorer(config, evaluator, substitution_index)


@pytest.fixture
def ranker(config):
    return RecipeRanker(config)


@pytest.fixture
def parser(categorizer, substitution_index):
    return IngredientParser(categorizer, substitution_index)


@pytest.fixture
def chicken_recipe():
    """Chicken breast (key), onion (important), salt (base)."""
    return [
        make_ingredient("chicken breast", "key"),
        make_ingredient("onion", "important"),
        make_ingredient("salt", "base"),
    ]
