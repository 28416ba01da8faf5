import pytest

from conftest import make_ingredient
from recipe_match.models.ingredient import IngredientCategory, MatchSource, MatchType
from recipe_match.services.fuzzy_matcher import FuzzyMatcher
from recipe_match.services.substitution_index import SubstitutionIndex
from recipe_match.utils.helpers import normalize_ingredient_name, round_half_up, safe_divide


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Chicken   Breast! ", "chicken breast"),
        ("Sour-Cream", "sourcream"),
        ("2 cups Flour", "cups flour"),
        ("crème fraîche", "crème fraîche"),
        ("snake_case_name", "snakecasename"),
        ("½ cup milk²", "cup milk"),
        ("", ""),
        (None, ""),
        ("!!!", ""),
    ],
)
def test_normalize_ingredient_name(raw, expected):
    assert normalize_ingredient_name(raw) == expected


@pytest.mark.parametrize("raw", ["  Chicken   Breast! ", "Tomato Purée", "1½ cups RICE", ""])
def test_normalize_is_idempotent(raw):
    once = normalize_ingredient_name(raw)
    assert normalize_ingredient_name(once) == once


def test_safe_divide_zero_denominator():
    assert safe_divide(5, 0) == 0.0
    assert safe_divide(5, 0, default=1.0) == 1.0
    assert safe_divide(3, 4) == 0.75


def test_round_half_up_avoids_bankers_rounding():
    assert round_half_up(0.25) == 0.3
    assert round_half_up(33.333333) == 33.3
    assert round_half_up(100.0) == 100.0


# --- Categorizer ---


@pytest.mark.parametrize(
    "name, expected",
    [
        ("chicken breast", IngredientCategory.KEY),
        ("Spaghetti", IngredientCategory.KEY),
        ("onion", IngredientCategory.IMPORTANT),
        ("sour cream", IngredientCategory.IMPORTANT),
        ("garlic", IngredientCategory.FLAVOR),
        ("fresh basil", IngredientCategory.FLAVOR),
        ("salt", IngredientCategory.BASE),
        ("olive oil", IngredientCategory.BASE),
        ("dragon fruit", IngredientCategory.IMPORTANT),
    ],
)
def test_categorize(categorizer, name, expected):
    assert categorizer.categorize(name) == expected


def test_categorize_first_rule_wins(categorizer):
    # "chicken" (key) is checked before "stock" (important)
    assert categorizer.categorize("chicken stock") == IngredientCategory.KEY
    # "sauce" (important) is checked before "soy sauce" (flavor)
    assert categorizer.categorize("soy sauce") == IngredientCategory.IMPORTANT


def test_categorize_empty_name_is_important(categorizer):
    assert categorizer.categorize("") == IngredientCategory.IMPORTANT
    assert categorizer.categorize("123") == IngredientCategory.IMPORTANT


def test_categorize_name_contained_in_keyword(categorizer):
    # "ground" matches because it is part of the keyword "ground beef"
    assert categorizer.categorize("ground") == IngredientCategory.KEY


# --- Fuzzy matcher ---


@pytest.mark.parametrize(
    "ingredient, candidate",
    [
        ("chicken breast", "chicken"),
        ("chicken", "chicken breast"),
        ("chicken breast", "chicken thighs"),
        ("Onion", "onion"),
        ("cherry tomatoes", "tomato"),
    ],
)
def test_matcher_accepts(matcher, ingredient, candidate):
    assert matcher.matches(ingredient, candidate)


@pytest.mark.parametrize(
    "ingredient, candidate",
    [
        ("sour cream", "greek yogurt"),
        ("", "chicken"),
        ("chicken", ""),
        ("", ""),
        # two-letter tokens are ignored
        ("ox tail", "ox cheek"),
    ],
)
def test_matcher_rejects(matcher, ingredient, candidate):
    assert not matcher.matches(ingredient, candidate)


def test_find_match_returns_first_pool_entry(matcher):
    pool = ["beef", "Chicken Thighs", "chicken"]
    assert matcher.find_match("chicken breast", pool) == "Chicken Thighs"
    assert matcher.find_match("salmon", pool) is None
    assert not matcher.has_match("salmon", [])


def test_matcher_min_token_length_is_configurable():
    strict = FuzzyMatcher(min_token_length=10)
    assert not strict.matches("chicken breast", "chicken thighs")
    # whole-string containment still applies
    assert strict.matches("chicken breast", "chicken")


# --- Substitution index ---


def test_index_lookup_normalizes(substitution_index):
    assert substitution_index.lookup("Sour Cream")[0] == "greek yogurt"
    assert "sour cream" in substitution_index
    assert substitution_index.lookup("unobtainium") == ()


def test_index_first_key_wins_on_normalized_duplicates():
    index = SubstitutionIndex({"Tomato Purée": ["first"], "tomato purée!": ["second"]})
    assert len(index) == 1
    assert index.lookup("tomato purée") == ("first",)


def test_index_prefix_fallback():
    subs = {"tomato puree": ["passata"]}
    assert SubstitutionIndex(subs).lookup("tomato puree organic") == ()
    fallback = SubstitutionIndex(subs, prefix_fallback=True)
    assert fallback.lookup("tomato puree organic") == ("passata",)
    assert fallback.lookup("tomato") == ()


# --- Match evaluator ---


def test_base_ingredient_is_always_exact(evaluator):
    result = evaluator.evaluate(make_ingredient("salt", "base"), [])
    assert result.match_type == MatchType.EXACT
    assert result.matched_with is None
    assert result.match_source is None


def test_direct_match_prefers_query(evaluator):
    ing = make_ingredient("onion")
    result = evaluator.evaluate(ing, ["onion"], ["onion"])
    assert result.match_type == MatchType.EXACT
    assert result.match_source == MatchSource.QUERY

    result = evaluator.evaluate(ing, ["beef"], ["onion"])
    assert result.match_type == MatchType.EXACT
    assert result.match_source == MatchSource.PANTRY


def test_own_substitutes_checked_before_index(evaluator):
    ing = make_ingredient("sour cream", substitutes=["skyr"])
    result = evaluator.evaluate(ing, ["greek yogurt", "skyr"])
    assert result.match_type == MatchType.SUBSTITUTE
    assert result.matched_with == "skyr"


def test_index_substitute(evaluator):
    result = evaluator.evaluate(make_ingredient("sour cream"), ["greek yogurt"])
    assert result.match_type == MatchType.SUBSTITUTE
    assert result.matched_with == "greek yogurt"
    assert result.match_source == MatchSource.QUERY


def test_direct_pantry_match_beats_query_substitute(evaluator):
    result = evaluator.evaluate(make_ingredient("sour cream"), ["greek yogurt"], ["sour cream"])
    assert result.match_type == MatchType.EXACT
    assert result.match_source == MatchSource.PANTRY


def test_no_match(evaluator):
    result = evaluator.evaluate(make_ingredient("saffron", "flavor"), ["onion"])
    assert result.match_type == MatchType.NONE
    assert result.matched_with is None
    assert not result.is_matched


def test_empty_user_lists_match_nothing(evaluator):
    result = evaluator.evaluate(make_ingredient("chicken breast", "key"), [], [])
    assert result.match_type == MatchType.NONE
