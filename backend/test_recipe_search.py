import pytest

from recipe_match.config import Settings, settings
from recipe_match.models.recipe import RecipeRecord, RecipeSearchRequest
from recipe_match.services.recipe_search import (
    RecipeSearchService,
    allowed_difficulties,
    estimate_macros,
)
from recipe_match.services.recipe_store import RecipeStoreError
from recipe_match.utils.validators import validate_skill_level


class FakeStore:
    def __init__(self, recipes=None, error=None):
        self.recipes = recipes or []
        self.error = error
        self.calls = 0

    def fetch_recipe_pool(self, limit=None):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.recipes)


def recipe(id, title, ingredients, difficulty="easy", prep=10, cook=20, **extra):
    return RecipeRecord(
        id=id,
        title=title,
        ingredients=ingredients,
        difficulty=difficulty,
        prep_time=prep,
        cook_time=cook,
        **extra,
    )


POOL = [
    recipe(
        "1",
        "Chicken and Onion Skillet",
        ["2 chicken breasts", "1 onion, sliced", "salt to taste"],
        description="A quick weeknight skillet with golden chicken and soft onions.",
        instructions="1. Brown the chicken. 2. Add onion. 3. Season and serve.",
        calories=400,
    ),
    recipe("2", "Chicken Rice Bowl", ["1 cup rice", "1 chicken thigh", "1 onion", "2 tbsp soy sauce"]),
    recipe("3", "Beef Stew", ["500g beef", "2 carrots", "1 onion"], difficulty="hard", prep=30, cook=120),
    recipe("4", "Greek Salad", ["1 cucumber", "100g feta", "1 tomato"]),
]


@pytest.fixture
def make_service(config):
    def _make(store):
        return RecipeSearchService.from_config(config, store)
    return _make


def test_search_ranks_matching_recipes(make_service):
    service = make_service(FakeStore(POOL))
    response = service.search(RecipeSearchRequest(ingredients=["chicken", "onion"], min_results=2))

    assert [r.id for r in response.recipes] == ["1", "2"]
    assert response.found_enough
    assert response.total_candidates == 4
    assert not response.unavailable

    top = response.recipes[0]
    assert top.score == 100.0
    assert top.match_percentage == 100
    assert top.cooking_time == 30
    assert top.steps == ["Brown the chicken", "Add onion", "Season and serve"]
    assert top.short_description.endswith("...")
    assert (top.protein, top.fats, top.carbs) == (15, 13, 55)
    assert top.is_from_database


def test_search_reports_not_enough(make_service):
    service = make_service(FakeStore(POOL))
    response = service.search(RecipeSearchRequest(ingredients=["chicken"], min_results=5))
    assert 0 < len(response.recipes) < 5
    assert not response.found_enough


def test_recipes_over_time_budget_are_dropped(make_service):
    service = make_service(FakeStore(POOL))
    response = service.search(RecipeSearchRequest(ingredients=["beef", "carrot", "onion"], max_time=60))
    assert "3" not in [r.id for r in response.recipes]

    response = service.search(RecipeSearchRequest(ingredients=["beef", "carrot", "onion"], max_time=180))
    assert response.recipes[0].id == "3"


def test_skill_level_filters_difficulty(make_service):
    service = make_service(FakeStore(POOL))
    request = RecipeSearchRequest(ingredients=["beef", "carrot", "onion"], max_time=180, skill_level="beginner")
    assert "3" not in [r.id for r in service.search(request).recipes]


def test_store_failure_is_reported_as_unavailable(make_service):
    store = FakeStore(error=RecipeStoreError("down"))
    response = make_service(store).search(RecipeSearchRequest(ingredients=["chicken"]))

    assert response.unavailable
    assert response.recipes == []
    assert not response.found_enough
    assert store.calls == 1


def test_empty_pool(make_service):
    response = make_service(FakeStore([])).search(RecipeSearchRequest(ingredients=["chicken"]))
    assert response.recipes == []
    assert not response.found_enough
    assert not response.unavailable


def test_pantry_ingredients_count(make_service):
    service = make_service(FakeStore(POOL))
    response = service.search(
        RecipeSearchRequest(ingredients=["chicken"], pantry_ingredients=["onion"], min_results=1)
    )
    assert response.recipes[0].id == "1"
    assert response.recipes[0].score == 100.0


def test_score_recipe_without_store(make_service):
    store = FakeStore(POOL)
    result = make_service(store).score_recipe(POOL[0], ["onion"])
    assert result.score == 33.3
    assert store.calls == 0


@pytest.mark.parametrize(
    "level, expected",
    [
        ("beginner", ("easy",)),
        ("Expert", ("hard", "medium")),
        (None, ()),
        ("unknown", ()),
    ],
)
def test_allowed_difficulties(level, expected):
    assert allowed_difficulties(level) == expected


def test_estimate_macros():
    assert estimate_macros(400) == {"protein": 15, "fats": 13, "carbs": 55}
    assert estimate_macros(None) == {"protein": 0, "fats": 0, "carbs": 0}


@pytest.mark.parametrize(
    "level, expected",
    [
        ("  Beginner ", "beginner"),
        ("Wizard", "wizard"),
        ("", None),
        (None, None),
    ],
)
def test_validate_skill_level_never_rejects(level, expected):
    assert validate_skill_level(level) == expected


def test_search_defaults_come_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_MAX_TIME", 90)
    monkeypatch.setattr(settings, "DEFAULT_MIN_RESULTS", 3)
    request = RecipeSearchRequest(ingredients=["chicken"])
    assert request.max_time == 90
    assert request.min_results == 3

    assert RecipeSearchRequest(ingredients=["chicken"], max_time=20).max_time == 20


def test_search_defaults_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_MAX_TIME", "45")
    monkeypatch.setenv("DEFAULT_MIN_RESULTS", "8")
    fresh = Settings()
    assert fresh.DEFAULT_MAX_TIME == 45
    assert fresh.DEFAULT_MIN_RESULTS == 8
