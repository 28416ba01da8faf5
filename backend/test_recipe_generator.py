import json
from types import SimpleNamespace

import pytest

from recipe_match.models.ingredient import IngredientCategory
from recipe_match.models.recipe import AdaptRecipeRequest, RecipeGenerationRequest, RecipeRecord
from recipe_match.services.recipe_generator import RecipeGenerationError, RecipeGenerator


class FakeModels:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if isinstance(self.reply, Exception):
            raise self.reply
        return SimpleNamespace(text=self.reply)


def make_generator(parser, reply):
    client = SimpleNamespace(models=FakeModels(reply))
    return RecipeGenerator(api_key=None, model="test-model", max_tokens=1024, parser=parser, client=client)


GENERATED = {
    "recipes": [
        {
            "title": "Garlic Chicken",
            "description": "Juicy chicken with garlic.",
            "cookingTime": "25 min",
            "difficulty": "easy",
            "ingredients": ["2 chicken breasts", "3 cloves garlic, minced", "salt to taste"],
            "steps": ["Season the chicken", "Pan fry with garlic"],
            "tips": "Rest the meat before slicing",
            "calories": 350,
        },
        {"description": "missing a title"},
    ]
}


def test_generate_recipes(parser):
    generator = make_generator(parser, json.dumps(GENERATED))
    request = RecipeGenerationRequest(
        ingredients=["chicken", "garlic"],
        max_time=30,
        meal_type="dinner",
        skill_level="beginner",
        dietary_tags=["high-protein"],
        pantry_ingredients=["olive oil"],
        count=3,
    )

    recipes = generator.generate_recipes(request)

    assert len(recipes) == 1
    recipe = recipes[0]
    assert recipe.title == "Garlic Chicken"
    assert recipe.cooking_time == 25
    assert recipe.calories == 350
    assert [i.name for i in recipe.ingredients] == ["chicken breasts", "garlic", "salt"]
    assert recipe.ingredients[0].category == IngredientCategory.KEY
    assert recipe.ingredients[1].notes == "minced"

    prompt = generator.client.models.calls[0]["contents"]
    assert "chicken, garlic" in prompt
    assert "30 minutes" in prompt
    assert "dinner" in prompt
    assert "high-protein" in prompt
    assert "olive oil" in prompt
    assert generator.client.models.calls[0]["model"] == "test-model"


def test_generate_handles_fenced_json(parser):
    reply = "Here you go:\n```json\n" + json.dumps(GENERATED) + "\n```"
    recipes = make_generator(parser, reply).generate_recipes(RecipeGenerationRequest(ingredients=["chicken"]))
    assert recipes[0].title == "Garlic Chicken"


def test_missing_cooking_time_falls_back_to_budget(parser):
    reply = json.dumps({"recipes": [{"title": "Toast", "ingredients": ["1 slice bread"]}]})
    request = RecipeGenerationRequest(ingredients=["bread"], max_time=10)
    assert make_generator(parser, reply).generate_recipes(request)[0].cooking_time == 10


@pytest.mark.parametrize(
    "reply",
    [
        "",
        "not json at all",
        json.dumps({"recipes": "nope"}),
        json.dumps({"recipes": [{"description": "no title"}]}),
        json.dumps(["a", "list"]),
    ],
)
def test_unusable_output_raises(parser, reply):
    with pytest.raises(RecipeGenerationError):
        make_generator(parser, reply).generate_recipes(RecipeGenerationRequest(ingredients=["chicken"]))


def test_api_error_raises(parser):
    generator = make_generator(parser, RuntimeError("quota exceeded"))
    with pytest.raises(RecipeGenerationError, match="quota exceeded"):
        generator.generate_recipes(RecipeGenerationRequest(ingredients=["chicken"]))


def test_missing_api_key_raises(parser):
    with pytest.raises(RecipeGenerationError):
        RecipeGenerator(api_key=None, model="m", max_tokens=256, parser=parser)


def test_adapt_recipe(parser):
    reply = json.dumps({
        "title": "Yogurt Chicken Skillet",
        "cookingTime": 30,
        "ingredients": ["2 chicken breasts", "1 cup greek yogurt"],
        "steps": "1. Brown the chicken. 2. Stir in the yogurt.",
        "substitutions": [{"original": "sour cream", "replacement": "greek yogurt"}],
    })
    generator = make_generator(parser, reply)
    request = AdaptRecipeRequest(
        recipe=RecipeRecord(
            title="Creamy Chicken Skillet",
            ingredients=["2 chicken breasts", "1 cup sour cream"],
            instructions="1. Brown the chicken. 2. Stir in the sour cream.",
        ),
        ingredients=["chicken", "greek yogurt"],
    )

    adapted = generator.adapt_recipe(request)

    assert adapted.title == "Yogurt Chicken Skillet"
    assert adapted.cooking_time == 30
    assert adapted.steps == ["Brown the chicken", "Stir in the yogurt"]
    assert adapted.substitutions[0].original == "sour cream"
    assert adapted.substitutions[0].replacement == "greek yogurt"

    prompt = generator.client.models.calls[0]["contents"]
    assert "Creamy Chicken Skillet" in prompt
    assert "1 cup sour cream" in prompt
    assert "greek yogurt" in prompt


def test_adapt_rejects_bad_substitutions(parser):
    reply = json.dumps({"title": "X", "substitutions": [{"original": "a"}]})
    request = AdaptRecipeRequest(recipe=RecipeRecord(title="Y"), ingredients=["a"])
    with pytest.raises(RecipeGenerationError):
        make_generator(parser, reply).adapt_recipe(request)
