"""
Recipe generator: Gemini-powered recipe creation and adaptation.

Asks a Gemini model for recipes in a fixed JSON shape and turns the answer
into GeneratedRecipe models whose ingredients go through the same parser as
recipes from the store, so generated recipes can be scored like any other.

Two entry points:
- generate_recipes: new recipes around the user's ingredients
- adapt_recipe: rework one existing recipe, listing every swap made
"""

import json
import logging
import re
from typing import Dict, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from recipe_match.models.recipe import (
    AdaptedRecipe,
    AdaptRecipeRequest,
    GeneratedRecipe,
    IngredientReplacement,
    RecipeGenerationRequest,
)
from recipe_match.services.ingredient_parser import IngredientParser, parse_instructions
from recipe_match.utils.helpers import parse_minutes

logger = logging.getLogger(__name__)

# ─── Prompts ───────────────────────────────────────────────────────────────────

SYSTEM_PROMPT = (
    "You are an experienced chef who writes tasty, practical home recipes. "
    "Reply with JSON only."
)

RECIPE_JSON_SHAPE = """{
  "recipes": [
    {
      "title": "Dish name",
      "description": "Short description (1-2 sentences)",
      "cookingTime": "25 min",
      "difficulty": "easy",
      "ingredients": ["2 cups rice", "1 onion, diced"],
      "steps": ["Step 1", "Step 2", "Step 3"],
      "tips": "Optional cooking tip",
      "calories": 450,
      "tags": ["dinner"]
    }
  ]
}"""

ADAPTED_JSON_SHAPE = """{
  "title": "Dish name",
  "description": "Short description (1-2 sentences)",
  "cookingTime": "25 min",
  "difficulty": "easy",
  "ingredients": ["2 cups rice", "1 onion, diced"],
  "steps": ["Step 1", "Step 2"],
  "tips": "Optional cooking tip",
  "substitutions": [{"original": "sour cream", "replacement": "greek yogurt"}]
}"""


class RecipeGenerationError(Exception):
    """Raised when the model is unavailable or its answer cannot be used."""


class RecipeGenerator:
    """
    Gemini-backed recipe generation service.

    Attributes:
        model: Gemini model name
        max_tokens: Output token limit per call
        parser: Parses generated ingredient lines
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        max_tokens: int,
        parser: IngredientParser,
        client: Optional[object] = None,
    ):
        if client is None:
            if not api_key:
                raise RecipeGenerationError("GEMINI_API_KEY is not configured")
            client = genai.Client(api_key=api_key)

        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.parser = parser

        logger.info(f"RecipeGenerator initialized with model: {self.model}")

    # ─── Public entry points ───────────────────────────────────────────────

    def generate_recipes(self, request: RecipeGenerationRequest) -> List[GeneratedRecipe]:
        """
        Generate new recipes around the requested ingredients.

        Args:
            request: Ingredients, time budget and preferences

        Returns:
            List[GeneratedRecipe]: At most request.count recipes

        Raises:
            RecipeGenerationError: If the model call fails or returns
                                   nothing usable
        """
        logger.info(
            f"Generating {request.count} recipe(s) for {len(request.ingredients)} ingredients"
        )
        data = self._call_model(self._build_generation_prompt(request))

        raw_recipes = data.get("recipes")
        if not isinstance(raw_recipes, list):
            raise RecipeGenerationError("Model response has no 'recipes' list")

        recipes = []
        for raw in raw_recipes[: request.count]:
            try:
                recipes.append(self._to_recipe(raw, request.max_time))
            except (ValidationError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed generated recipe: {e}")

        if not recipes:
            raise RecipeGenerationError("Model returned no valid recipes")

        logger.info(f"Generated {len(recipes)} recipe(s)")
        return recipes

    def adapt_recipe(self, request: AdaptRecipeRequest) -> AdaptedRecipe:
        """
        Rework one recipe around the ingredients the user has.

        Returns:
            AdaptedRecipe: The modified recipe with its list of swaps

        Raises:
            RecipeGenerationError: If the model call fails or returns
                                   nothing usable
        """
        logger.info(f"Adapting recipe '{request.recipe.title}'")
        data = self._call_model(self._build_adapt_prompt(request))

        try:
            recipe = self._to_recipe(data, request.recipe.total_time or None)
            substitutions = [
                IngredientReplacement.model_validate(item)
                for item in data.get("substitutions") or []
            ]
        except (ValidationError, TypeError, AttributeError) as e:
            raise RecipeGenerationError(f"Invalid adapted recipe from model: {e}") from e

        logger.info(f"Adapted recipe with {len(substitutions)} substitution(s)")
        return AdaptedRecipe(**recipe.model_dump(), substitutions=substitutions)

    # ─── Prompt building ───────────────────────────────────────────────────

    def _build_generation_prompt(self, request: RecipeGenerationRequest) -> str:
        lines = [
            f"Create {request.count} unique recipes using these ingredients: "
            f"{', '.join(request.ingredients)}.",
            "",
            "Requirements:",
            f"- Each dish takes at most {request.max_time} minutes in total",
        ]
        if request.meal_type:
            lines.append(f"- Meal type: {request.meal_type}")
        if request.skill_level:
            lines.append(f"- Suitable for a {request.skill_level} cook")
        if request.dietary_tags:
            lines.append(f"- Dietary requirements: {', '.join(request.dietary_tags)}")
        if request.pantry_ingredients:
            lines.append(
                f"\nThe user always has these staples and you may use them: "
                f"{', '.join(request.pantry_ingredients)}."
            )
        lines.extend([
            "",
            "Answer in this JSON format:",
            RECIPE_JSON_SHAPE,
            "",
            "Important:",
            "- Every ingredient line includes its quantity",
            "- Steps are clear and detailed",
            "- cookingTime is the exact total time in minutes",
        ])
        return "\n".join(lines)

    def _build_adapt_prompt(self, request: AdaptRecipeRequest) -> str:
        recipe = request.recipe
        steps = parse_instructions(recipe.instructions)
        ingredient_lines = recipe.ingredients or [
            " ".join(filter(None, [i.amount, i.unit, i.display_name]))
            for i in recipe.structured_ingredients or []
        ]
        available = list(request.ingredients) + list(request.pantry_ingredients)
        return "\n".join([
            "Adapt this recipe so it can be cooked with what the user has.",
            "",
            f"Recipe: {recipe.title}",
            f"Description: {recipe.description}",
            f"Ingredients: {json.dumps(ingredient_lines, ensure_ascii=False)}",
            f"Steps: {json.dumps(steps, ensure_ascii=False)}",
            "",
            f"Available ingredients: {', '.join(available)}",
            "",
            "Replace ingredients the user lacks with ones they have, keep the "
            "dish recognisable, and list every replacement you made.",
            "",
            "Answer in this JSON format:",
            ADAPTED_JSON_SHAPE,
        ])

    # ─── Model call and response parsing ───────────────────────────────────

    def _call_model(self, prompt: str) -> Dict:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    response_mime_type="application/json",
                    temperature=0.7,
                    max_output_tokens=self.max_tokens,
                ),
            )
        except Exception as e:
            logger.error(f"Gemini API call failed: {e}")
            raise RecipeGenerationError(f"Gemini API error: {e}") from e

        text = response.text or ""
        if not text.strip():
            raise RecipeGenerationError("Empty response from Gemini")

        json_str = self._extract_json(text)
        if not json_str:
            logger.warning("Could not extract JSON from model response")
            raise RecipeGenerationError("Model response is not JSON")

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.error(f"JSON parse error: {e}")
            raise RecipeGenerationError(f"Model response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise RecipeGenerationError("Model response is not a JSON object")
        return data

    def _to_recipe(self, raw: Dict, default_time: Optional[int]) -> GeneratedRecipe:
        """Validate one raw recipe dict, parsing its ingredient lines."""
        ingredient_lines = [line for line in raw.get("ingredients") or [] if isinstance(line, str)]
        parsed = [self.parser.parse_ingredient(line) for line in ingredient_lines if line.strip()]
        return GeneratedRecipe(
            title=raw["title"] if "title" in raw else raw.get("name"),
            description=raw.get("description") or "",
            cooking_time=parse_minutes(
                raw.get("cookingTime", raw.get("cooking_time")), default_time or 0
            ),
            difficulty=raw.get("difficulty") or "medium",
            ingredients=[i for i in parsed if i.name],
            steps=parse_instructions(raw.get("steps")),
            tips=raw.get("tips") or None,
            calories=parse_minutes(raw.get("calories"), 0) or None,
            tags=raw.get("tags") or [],
        )

    def _extract_json(self, text: str) -> Optional[str]:
        """Extract JSON object from text, handling markdown fences and surrounding text."""
        stripped = text.strip()
        if stripped.startswith("{"):
            depth = 0
            in_string = False
            escaped = False
            for i, ch in enumerate(stripped):
                if in_string:
                    if escaped:
                        escaped = False
                    elif ch == "\\":
                        escaped = True
                    elif ch == '"':
                        in_string = False
                    continue
                if ch == '"':
                    in_string = True
                elif ch == "{":
                    depth += 1
                elif ch == "}":
                    depth -= 1
                    if depth == 0:
                        return stripped[: i + 1]

        match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
        if match:
            return match.group(1)

        first_brace = text.find("{")
        last_brace = text.rfind("}")
        if first_brace != -1 and last_brace > first_brace:
            return text[first_brace: last_brace + 1]

        return None
