"""
Pydantic models for recipe data.

This module defines the data models for candidate recipes from the recipe
store, plus the request/response schemas of the search, score, generate and
adapt endpoints. All models use Pydantic for automatic validation,
serialization, and type safety.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union

from recipe_match.models.ingredient import (
    MatchDetails,
    MatchResult,
    ScoreResult,
    StructuredIngredient,
)
from recipe_match.config import settings
from recipe_match.utils.validators import clean_ingredient_list, validate_skill_level


class RecipeRecord(BaseModel):
    """
    Candidate recipe as stored in the recipe store.

    Ingredients arrive either already structured (``structured_ingredients``)
    or as free-text lines (``ingredients``) that are parsed before scoring.

    Attributes:
        id: Store identifier
        title: Recipe title
        description: Free-text description
        ingredients: Free-text ingredient lines ("2 cups rice")
        structured_ingredients: Pre-parsed ingredients, preferred when present
        difficulty: Difficulty label (easy/medium/hard)
        prep_time: Preparation time in minutes
        cook_time: Cooking time in minutes
        servings: Number of servings
        instructions: Single text block or list of steps
        calories: Calories per serving
        tags: Free-form tags
        source_url: Where the recipe came from
    """
    id: Optional[str] = Field(None, description="Recipe identifier")
    title: str = Field(..., description="Recipe title")
    description: str = Field("", description="Recipe description")
    ingredients: List[str] = Field(default_factory=list, description="Free-text ingredient lines")
    structured_ingredients: Optional[List[StructuredIngredient]] = Field(
        None,
        description="Pre-parsed ingredients"
    )
    difficulty: str = Field("medium", description="Difficulty label")
    prep_time: int = Field(0, ge=0, description="Preparation time in minutes")
    cook_time: int = Field(0, ge=0, description="Cooking time in minutes")
    servings: Optional[int] = Field(None, description="Number of servings")
    instructions: Union[str, List[str]] = Field("", description="Cooking instructions")
    calories: Optional[int] = Field(None, ge=0, description="Calories per serving")
    tags: List[str] = Field(default_factory=list, description="Tags")
    source_url: Optional[str] = Field(None, description="Source reference")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator("description", "difficulty", "instructions", mode="before")
    @classmethod
    def empty_when_null(cls, v):
        return "" if v is None else v

    @field_validator("prep_time", "cook_time", mode="before")
    @classmethod
    def zero_when_null(cls, v):
        return 0 if v is None else v

    @field_validator("ingredients", "tags", mode="before")
    @classmethod
    def list_when_null(cls, v):
        return [] if v is None else v

    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "42",
                "title": "Creamy Chicken Skillet",
                "description": "Weeknight chicken with onions and sour cream.",
                "ingredients": ["2 chicken breasts", "1 onion", "1 cup sour cream", "salt to taste"],
                "difficulty": "easy",
                "prep_time": 10,
                "cook_time": 20,
                "instructions": "1. Brown the chicken. 2. Add onion. 3. Stir in sour cream.",
                "calories": 520,
                "tags": ["dinner"],
                "source_url": "https://example.com/creamy-chicken"
            }
        }
    }


class RecipeSearchRequest(BaseModel):
    """
    Request model for the recipe search endpoint.

    Attributes:
        ingredients: Ingredients the user has right now
        pantry_ingredients: Staples from the user's profile
        max_time: Maximum total time in minutes
        skill_level: beginner / intermediate / expert
        min_results: Number of recipes wanted
    """
    ingredients: List[str] = Field(
        ...,
        description="Ingredients entered for this search",
        examples=[["chicken", "onion", "greek yogurt"]]
    )
    pantry_ingredients: List[str] = Field(
        default_factory=list,
        description="Staples the user always has"
    )
    max_time: int = Field(
        default_factory=lambda: settings.DEFAULT_MAX_TIME,
        ge=1,
        le=1440,
        description="Maximum prep + cook time in minutes"
    )
    skill_level: Optional[str] = Field(None, description="Cook skill level")
    min_results: int = Field(
        default_factory=lambda: settings.DEFAULT_MIN_RESULTS,
        ge=1,
        le=50,
        description="Number of recipes to return"
    )

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v: List[str]) -> List[str]:
        return clean_ingredient_list(v, allow_empty=False)

    @field_validator("pantry_ingredients", mode="before")
    @classmethod
    def validate_pantry(cls, v: Optional[List[str]]) -> List[str]:
        return clean_ingredient_list(v)

    @field_validator("skill_level")
    @classmethod
    def validate_skill(cls, v: Optional[str]) -> Optional[str]:
        return validate_skill_level(v)


class RecipeResult(BaseModel):
    """
    One ranked recipe annotated with its match breakdown.

    Attributes:
        id: Store identifier
        title: Recipe title
        short_description: First 60 characters of the description
        cooking_time: Total time in minutes
        protein/fats/carbs: Grams estimated from calories
        steps: Parsed instruction steps
        match_percentage: Score rounded to a whole number
        score: Weighted match score (0-100)
        matches: Per-ingredient match results
    """
    id: Optional[str] = None
    title: str
    description: str = ""
    short_description: str = ""
    cooking_time: int = 0
    difficulty: str = ""
    calories: Optional[int] = None
    protein: int = 0
    fats: int = 0
    carbs: int = 0
    steps: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    source_url: Optional[str] = None
    match_percentage: int = Field(0, ge=0, le=100)
    is_from_database: bool = True
    score: float = Field(..., ge=0.0, le=100.0)
    matches: List[MatchResult] = Field(default_factory=list)
    missing_count: int = 0
    match_details: MatchDetails = Field(default_factory=MatchDetails)

    @classmethod
    def from_score(cls, score_result: ScoreResult, **fields) -> "RecipeResult":
        """Build a result from presentation fields plus a score breakdown."""
        return cls(
            score=score_result.score,
            matches=score_result.matches,
            missing_count=score_result.missing_count,
            match_details=score_result.match_details,
            match_percentage=int(round(score_result.score)),
            **fields,
        )


class RecipeSearchResponse(BaseModel):
    """
    Response model for recipe search.

    Attributes:
        recipes: Ranked recipes, best first
        found_enough: Whether at least min_results recipes were found
        total_candidates: Recipes fetched from the store
        unavailable: True when the recipe store could not be reached
    """
    recipes: List[RecipeResult] = Field(default_factory=list)
    found_enough: bool = False
    total_candidates: int = 0
    unavailable: bool = False


class ScoreRecipeRequest(BaseModel):
    """Score a single caller-supplied recipe without touching the store."""
    recipe: RecipeRecord
    ingredients: List[str] = Field(default_factory=list)
    pantry_ingredients: List[str] = Field(default_factory=list)

    @field_validator("ingredients", "pantry_ingredients", mode="before")
    @classmethod
    def validate_lists(cls, v: Optional[List[str]]) -> List[str]:
        return clean_ingredient_list(v)


class RecipeGenerationRequest(BaseModel):
    """
    Request model for LLM recipe generation.

    Attributes:
        ingredients: Ingredients to build recipes around
        max_time: Time budget in minutes
        meal_type: breakfast / lunch / dinner / snack (free text)
        skill_level: beginner / intermediate / expert
        dietary_tags: e.g. ["vegetarian", "low-calorie"]
        pantry_ingredients: Staples the user always has
        count: Number of recipes to generate
    """
    ingredients: List[str]
    max_time: int = Field(default_factory=lambda: settings.DEFAULT_MAX_TIME, ge=1, le=1440)
    meal_type: Optional[str] = Field(None, max_length=50)
    skill_level: Optional[str] = None
    dietary_tags: List[str] = Field(default_factory=list)
    pantry_ingredients: List[str] = Field(default_factory=list)
    count: int = Field(5, ge=1, le=10)

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v: List[str]) -> List[str]:
        return clean_ingredient_list(v, allow_empty=False)

    @field_validator("pantry_ingredients", "dietary_tags", mode="before")
    @classmethod
    def validate_lists(cls, v: Optional[List[str]]) -> List[str]:
        return clean_ingredient_list(v)

    @field_validator("skill_level")
    @classmethod
    def validate_skill(cls, v: Optional[str]) -> Optional[str]:
        return validate_skill_level(v)


class GeneratedRecipe(BaseModel):
    """A recipe produced by the text-generation service, in structured shape."""
    title: str
    description: str = ""
    cooking_time: int = Field(0, ge=0, description="Total time in minutes")
    difficulty: str = "medium"
    ingredients: List[StructuredIngredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    tips: Optional[str] = None
    calories: Optional[int] = Field(None, ge=0)
    tags: List[str] = Field(default_factory=list)


class GenerateRecipesResponse(BaseModel):
    recipes: List[GeneratedRecipe] = Field(default_factory=list)


class AdaptRecipeRequest(BaseModel):
    """Ask the generation service to rework one recipe around what the user has."""
    recipe: RecipeRecord
    ingredients: List[str]
    pantry_ingredients: List[str] = Field(default_factory=list)

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v: List[str]) -> List[str]:
        return clean_ingredient_list(v, allow_empty=False)

    @field_validator("pantry_ingredients", mode="before")
    @classmethod
    def validate_pantry(cls, v: Optional[List[str]]) -> List[str]:
        return clean_ingredient_list(v)


class IngredientReplacement(BaseModel):
    """One swap made while adapting a recipe."""
    original: str
    replacement: str


class AdaptedRecipe(GeneratedRecipe):
    """A generated recipe plus the explicit list of swaps applied."""
    substitutions: List[IngredientReplacement] = Field(default_factory=list)
