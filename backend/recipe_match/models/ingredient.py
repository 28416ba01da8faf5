"""
Pydantic models for ingredient matching.

This module defines the data models produced and consumed by the matching
engine: structured recipe ingredients, per-ingredient match results, and the
per-recipe score breakdown. All models use Pydantic for automatic
validation and serialization.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class IngredientCategory(str, Enum):
    """Importance category of a recipe ingredient."""
    KEY = "key"
    IMPORTANT = "important"
    FLAVOR = "flavor"
    BASE = "base"


class MatchType(str, Enum):
    """How a recipe ingredient was satisfied by the user's ingredients."""
    EXACT = "exact"
    SUBSTITUTE = "substitute"
    PARTIAL = "partial"
    NONE = "none"


class MatchSource(str, Enum):
    """Which user list satisfied an ingredient."""
    QUERY = "query"
    PANTRY = "pantry"


class StructuredIngredient(BaseModel):
    """
    A recipe ingredient ready for scoring.

    Stored rows may leave category and is_required out; the parser fills
    them in from the name before the ingredient is scored.

    Attributes:
        name: Canonical lowercase name used for matching
        display_name: Name as written in the recipe
        amount: Free-text quantity ("2", "1.5", "pinch")
        unit: Free-text unit ("cups", "to taste")
        category: Importance category, None until categorized
        substitutes: Author-supplied alternates, at most 5
        notes: Preparation notes split off the name ("boneless")
        is_required: False for base and optional ingredients
    """
    name: str = Field(..., description="Canonical lowercase ingredient name")
    display_name: str = Field("", description="Original-case ingredient name")
    amount: str = Field("", description="Free-text quantity")
    unit: str = Field("", description="Free-text unit")
    category: Optional[IngredientCategory] = Field(
        None,
        description="Importance category"
    )
    substitutes: List[str] = Field(
        default_factory=list,
        max_length=5,
        description="Acceptable alternates, in preference order"
    )
    notes: str = Field("", description="Preparation notes")
    is_required: Optional[bool] = Field(
        None,
        description="Whether the ingredient counts toward the score"
    )

    @field_validator("category", mode="before")
    @classmethod
    def drop_unknown_category(cls, v):
        """Unknown categories are left for the categorizer to decide."""
        if v is None or isinstance(v, IngredientCategory):
            return v
        try:
            return IngredientCategory(str(v).strip().lower())
        except ValueError:
            return None

    @field_validator("substitutes", mode="before")
    @classmethod
    def cap_substitutes(cls, v):
        if v is None:
            return []
        return [s for s in v if s and str(s).strip()][:5]

    @model_validator(mode="after")
    def fill_display_name(self):
        if not self.display_name:
            self.display_name = self.name
        return self

    @property
    def counts_toward_score(self) -> bool:
        """Base and optional ingredients are assumed available and carry no weight."""
        return self.category != IngredientCategory.BASE and self.is_required is not False

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "chicken breast",
                "display_name": "Chicken breast",
                "amount": "2",
                "unit": "pieces",
                "category": "key",
                "substitutes": ["turkey breast", "tofu"],
                "notes": "boneless",
                "is_required": True
            }
        }
    }


class MatchResult(BaseModel):
    """
    Match outcome for a single recipe ingredient.

    Attributes:
        ingredient: The recipe ingredient
        match_type: exact / substitute / partial / none
        matched_with: Substitute name that satisfied it (substitute/partial only)
        match_source: Whether the query or the pantry list satisfied it
    """
    ingredient: StructuredIngredient
    match_type: MatchType
    matched_with: Optional[str] = None
    match_source: Optional[MatchSource] = None

    @model_validator(mode="after")
    def check_matched_with(self):
        """Only substitute and partial matches name what satisfied them."""
        if self.match_type in (MatchType.EXACT, MatchType.NONE) and self.matched_with is not None:
            raise ValueError(
                f"matched_with must be empty for {self.match_type.value} matches"
            )
        return self

    @property
    def is_matched(self) -> bool:
        return self.match_type != MatchType.NONE


class MissingIngredient(BaseModel):
    """An unmatched ingredient with suggested alternates."""
    name: str
    candidate_substitutes: List[str] = Field(default_factory=list, max_length=5)


class MatchDetails(BaseModel):
    """Summary counts for one scored recipe."""
    exact_count: int = Field(0, ge=0)
    substitute_count: int = Field(0, ge=0)
    missing: List[MissingIngredient] = Field(default_factory=list)


class ScoreResult(BaseModel):
    """
    Weighted match score for one recipe against one user ingredient set.

    Recomputed on every request and never persisted.

    Attributes:
        score: 0-100, rounded to one decimal
        matches: One MatchResult per recipe ingredient, in recipe order
        missing_count: Number of non-base ingredients with no match
        match_details: Exact/substitute counts and the missing list
    """
    score: float = Field(..., ge=0.0, le=100.0)
    matches: List[MatchResult] = Field(default_factory=list)
    missing_count: int = Field(0, ge=0)
    match_details: MatchDetails = Field(default_factory=MatchDetails)

    model_config = {
        "json_schema_extra": {
            "example": {
                "score": 100.0,
                "matches": [
                    {
                        "ingredient": {"name": "chicken breast", "category": "key"},
                        "match_type": "exact",
                        "matched_with": None,
                        "match_source": "query"
                    }
                ],
                "missing_count": 0,
                "match_details": {"exact_count": 1, "substitute_count": 0, "missing": []}
            }
        }
    }
