"""
Free-text recipe parsing.

Turns ingredient lines such as "1½ cups rice", "2-3 tbsp olive oil",
"pinch of salt" or "chicken breast, boneless" into StructuredIngredients,
and splits instruction text into steps. Parsing never raises: a line that
matches no pattern becomes an ingredient whose name is the whole line and
whose amount is empty.
"""

import re
import logging
from typing import List, Sequence, Union

from recipe_match.models.ingredient import IngredientCategory, StructuredIngredient
from recipe_match.models.recipe import RecipeRecord
from recipe_match.services.ingredient_categorizer import IngredientCategorizer
from recipe_match.services.substitution_index import SubstitutionIndex
from recipe_match.utils.constants import (
    MAX_INGREDIENT_SUBSTITUTES,
    MEASUREMENT_UNITS,
    UNICODE_FRACTIONS,
    VAGUE_AMOUNTS,
)
from recipe_match.utils.helpers import normalize_ingredient_name

# Configure logging
logger = logging.getLogger(__name__)

_UNITS = "|".join(sorted(MEASUREMENT_UNITS, key=len, reverse=True))

# "2 cups flour", "1 1/2 tbsp oil", "250g pasta"
_QUANTITY_UNIT_PATTERN = re.compile(
    rf"^(\d[\d.,/\s]*?)\s*({_UNITS})\.?\s+(.+)$",
    re.IGNORECASE,
)
# "2-3 tablespoons oil"
_RANGE_UNIT_PATTERN = re.compile(
    rf"^(\d+(?:\.\d+)?\s*-\s*\d+(?:\.\d+)?)\s*({_UNITS})\.?\s+(.+)$",
    re.IGNORECASE,
)
# "handful of cilantro"
_VAGUE_PATTERN = re.compile(
    rf"^({'|'.join(VAGUE_AMOUNTS)})\s+of\s+(.+)$",
    re.IGNORECASE,
)
# "salt to taste"
_TO_TASTE_PATTERN = re.compile(r"^(.+?)\s+to\s+taste$", re.IGNORECASE)
# "3 eggs", "2-3 carrots"
_QUANTITY_PATTERN = re.compile(r"^(\d[\d.,/]*(?:\s*-\s*\d[\d.,/]*)?)\s+(.+)$")

_NUMBERED_STEP_PATTERN = re.compile(r"\d+\.\s+")
_SENTENCE_PATTERN = re.compile(r"\.\s+")


def convert_unicode_fractions(text: str) -> str:
    """
    Replace unicode vulgar fractions with decimals.

    Example:
        >>> convert_unicode_fractions("1½ cups rice")
        "1.5 cups rice"
        >>> convert_unicode_fractions("1 ½ cups milk")
        "1.5 cups milk"
        >>> convert_unicode_fractions("¼ tsp salt")
        "0.25 tsp salt"
    """
    result = text
    for fraction, decimal in UNICODE_FRACTIONS.items():
        if fraction not in result:
            continue
        result = re.sub(
            rf"(\d+)\s*{fraction}",
            lambda m: format(int(m.group(1)) + float(decimal), "g"),
            result,
        )
        result = result.replace(fraction, decimal)
    return result


def parse_instructions(instructions: Union[str, Sequence[str], None]) -> List[str]:
    """
    Split instructions into steps.

    Tries numbered steps ("1. Boil water. 2. Add pasta.") first; a single
    long block without numbering is split into sentences instead.

    Args:
        instructions: One text block or an existing list of steps

    Returns:
        List[str]: Non-empty steps without trailing periods
    """
    if not instructions:
        return []

    if not isinstance(instructions, str):
        return [step.strip() for step in instructions if step and step.strip()]

    text = instructions.strip()
    steps = [s.strip() for s in _NUMBERED_STEP_PATTERN.split(text) if s.strip()]

    if len(steps) <= 1 and len(text) > 50:
        steps = [s.strip() for s in _SENTENCE_PATTERN.split(text) if len(s.strip()) > 10]

    steps = [re.sub(r"\.$", "", step) for step in steps]
    return steps or [text]


class IngredientParser:
    """
    Parses free-text ingredient lines into StructuredIngredients.

    Attributes:
        categorizer: Assigns the importance category
        substitution_index: Supplies default substitutes
    """

    def __init__(self, categorizer: IngredientCategorizer, substitution_index: SubstitutionIndex):
        self.categorizer = categorizer
        self.substitution_index = substitution_index

    def _split_quantity(self, line: str):
        """Return (amount, unit, name) for a cleaned ingredient line."""
        match = _QUANTITY_UNIT_PATTERN.match(line) or _RANGE_UNIT_PATTERN.match(line)
        if match:
            return match.group(1).strip(), match.group(2).strip().lower(), match.group(3).strip()

        match = _VAGUE_PATTERN.match(line)
        if match:
            return match.group(1).lower(), "", match.group(2).strip()

        match = _TO_TASTE_PATTERN.match(line)
        if match:
            return "", "to taste", match.group(1).strip()

        match = _QUANTITY_PATTERN.match(line)
        if match:
            return match.group(1).strip(), "", match.group(2).strip()

        return "", "", line

    def parse_ingredient(self, raw: str) -> StructuredIngredient:
        """
        Parse one free-text ingredient line.

        Handles "qty unit name", "qty-range unit name", "pinch of name",
        "name to taste" and "qty name", then splits ", notes" off the name.

        Args:
            raw: Ingredient line as written in the recipe

        Returns:
            StructuredIngredient: Parsed ingredient with category and
                                  substitutes filled in

        Example:
            >>> parser.parse_ingredient("2 cups chicken breast, diced")
            StructuredIngredient(name="chicken breast", amount="2", unit="cups",
                                 category="key", notes="diced", ...)
        """
        line = convert_unicode_fractions((raw or "").strip())
        amount, unit, display_name = self._split_quantity(line)

        notes = ""
        if "," in display_name:
            head, tail = display_name.split(",", 1)
            if head.strip():
                display_name, notes = head.strip(), tail.strip()

        name = normalize_ingredient_name(display_name)
        if not name:
            # Nothing left after removing the quantity; keep the whole line
            logger.debug(f"Could not split ingredient line '{raw}', using it as the name")
            display_name, amount, unit, notes = line, "", "", ""
            name = normalize_ingredient_name(line)

        category = self.categorizer.categorize(name)
        substitutes = list(self.substitution_index.lookup(name))[:MAX_INGREDIENT_SUBSTITUTES]

        return StructuredIngredient(
            name=name,
            display_name=display_name,
            amount=amount,
            unit=unit,
            category=category,
            substitutes=substitutes,
            notes=notes,
            is_required=category != IngredientCategory.BASE,
        )

    def resolve_ingredient(self, stored: StructuredIngredient) -> StructuredIngredient:
        """
        Bring a pre-structured ingredient into scoring form.

        The name is normalized (the stored text is kept as display_name),
        a missing category comes from the categorizer, missing substitutes
        from the substitution index, and a missing is_required from the
        category.
        """
        name = normalize_ingredient_name(stored.name)
        category = stored.category or self.categorizer.categorize(name)
        substitutes = stored.substitutes or list(
            self.substitution_index.lookup(name)
        )[:MAX_INGREDIENT_SUBSTITUTES]
        is_required = stored.is_required
        if is_required is None:
            is_required = category != IngredientCategory.BASE

        return stored.model_copy(update={
            "name": name,
            "display_name": stored.display_name or stored.name,
            "category": category,
            "substitutes": substitutes,
            "is_required": is_required,
        })

    def structure_recipe(self, recipe: RecipeRecord) -> List[StructuredIngredient]:
        """
        Return the recipe's ingredients in structured form.

        Pre-structured ingredients are resolved; otherwise each free-text
        line is parsed. Entries left without a name (a bare "2") are
        dropped, since nothing could ever match them.
        """
        if recipe.structured_ingredients:
            ingredients = [self.resolve_ingredient(i) for i in recipe.structured_ingredients]
        else:
            ingredients = [
                self.parse_ingredient(line) for line in recipe.ingredients if line and line.strip()
            ]

        named = [i for i in ingredients if i.name]
        if len(named) < len(ingredients):
            logger.warning(
                f"Recipe '{recipe.title}': skipped {len(ingredients) - len(named)} "
                f"ingredient(s) without a name"
            )
        return named
