"""
Global ingredient substitution index.

Maps a canonical ingredient name to a short, ordered list of acceptable
alternates ("sour cream" -> greek yogurt, plain yogurt, ...). Keys are
normalized once at construction; lookups normalize the query name.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

from recipe_match.utils.helpers import normalize_ingredient_name

logger = logging.getLogger(__name__)


class SubstitutionIndex:
    """
    Read-only lookup of known ingredient alternates.

    Attributes:
        prefix_fallback: When no entry exists for the full name, try
            progressively shorter leading word prefixes
    """

    def __init__(self, substitutions: Mapping[str, Sequence[str]], prefix_fallback: bool = False):
        """
        Initialize the index.

        Args:
            substitutions: Ingredient name -> alternates, in preference order
            prefix_fallback: Enable prefix lookups ("tomato puree passata" -> "tomato puree")
        """
        entries = {}
        for name, alternates in substitutions.items():
            key = normalize_ingredient_name(name)
            if not key:
                continue
            if key in entries:
                logger.debug(f"Duplicate substitution key after normalization: '{name}' (kept first)")
                continue
            entries[key] = tuple(alternates)

        self._entries: Mapping[str, Tuple[str, ...]] = MappingProxyType(entries)
        self.prefix_fallback = prefix_fallback

        logger.info(
            f"SubstitutionIndex initialized with {len(self._entries)} entries "
            f"(prefix_fallback={prefix_fallback})"
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return normalize_ingredient_name(name) in self._entries

    def lookup(self, ingredient: str) -> Tuple[str, ...]:
        """
        Return known alternates for an ingredient.

        Args:
            ingredient: Ingredient name (normalized or raw)

        Returns:
            Tuple[str, ...]: Alternates in preference order, empty if unknown
        """
        name = normalize_ingredient_name(ingredient)
        alternates = self._entries.get(name)
        if alternates is not None:
            return alternates

        if self.prefix_fallback:
            words = name.split(" ")
            for end in range(len(words) - 1, 0, -1):
                prefix = " ".join(words[:end])
                alternates = self._entries.get(prefix)
                if alternates is not None:
                    logger.debug(f"Substitution lookup '{name}' resolved via prefix '{prefix}'")
                    return alternates

        return ()
