"""cookdoc: reduce cooking markup into a structured recipe document."""

from cookdoc.errors import (
    AmountAlgebraError,
    CookdocError,
    GrammarError,
    NumericParseError,
    UnitMismatchError,
)
from cookdoc.model import (
    Ingredient,
    IngredientSpecifier,
    Metadata,
    Multi,
    Recipe,
    Servings,
    Single,
    Timer,
)
from cookdoc.parser import parse

__all__ = [
    "AmountAlgebraError",
    "CookdocError",
    "GrammarError",
    "Ingredient",
    "IngredientSpecifier",
    "Metadata",
    "Multi",
    "NumericParseError",
    "Recipe",
    "Servings",
    "Single",
    "Timer",
    "UnitMismatchError",
    "parse",
]
