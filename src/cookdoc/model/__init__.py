"""Amount algebra and the reduced recipe document."""

from cookdoc.model.amount import (
    Amount,
    Multi,
    Servings,
    Single,
    add,
    apply_next_number,
    extend_with_separator,
    promote_to_scalable,
    quantity_for,
)
from cookdoc.model.document import (
    COOKWARE_MARKER,
    INGREDIENT_MARKER,
    TIMER_MARKER,
    Ingredient,
    IngredientSpecifier,
    Metadata,
    Recipe,
    Timer,
)

__all__ = [
    "COOKWARE_MARKER",
    "INGREDIENT_MARKER",
    "TIMER_MARKER",
    "Amount",
    "Ingredient",
    "IngredientSpecifier",
    "Metadata",
    "Multi",
    "Recipe",
    "Servings",
    "Single",
    "Timer",
    "add",
    "apply_next_number",
    "extend_with_separator",
    "promote_to_scalable",
    "quantity_for",
]
