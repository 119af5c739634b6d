"""Pydantic models for the reduced recipe document."""

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cookdoc.model.amount import Amount

INGREDIENT_MARKER = "@"
COOKWARE_MARKER = "#"
TIMER_MARKER = "~"
MARKERS = (INGREDIENT_MARKER, COOKWARE_MARKER, TIMER_MARKER)


class DocumentModel(BaseModel):
    """Base class for all document models."""

    model_config = ConfigDict(frozen=True)


class Timer(DocumentModel):
    """A timer set in a step."""

    amount: float
    unit: str = ""


class Ingredient(DocumentModel):
    """One distinct ingredient of the recipe, with its total amount."""

    name: str
    id: int
    amount: Amount | None = None
    unit: str | None = None


class IngredientSpecifier(DocumentModel):
    """A single mention of an ingredient, referencing it by name."""

    ingredient: str
    amount_in_step: Amount


class Metadata(DocumentModel):
    """
    Tables collected from a recipe.

    The n-th ``@`` in Recipe.instruction belongs to the n-th entry of
    ``ingredients_specifiers``; likewise ``#`` to ``cookware`` and ``~`` to
    ``timer``.
    """

    servings: tuple[int, ...] | None = None
    extra: dict[str, str] = Field(default_factory=dict)
    ingredients: dict[str, Ingredient] = Field(default_factory=dict)
    ingredients_specifiers: tuple[IngredientSpecifier, ...] = ()
    cookware: tuple[str, ...] = ()
    timer: tuple[Timer, ...] = ()

    @field_validator("servings")
    @classmethod
    def servings_not_empty(cls, v: tuple[int, ...] | None) -> tuple[int, ...] | None:
        """A servings declaration names at least one bracket."""
        if v is not None and not v:
            raise ValueError("servings must contain at least one value")
        return v

    def ingredient_for(self, specifier: IngredientSpecifier) -> Ingredient:
        """Look up the ingredient a mention refers to."""
        return self.ingredients[specifier.ingredient]


class Recipe(DocumentModel):
    """Source text, metadata and marker-substituted instructions of a recipe."""

    source: str
    metadata: Metadata
    instruction: str

    @model_validator(mode="after")
    def markers_match_tables(self) -> "Recipe":
        """Every marker in the instruction text has exactly one table entry."""
        expected = {
            INGREDIENT_MARKER: len(self.metadata.ingredients_specifiers),
            COOKWARE_MARKER: len(self.metadata.cookware),
            TIMER_MARKER: len(self.metadata.timer),
        }
        for marker, count in expected.items():
            found = self.instruction.count(marker)
            if found != count:
                raise ValueError(
                    f"instruction contains {found} '{marker}' markers but {count} entries"
                )
        return self

    def mentions(self) -> Iterator[tuple[str, Any]]:
        """
        Walk the markers of the instruction text left to right.

        Yields:
            (marker, item) pairs where item is an IngredientSpecifier, a
            cookware name or a Timer.
        """
        tables = {
            INGREDIENT_MARKER: iter(self.metadata.ingredients_specifiers),
            COOKWARE_MARKER: iter(self.metadata.cookware),
            TIMER_MARKER: iter(self.metadata.timer),
        }
        for char in self.instruction:
            if char in tables:
                yield char, next(tables[char])
