"""Parse the bundled example recipes."""

from pathlib import Path

import pytest

from cookdoc import parse
from cookdoc.model import Multi, Servings, Single

RECIPES_DIR = Path(__file__).parent / "recipes"
RECIPE_FILES = sorted(RECIPES_DIR.glob("*.cook"))


def load(name: str):
    path = RECIPES_DIR / f"{name}.cook"
    return parse(path.read_text(encoding="utf-8"), name=name)


@pytest.mark.parametrize("path", RECIPE_FILES, ids=lambda path: path.stem)
def test_example_parses(path):
    """Every example reduces, with one table entry per marker."""
    recipe = parse(path.read_text(encoding="utf-8"), name=path.stem)
    metadata = recipe.metadata

    assert recipe.instruction.count("@") == len(metadata.ingredients_specifiers)
    assert recipe.instruction.count("#") == len(metadata.cookware)
    assert recipe.instruction.count("~") == len(metadata.timer)
    assert "//" not in recipe.instruction
    for specifier in metadata.ingredients_specifiers:
        assert metadata.ingredient_for(specifier).name == specifier.ingredient


def test_coffee_souffle():
    recipe = load("Coffee Souffle")
    metadata = recipe.metadata
    assert metadata.servings == (4,)
    assert metadata.extra["title"] == "Coffee Souffle"
    assert metadata.ingredients["caster sugar"].amount == Single(5)
    assert metadata.cookware == ("oven", "ramekins", "bowl", "bowl")


def test_fried_rice():
    metadata = load("Fried Rice").metadata
    assert metadata.servings == (2, 4)
    assert metadata.ingredients["rice"].amount == Servings([150, 300])
    assert metadata.ingredients["sesame oil"].amount == Multi(0.5)
    assert [timer.amount for timer in metadata.timer] == [1, 3]


def test_olivier_salad():
    metadata = load("Olivier Salad").metadata
    assert metadata.servings is None
    assert metadata.ingredients["onion"].amount == Single(1)
    assert metadata.ingredients["salt"].amount is None
    assert len(metadata.ingredients_specifiers) == 9
