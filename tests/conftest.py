"""Pytest configuration and shared fixtures."""

import pytest

from cookdoc.config import get_settings
from cookdoc.logging_config import clear_context

# =============================================================================
# Pytest Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from COOKDOC_* variables of the host environment."""
    for var in ("COOKDOC_ENVIRONMENT", "COOKDOC_LOG_LEVEL", "COOKDOC_LOG_FORMAT", "COOKDOC_STRIP_SOURCE"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    clear_context()


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def scenario_recipe():
    """Servings declaration plus one mention of each kind."""
    return ">> servings: 1|2|3\nUse @flour{2*%cups} and #bowl{} for ~{10%minutes}"


@pytest.fixture
def fruit_salad_recipe():
    """Metadata with trailing comment, comment line, servings and every mention kind."""
    return (
        ">> value: key // This is a comment\n"
        "// A comment line\n"
        ">> servings: 1|2|3\n"
        "Get some @fruit salat ananas{1/2*}(washed) and pull it\n"
        "Use the #big potato masher{}\n"
        "Start the timer ~{10%minutes}\n"
    )


@pytest.fixture
def pancakes_recipe():
    """A longer recipe with repeated ingredients and per-serving amounts."""
    return (
        ">> title: Easy Pancakes\n"
        ">> servings: 2|4\n"
        ">> source: https://example.com/pancakes\n"
        "\n"
        "Crack @eggs{3|6} into a #blender, then add @plain flour{125|250%g}, "
        "@milk{250|500%ml} and @sea salt{1%pinch}, blend until smooth.\n"
        "\n"
        "Pour into a #bowl and leave to stand for ~{15%minutes}. // or longer\n"
        "\n"
        "Melt @butter{1*%tbsp} in a #large non-stick frying pan{} on a medium heat.\n"
        "\n"
        "Cook the pancakes for ~{1%minute} per side, adding @butter{1*%tbsp} between each.\n"
        "\n"
        "Serve with @sea salt{1%pinch} on top.\n"
    )
