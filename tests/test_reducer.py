"""Tests for the semantic reducer."""

import pytest

from cookdoc import parse
from cookdoc.errors import AmountAlgebraError, NumericParseError, UnitMismatchError
from cookdoc.grammar import Document, IngredientSpan, Span, Step, Token, TokenKind, tokenize
from cookdoc.model import Multi, Servings, Single, Timer
from cookdoc.reduce import RecipeReducer, parse_count, parse_quantity, reduce_document

# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    """End-to-end reductions of small recipes."""

    def test_one_mention_of_each_kind(self, scenario_recipe):
        recipe = reduce_document(tokenize(scenario_recipe))
        metadata = recipe.metadata

        assert metadata.servings == (1, 2, 3)
        assert list(metadata.ingredients) == ["flour"]
        flour = metadata.ingredients["flour"]
        assert flour.unit == "cups"
        assert flour.amount == Multi(2)
        assert metadata.cookware == ("bowl",)
        assert metadata.timer == (Timer(amount=10, unit="minutes"),)
        assert recipe.instruction == "\nUse @ and # for ~"

    def test_repeated_mentions_merge(self):
        recipe = reduce_document(tokenize("Add @salt{1} now\nAdd @salt{2} later"))
        (salt,) = recipe.metadata.ingredients.values()
        assert salt.name == "salt"
        assert salt.unit is None
        assert salt.amount == Single(3)

    def test_separator_shorthand(self):
        recipe = reduce_document(tokenize("Add @sugar{1|2}"))
        assert recipe.metadata.ingredients["sugar"].amount == Servings([1, 2])

    def test_chained_division_per_bracket(self):
        recipe = reduce_document(tokenize("Add @rice{1|3/2%cups}"))
        assert recipe.metadata.ingredients["rice"].amount == Servings([1, 1.5])

    def test_fraction_then_scaling(self, fruit_salad_recipe):
        recipe = reduce_document(tokenize(fruit_salad_recipe.strip()))
        ingredient = recipe.metadata.ingredients["fruit salat ananas"]
        assert ingredient.amount == Multi(0.5)
        assert recipe.metadata.cookware == ("big potato masher",)
        assert recipe.metadata.extra == {"value": "key"}
        assert recipe.instruction == (
            " \n"
            "\n"
            "\n"
            "Get some @ and pull it\n"
            "Use the #\n"
            "Start the timer ~"
        )


# =============================================================================
# Ingredient table
# =============================================================================


class TestIngredientTable:
    """Tests for ingredient deduplication and the specifier list."""

    def test_specifier_per_mention(self, pancakes_recipe):
        recipe = reduce_document(tokenize(pancakes_recipe))
        names = [spec.ingredient for spec in recipe.metadata.ingredients_specifiers]
        assert names == ["eggs", "plain flour", "milk", "sea salt", "butter", "butter", "sea salt"]

    def test_insertion_order_and_ids(self, pancakes_recipe):
        recipe = reduce_document(tokenize(pancakes_recipe))
        ingredients = recipe.metadata.ingredients
        assert list(ingredients) == ["eggs", "plain flour", "milk", "sea salt", "butter"]
        assert [ingredient.id for ingredient in ingredients.values()] == [1, 2, 3, 4, 5]

    def test_totals(self, pancakes_recipe):
        ingredients = reduce_document(tokenize(pancakes_recipe)).metadata.ingredients
        assert ingredients["eggs"].amount == Servings([3, 6])
        assert ingredients["plain flour"].amount == Servings([125, 250])
        assert ingredients["plain flour"].unit == "g"
        assert ingredients["sea salt"].amount == Single(2)
        assert ingredients["butter"].amount == Multi(2)
        assert ingredients["butter"].unit == "tbsp"

    def test_name_whitespace_normalized(self):
        recipe = reduce_document(tokenize("Add @olive   oil{1}\nThen @olive oil{1}"))
        assert list(recipe.metadata.ingredients) == ["olive oil"]
        assert recipe.metadata.ingredients["olive oil"].amount == Single(2)

    def test_mention_without_amount(self):
        recipe = reduce_document(tokenize("Season with @salt, then @salt{2}"))
        first, second = recipe.metadata.ingredients_specifiers
        assert first.amount_in_step == Single(0)
        assert second.amount_in_step == Single(2)
        assert recipe.metadata.ingredients["salt"].amount == Single(2)

    def test_later_mention_without_amount(self):
        recipe = reduce_document(tokenize("Add @salt{2}, then more @salt"))
        assert recipe.metadata.ingredients["salt"].amount == Single(2)

    def test_modifier_dropped(self):
        recipe = reduce_document(tokenize("Add @onion{1}(diced)"))
        onion = recipe.metadata.ingredients["onion"]
        assert onion.name == "onion"
        assert onion.amount == Single(1)


# =============================================================================
# Other tables
# =============================================================================


class TestTables:
    """Tests for metadata, cookware and timers."""

    def test_cookware_not_deduplicated(self):
        recipe = reduce_document(tokenize("Heat the #pan, then wipe the #pan"))
        assert recipe.metadata.cookware == ("pan", "pan")

    def test_repeated_metadata_key_last_wins(self):
        recipe = reduce_document(tokenize(">> author: A\n>> author: B\nStir"))
        assert recipe.metadata.extra == {"author": "B"}

    def test_no_servings(self):
        recipe = reduce_document(tokenize("Stir"))
        assert recipe.metadata.servings is None

    def test_timer_without_unit(self):
        recipe = reduce_document(tokenize("Wait ~{1.5}"))
        assert recipe.metadata.timer == (Timer(amount=1.5, unit=""),)


# =============================================================================
# Instruction text
# =============================================================================


class TestInstruction:
    """Tests for marker substitution."""

    def test_marker_counts_match_tables(self, pancakes_recipe):
        recipe = reduce_document(tokenize(pancakes_recipe))
        metadata = recipe.metadata
        assert recipe.instruction.count("@") == len(metadata.ingredients_specifiers)
        assert recipe.instruction.count("#") == len(metadata.cookware)
        assert recipe.instruction.count("~") == len(metadata.timer)

    def test_comments_removed(self, pancakes_recipe):
        recipe = reduce_document(tokenize(pancakes_recipe))
        assert "//" not in recipe.instruction
        assert "or longer" not in recipe.instruction
        assert "leave to stand for ~. \n" in recipe.instruction

    def test_comment_text_repeated_in_mention(self):
        """Each span is rewritten where it is, not at the first matching text."""
        recipe = reduce_document(tokenize("// @salt is optional\nAdd @salt{1}"))
        assert recipe.instruction == "\nAdd @"
        assert len(recipe.metadata.ingredients_specifiers) == 1

    def test_metadata_lines_removed(self):
        """Markers inside metadata values never reach the instruction text."""
        recipe = parse(">> source: chef@example.com #quick\nStir @salt{1}")
        assert recipe.metadata.extra == {"source": "chef@example.com #quick"}
        assert recipe.instruction == "\nStir @"
        assert len(recipe.metadata.ingredients_specifiers) == 1
        assert recipe.metadata.cookware == ()

    def test_plain_text_preserved(self):
        text = "Whisk briskly, then add @milk{200%ml} slowly."
        recipe = reduce_document(tokenize(text))
        assert recipe.instruction == "Whisk briskly, then add @ slowly."
        assert recipe.source == text


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    """Every inconsistency aborts the reduction."""

    def test_unit_mismatch(self):
        with pytest.raises(UnitMismatchError) as exc_info:
            reduce_document(tokenize("Add @x{1%g}\nThen @x{1%kg}"))
        error = exc_info.value
        assert error.ingredient == "x"
        assert error.expected_unit == "g"
        assert error.found_unit == "kg"
        assert error.span.line == 2
        assert "line 2, column 6" in str(error)

    def test_missing_unit_is_a_mismatch(self):
        with pytest.raises(UnitMismatchError):
            reduce_document(tokenize("Add @salt{1}, then @salt{1%g}"))

    def test_variant_mismatch(self):
        with pytest.raises(AmountAlgebraError) as exc_info:
            reduce_document(tokenize("Add @x{1}, then @x{1*}"))
        assert exc_info.value.text == "@x{1*}"

    def test_bracket_count_mismatch(self):
        with pytest.raises(AmountAlgebraError, match="brackets"):
            reduce_document(tokenize("Add @rice{1|2}, then @rice{1|2|3}"))

    def test_scaling_after_brackets(self):
        with pytest.raises(AmountAlgebraError) as exc_info:
            reduce_document(tokenize("Add @rice{1|2*}"))
        assert exc_info.value.text == "*"

    @pytest.mark.parametrize(
        "text,token",
        [
            ("Add @x{1*|2}", "|"),
            ("Add @x{1*2}", "2"),
            ("Add @x{*}", "*"),
            ("Add @x{|2}", "|"),
        ],
    )
    def test_illegal_transition(self, text, token):
        """A scaled or missing amount cannot take further numbers or brackets."""
        with pytest.raises(AmountAlgebraError) as exc_info:
            parse(text)
        assert exc_info.value.text == token
        assert exc_info.value.span.line == 1

    def test_bad_servings(self):
        with pytest.raises(NumericParseError) as exc_info:
            reduce_document(tokenize(">> servings: 1|two"))
        assert exc_info.value.value == "two"
        assert exc_info.value.expected == "servings count"

    def test_bad_quantity(self):
        with pytest.raises(NumericParseError) as exc_info:
            reduce_document(tokenize("Add @salt{a pinch}"))
        assert exc_info.value.value == "a pinch"

    def test_bad_timer(self):
        with pytest.raises(NumericParseError, match="timer duration"):
            reduce_document(tokenize("Wait ~{ten%minutes}"))

    def test_division_by_zero(self):
        with pytest.raises(AmountAlgebraError, match="zero"):
            reduce_document(tokenize("Add @salt{1/0}"))


# =============================================================================
# Parse tree interface
# =============================================================================


class TestReducerInterface:
    """The reducer only depends on the parse tree, not on the tokenizer."""

    def test_hand_built_tree(self):
        text = "Use @sugar{1|2}"

        def at(start, end):
            return Span(start=start, end=end, line=1, column=start + 1)

        ingredient = IngredientSpan(
            tokens=(
                Token(TokenKind.NAME, "sugar", at(5, 10)),
                Token(TokenKind.NUMBER, "1", at(11, 12), parts=("1",)),
                Token(TokenKind.SEPARATOR, "|", at(12, 13)),
                Token(TokenKind.NUMBER, "2", at(13, 14), parts=("2",)),
            ),
            text="@sugar{1|2}",
            span=at(4, 15),
        )
        document = Document(
            text=text, nodes=(Step(children=(ingredient,), text=text, span=at(0, 15)),)
        )

        recipe = RecipeReducer(document).reduce()

        assert recipe.instruction == "Use @"
        assert recipe.metadata.ingredients["sugar"].amount == Servings([1, 2])


class TestNumberParsing:
    """Tests for the numeric helpers."""

    @pytest.mark.parametrize("text,value", [("2", 2.0), ("0.5", 0.5), (".25", 0.25), ("3.", 3.0)])
    def test_parse_quantity(self, text, value):
        assert parse_quantity(text) == value

    @pytest.mark.parametrize("text", ["", "-1", "1e3", "nan", "1_000", "½"])
    def test_parse_quantity_rejects(self, text):
        with pytest.raises(NumericParseError):
            parse_quantity(text)

    def test_parse_count(self):
        assert parse_count("12") == 12
        with pytest.raises(NumericParseError):
            parse_count("1.5")


class TestParseEntryPoint:
    """parse() and reduce_document() agree on trimmed input."""

    def test_same_result(self, pancakes_recipe):
        assert parse(pancakes_recipe) == reduce_document(tokenize(pancakes_recipe.strip()))
