"""Semantic reducer building a Recipe from the parse tree."""

import re
from itertools import count

from cookdoc.errors import CookdocError, NumericParseError, UnitMismatchError
from cookdoc.grammar.nodes import (
    Comment,
    CookwareSpan,
    Document,
    IngredientSpan,
    MetadataLine,
    Step,
    TimerSpan,
    TokenKind,
)
from cookdoc.grammar.tokenizer import SERVINGS_KEY
from cookdoc.logging_config import LoggingContext, get_logger
from cookdoc.model.amount import (
    BaseAmount,
    Single,
    add,
    apply_next_number,
    extend_with_separator,
    promote_to_scalable,
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
from cookdoc.reduce.edits import TextEditor

logger = get_logger(__name__)

QUANTITY_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
COUNT_PATTERN = re.compile(r"[0-9]+")

# Amount recorded for a mention written without a quantity
NO_AMOUNT = Single(0.0)


def parse_quantity(text: str, expected: str = "quantity") -> float:
    """Parse a non-negative decimal number such as ``2``, ``0.5`` or ``.25``."""
    if not QUANTITY_PATTERN.fullmatch(text):
        raise NumericParseError(f"Invalid {expected} '{text}'", value=text, expected=expected)
    return float(text)


def parse_count(text: str, expected: str = "servings count") -> int:
    """Parse an unsigned integer."""
    if not COUNT_PATTERN.fullmatch(text):
        raise NumericParseError(f"Invalid {expected} '{text}'", value=text, expected=expected)
    return int(text)


def _plural(n: int, noun: str) -> str:
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


class RecipeReducer:
    """
    Walks a Document once, in source order, and produces its Recipe.

    The reducer owns the accumulators of a single reduction: the metadata
    tables, the ingredient map and the pending text edits. Any error aborts
    the reduction; no partial Recipe is returned. Instances are single-use.
    """

    def __init__(self, document: Document):
        self.document = document
        self._servings: tuple[int, ...] | None = None
        self._extra: dict[str, str] = {}
        self._ingredients: dict[str, Ingredient] = {}
        self._specifiers: list[IngredientSpecifier] = []
        self._cookware: list[str] = []
        self._timers: list[Timer] = []
        self._editor = TextEditor()
        self._ids = count(1)

    def reduce(self) -> Recipe:
        """Reduce the whole document."""
        for node in self.document.nodes:
            if isinstance(node, MetadataLine):
                self._reduce_metadata(node)
            elif isinstance(node, Comment):
                self._editor.remove(node.span)
            elif isinstance(node, Step):
                with LoggingContext(line=node.span.line):
                    self._reduce_step(node)

        metadata = Metadata(
            servings=self._servings,
            extra=self._extra,
            ingredients=self._ingredients,
            ingredients_specifiers=tuple(self._specifiers),
            cookware=tuple(self._cookware),
            timer=tuple(self._timers),
        )
        recipe = Recipe(
            source=self.document.text,
            metadata=metadata,
            instruction=self._editor.apply(self.document.text),
        )

        logger.info(
            f"Reduced recipe: {_plural(len(self._ingredients), 'ingredient')}, "
            f"{_plural(len(self._specifiers), 'mention')}, "
            f"{len(self._cookware)} cookware, "
            f"{_plural(len(self._timers), 'timer')}"
        )
        return recipe

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def _reduce_metadata(self, node: MetadataLine) -> None:
        # Metadata lives in the tables, not in the instruction text
        self._editor.remove(node.span)

        if node.key != SERVINGS_KEY:
            if node.key in self._extra:
                logger.debug(f"Metadata key '{node.key}' repeated, keeping the last value")
            self._extra[node.key] = node.value
            return

        try:
            self._servings = tuple(parse_count(piece) for piece in node.servings or ())
        except CookdocError as exc:
            raise exc.locate(node.text, node.span)

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _reduce_step(self, node: Step) -> None:
        for child in node.children:
            if isinstance(child, IngredientSpan):
                self._reduce_ingredient(child)
                self._editor.replace(child.span, INGREDIENT_MARKER)
            elif isinstance(child, CookwareSpan):
                self._cookware.append(" ".join(token.text for token in child.tokens))
                self._editor.replace(child.span, COOKWARE_MARKER)
            elif isinstance(child, TimerSpan):
                self._timers.append(self._reduce_timer(child))
                self._editor.replace(child.span, TIMER_MARKER)
            elif isinstance(child, Comment):
                self._editor.remove(child.span)

    def _reduce_ingredient(self, node: IngredientSpan) -> None:
        words: list[str] = []
        amount: BaseAmount | None = None
        unit: str | None = None

        for token in node.tokens:
            try:
                if token.kind in (TokenKind.NAME, TokenKind.TEXT):
                    words.append(token.text)
                elif token.kind == TokenKind.NUMBER:
                    for part in token.parts:
                        amount = apply_next_number(amount, parse_quantity(part))
                elif token.kind == TokenKind.SEPARATOR:
                    amount = extend_with_separator(amount)
                elif token.kind == TokenKind.SCALING:
                    amount = promote_to_scalable(amount)
                elif token.kind == TokenKind.UNIT:
                    unit = token.text
                elif token.kind == TokenKind.MODIFIED:
                    # Modifiers are not part of the document model
                    logger.debug(f"Dropping modifier '{token.text}'")
            except CookdocError as exc:
                raise exc.locate(token.text, token.span)

        name = " ".join(words)
        self._specifiers.append(
            IngredientSpecifier(
                ingredient=name,
                amount_in_step=amount if amount is not None else NO_AMOUNT,
            )
        )

        existing = self._ingredients.get(name)
        if existing is None:
            ingredient = Ingredient(name=name, id=next(self._ids), amount=amount, unit=unit)
            self._ingredients[name] = ingredient
            logger.debug(f"New ingredient '{name}' (id={ingredient.id})")
            return

        if existing.unit != unit:
            raise UnitMismatchError(name, existing.unit, unit, text=node.text, span=node.span)
        if amount is None:
            return
        if existing.amount is None:
            merged = amount
        else:
            try:
                merged = add(existing.amount, amount)
            except CookdocError as exc:
                raise exc.locate(node.text, node.span)
        self._ingredients[name] = existing.model_copy(update={"amount": merged})
        logger.debug(f"Merged mention of ingredient '{name}'")

    def _reduce_timer(self, node: TimerSpan) -> Timer:
        duration = 0.0
        unit = ""
        for token in node.tokens:
            if token.kind == TokenKind.NUMBER:
                try:
                    duration = parse_quantity(token.text, expected="timer duration")
                except CookdocError as exc:
                    raise exc.locate(token.text, token.span)
            else:
                unit = token.text
        return Timer(amount=duration, unit=unit)


def reduce_document(document: Document) -> Recipe:
    """Reduce a parse tree into a Recipe."""
    return RecipeReducer(document).reduce()
