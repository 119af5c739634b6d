"""Exception types raised while turning recipe markup into a Recipe."""

from typing import Any


class CookdocError(Exception):
    """Base exception for recipe parsing errors."""

    def __init__(self, message: str, text: str | None = None, span: Any = None):
        super().__init__(message)
        self.message = message
        self.text = text
        self.span = span

    def locate(self, text: str, span: Any) -> "CookdocError":
        """Attach source context if the error does not carry any yet."""
        if self.text is None:
            self.text = text
        if self.span is None:
            self.span = span
        return self

    def __str__(self) -> str:
        parts = []
        if self.span is not None:
            parts.append(f"line {self.span.line}, column {self.span.column}")
        if self.text is not None:
            parts.append(repr(self.text))
        if parts:
            return f"{self.message} ({': '.join(parts)})"
        return self.message


class GrammarError(CookdocError):
    """Raised when the input does not follow the recipe markup."""


class NumericParseError(CookdocError):
    """Raised when a servings count, quantity or timer duration is not a number."""

    def __init__(
        self,
        message: str,
        value: str,
        expected: str = "number",
        text: str | None = None,
        span: Any = None,
    ):
        super().__init__(message, text=text, span=span)
        self.value = value
        self.expected = expected


class AmountAlgebraError(CookdocError):
    """Raised on an illegal amount transition or addition."""


class UnitMismatchError(CookdocError):
    """Raised when two mentions of one ingredient declare different units."""

    def __init__(
        self,
        ingredient: str,
        expected_unit: str | None,
        found_unit: str | None,
        text: str | None = None,
        span: Any = None,
    ):
        super().__init__(
            f"Ingredient '{ingredient}' is measured in {expected_unit!r}, got {found_unit!r}",
            text=text,
            span=span,
        )
        self.ingredient = ingredient
        self.expected_unit = expected_unit
        self.found_unit = found_unit
