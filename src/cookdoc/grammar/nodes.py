"""Typed parse tree produced by the tokenizer."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Span:
    """Half-open character range into the tokenized text, with 1-based position."""

    start: int
    end: int
    line: int
    column: int


class TokenKind(str, Enum):
    """Kinds of sub-tokens found inside a mention."""

    NAME = "name"
    TEXT = "text"
    NUMBER = "number"
    SEPARATOR = "ingredient_separator"
    SCALING = "scaling"
    UNIT = "unit"
    MODIFIED = "modified"


@dataclass(frozen=True)
class Token:
    """A sub-token of an ingredient, cookware or timer span."""

    kind: TokenKind
    text: str
    span: Span
    # '/'-separated pieces of a NUMBER token, as written
    parts: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetadataLine:
    """A ``>> key: value`` line."""

    key: str
    value: str
    text: str
    span: Span
    # Raw '|'-separated pieces when the key is "servings"
    servings: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Comment:
    text: str
    span: Span


@dataclass(frozen=True)
class IngredientSpan:
    tokens: tuple[Token, ...]
    text: str
    span: Span


@dataclass(frozen=True)
class CookwareSpan:
    tokens: tuple[Token, ...]
    text: str
    span: Span


@dataclass(frozen=True)
class TimerSpan:
    tokens: tuple[Token, ...]
    text: str
    span: Span


StepChild = IngredientSpan | CookwareSpan | TimerSpan | Comment


@dataclass(frozen=True)
class Step:
    """A line of instructions with its mentions in source order."""

    children: tuple[StepChild, ...]
    text: str
    span: Span


DocumentNode = MetadataLine | Comment | Step


@dataclass(frozen=True)
class Document:
    """Root of the parse tree."""

    text: str
    nodes: tuple[DocumentNode, ...] = field(default_factory=tuple)
