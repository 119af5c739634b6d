"""Recipe markup grammar: parse tree node types and the tokenizer."""

from cookdoc.grammar.nodes import (
    Comment,
    CookwareSpan,
    Document,
    IngredientSpan,
    MetadataLine,
    Span,
    Step,
    TimerSpan,
    Token,
    TokenKind,
)
from cookdoc.grammar.tokenizer import Tokenizer, tokenize

__all__ = [
    "Comment",
    "CookwareSpan",
    "Document",
    "IngredientSpan",
    "MetadataLine",
    "Span",
    "Step",
    "TimerSpan",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
]
