"""Semantic reduction of the parse tree into a Recipe."""

from cookdoc.reduce.edits import Edit, TextEditor
from cookdoc.reduce.reducer import RecipeReducer, parse_count, parse_quantity, reduce_document

__all__ = [
    "Edit",
    "RecipeReducer",
    "TextEditor",
    "parse_count",
    "parse_quantity",
    "reduce_document",
]
