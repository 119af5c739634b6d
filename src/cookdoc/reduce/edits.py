"""Positional rewriting of the instruction text."""

from dataclasses import dataclass, field

from cookdoc.grammar.nodes import Span


@dataclass(frozen=True, order=True)
class Edit:
    """Replace text[start:end] with ``replacement``."""

    start: int
    end: int
    replacement: str = ""


@dataclass
class TextEditor:
    """Collects non-overlapping edits and applies them in one pass."""

    edits: list[Edit] = field(default_factory=list)

    def replace(self, span: Span, replacement: str) -> None:
        """Replace the text covered by ``span``."""
        self.edits.append(Edit(span.start, span.end, replacement))

    def remove(self, span: Span) -> None:
        """Remove the text covered by ``span``."""
        self.edits.append(Edit(span.start, span.end))

    def apply(self, text: str) -> str:
        """
        Rewrite ``text`` with all collected edits.

        Raises:
            ValueError: If edits overlap or fall outside the text.
        """
        pieces = []
        position = 0
        for edit in sorted(self.edits):
            if edit.start < position:
                raise ValueError(f"Edit at {edit.start} overlaps a previous edit ending at {position}")
            if edit.end > len(text) or edit.start > edit.end:
                raise ValueError(f"Edit {edit.start}:{edit.end} is outside the text")
            pieces.append(text[position : edit.start])
            pieces.append(edit.replacement)
            position = edit.end
        pieces.append(text[position:])
        return "".join(pieces)
