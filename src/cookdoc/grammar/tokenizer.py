"""Tokenizer turning recipe markup into a typed parse tree.

Markup summary::

    >> servings: 1|2|3           metadata line (servings split on '|')
    // note                      comment line
    Crack @eggs{2|4|6} into a #bowl and whisk for ~{2%minutes}.
    Add @plain flour{250*%g}(sifted) // comment to end of line

Ingredient amounts are a run of numbers, ``|`` bracket separators and ``*``
scaling markers, optionally followed by ``%unit``. A number is one or more
pieces separated by ``/``. Which runs make sense is left to the reducer.
"""

import re

from cookdoc.errors import GrammarError
from cookdoc.grammar.nodes import (
    Comment,
    CookwareSpan,
    Document,
    DocumentNode,
    IngredientSpan,
    MetadataLine,
    Span,
    Step,
    StepChild,
    TimerSpan,
    Token,
    TokenKind,
)
from cookdoc.logging_config import get_logger

logger = get_logger(__name__)

METADATA_PREFIX = ">>"
COMMENT_PREFIX = "//"
SERVINGS_KEY = "servings"

# Name of a braced mention: may hold spaces, stops at other mentions and braces
_MULTIWORD = r"(?P<name>[^\s@#~{}](?:(?!//)[^@#~{}])*?)\{(?P<body>[^{}]*)\}"
_SINGLE_WORD = r"(?P<word>\w+(?:-\w+)*)"

INGREDIENT_PATTERN = re.compile(
    rf"@(?:{_MULTIWORD}(?:\((?P<modified>[^()]*)\))?|{_SINGLE_WORD})"
)
COOKWARE_PATTERN = re.compile(rf"#(?:{_MULTIWORD}|{_SINGLE_WORD})")
TIMER_PATTERN = re.compile(r"~\{(?P<body>[^{}]*)\}")

METADATA_PATTERN = re.compile(r">>\s*(?P<key>[^:]*?)\s*:\s*(?P<value>.*?)\s*$")
# In metadata a comment must follow whitespace so URLs survive
METADATA_COMMENT_PATTERN = re.compile(r"(?:^|(?<=\s))//")
QUANTITY_CHUNK_PATTERN = re.compile(r"[|*/]|[^|*/]+")
WORD_PATTERN = re.compile(r"\S+")


class Tokenizer:
    """Splits recipe text into metadata lines, comments and steps."""

    def __init__(self, text: str):
        self.text = text
        self._nodes: list[DocumentNode] = []
        self._line_no = 0
        self._line_start = 0

    def tokenize(self) -> Document:
        """Tokenize the whole text."""
        offset = 0
        for line_no, raw in enumerate(self.text.split("\n"), start=1):
            self._line_no = line_no
            self._line_start = offset
            self._tokenize_line(raw.rstrip("\r"))
            offset += len(raw) + 1

        logger.debug(f"Tokenized {self._line_no} lines into {len(self._nodes)} nodes")
        return Document(text=self.text, nodes=tuple(self._nodes))

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------

    def _tokenize_line(self, line: str) -> None:
        stripped = line.lstrip()
        if not stripped:
            return
        indent = len(line) - len(stripped)

        if stripped.startswith(COMMENT_PREFIX):
            self._nodes.append(self._comment(line, indent))
        elif stripped.startswith(METADATA_PREFIX):
            self._tokenize_metadata(line, indent)
        else:
            self._nodes.append(self._tokenize_step(line, indent))

    def _tokenize_metadata(self, line: str, indent: int) -> None:
        comment_match = METADATA_COMMENT_PATTERN.search(line, indent)
        comment_at = comment_match.start() if comment_match else len(line)
        body = line[indent:comment_at].rstrip()

        match = METADATA_PATTERN.match(body)
        span = self._span(indent, indent + len(body))
        if not match:
            raise GrammarError("Metadata line must look like '>> key: value'", text=body, span=span)
        key = match.group("key")
        if not key:
            raise GrammarError("Metadata line has an empty key", text=body, span=span)

        value = match.group("value")
        servings = None
        if key == SERVINGS_KEY:
            servings = tuple(piece.strip() for piece in value.split("|"))

        self._nodes.append(
            MetadataLine(key=key, value=value, text=body, span=span, servings=servings)
        )
        if comment_match:
            self._nodes.append(self._comment(line, comment_at))

    def _tokenize_step(self, line: str, indent: int) -> Step:
        children: list[StepChild] = []
        i = indent
        while i < len(line):
            if line.startswith(COMMENT_PREFIX, i):
                children.append(self._comment(line, i))
                break

            char = line[i]
            if char == "@":
                child: StepChild = self._ingredient(line, i)
            elif char == "#":
                child = self._cookware(line, i)
            elif char == "~":
                child = self._timer(line, i)
            else:
                i += 1
                continue

            children.append(child)
            i = child.span.end - self._line_start

        return Step(
            children=tuple(children),
            text=line[indent:],
            span=self._span(indent, len(line)),
        )

    def _comment(self, line: str, at: int) -> Comment:
        return Comment(text=line[at:], span=self._span(at, len(line)))

    # -------------------------------------------------------------------------
    # Mentions
    # -------------------------------------------------------------------------

    def _ingredient(self, line: str, at: int) -> IngredientSpan:
        match = INGREDIENT_PATTERN.match(line, at)
        if not match:
            raise self._stray(line, at, "ingredient")

        if match.group("word") is not None:
            tokens = self._words(match.group("word"), match.start("word"))
        else:
            tokens = self._words(match.group("name"), match.start("name"))
            tokens += self._amount(match.group("body"), match.start("body"))
            if match.group("modified") is not None:
                start = match.start("modified")
                tokens.append(
                    Token(
                        TokenKind.MODIFIED,
                        match.group("modified"),
                        self._span(start, match.end("modified")),
                    )
                )

        return IngredientSpan(
            tokens=tuple(tokens),
            text=match.group(),
            span=self._span(match.start(), match.end()),
        )

    def _cookware(self, line: str, at: int) -> CookwareSpan:
        match = COOKWARE_PATTERN.match(line, at)
        if not match:
            raise self._stray(line, at, "cookware")

        if match.group("word") is not None:
            tokens = self._words(match.group("word"), match.start("word"))
        else:
            if match.group("body").strip():
                raise GrammarError(
                    "Cookware does not take a quantity",
                    text=match.group(),
                    span=self._span(match.start(), match.end()),
                )
            tokens = self._words(match.group("name"), match.start("name"))

        return CookwareSpan(
            tokens=tuple(tokens),
            text=match.group(),
            span=self._span(match.start(), match.end()),
        )

    def _timer(self, line: str, at: int) -> TimerSpan:
        match = TIMER_PATTERN.match(line, at)
        if not match:
            raise self._stray(line, at, "timer")

        body = match.group("body")
        body_at = match.start("body")
        duration, percent, unit = body.partition("%")
        if not duration.strip():
            raise GrammarError(
                "Timer needs a duration",
                text=match.group(),
                span=self._span(match.start(), match.end()),
            )

        duration_text = duration.strip()
        duration_at = body_at + len(duration) - len(duration.lstrip())
        tokens = [
            Token(
                TokenKind.NUMBER,
                duration_text,
                self._span(duration_at, duration_at + len(duration_text)),
                parts=(duration_text,),
            )
        ]
        if percent:
            tokens.append(self._unit(unit, body_at + len(duration) + 1))

        return TimerSpan(
            tokens=tuple(tokens),
            text=match.group(),
            span=self._span(match.start(), match.end()),
        )

    # -------------------------------------------------------------------------
    # Sub-tokens
    # -------------------------------------------------------------------------

    def _words(self, name: str, at: int) -> list[Token]:
        tokens = []
        for match in WORD_PATTERN.finditer(name):
            kind = TokenKind.TEXT if tokens else TokenKind.NAME
            tokens.append(
                Token(kind, match.group(), self._span(at + match.start(), at + match.end()))
            )
        return tokens

    def _unit(self, unit: str, at: int) -> Token:
        unit_text = unit.strip()
        if not unit_text:
            raise GrammarError("Missing unit after '%'", text=unit, span=self._span(at - 1, at))
        start = at + len(unit) - len(unit.lstrip())
        return Token(TokenKind.UNIT, unit_text, self._span(start, start + len(unit_text)))

    def _amount(self, body: str, at: int) -> list[Token]:
        """
        Split the inside of ``{...}`` into number, separator, scaling and unit tokens.

        Only the shape of each number is checked here. Whether a separator or
        scaling marker may follow what came before is decided by the amount
        algebra while reducing.
        """
        quantity, percent, unit = body.partition("%")
        tokens: list[Token] = []
        pieces: list[tuple[str, int, int]] = []
        after_slash = False

        def close_number() -> None:
            if not pieces:
                return
            start, end = pieces[0][1], pieces[-1][2]
            tokens.append(
                Token(
                    TokenKind.NUMBER,
                    body[start - at : end - at],
                    self._span(start, end),
                    parts=tuple(piece for piece, _, _ in pieces),
                )
            )
            pieces.clear()

        for match in QUANTITY_CHUNK_PATTERN.finditer(quantity):
            chunk = match.group()
            where = at + match.start()
            if chunk.isspace():
                continue

            if chunk in ("/", "|", "*") and after_slash:
                raise GrammarError(
                    "Expected a number after '/'",
                    text=body,
                    span=self._span(where, where + 1),
                )
            if chunk == "/":
                if not pieces:
                    raise GrammarError(
                        "Expected a number before '/'",
                        text=body,
                        span=self._span(where, where + 1),
                    )
                after_slash = True
            elif chunk in ("|", "*"):
                close_number()
                kind = TokenKind.SEPARATOR if chunk == "|" else TokenKind.SCALING
                tokens.append(Token(kind, chunk, self._span(where, where + 1)))
            else:
                piece = chunk.strip()
                start = where + len(chunk) - len(chunk.lstrip())
                pieces.append((piece, start, start + len(piece)))
                after_slash = False

        if after_slash:
            raise GrammarError(
                "Expected a number after '/'",
                text=body,
                span=self._span(at, at + len(body)),
            )
        close_number()
        if tokens and tokens[-1].kind == TokenKind.SEPARATOR:
            raise GrammarError(
                "Expected a number after '|'",
                text=body,
                span=tokens[-1].span,
            )

        if percent:
            tokens.append(self._unit(unit, at + len(quantity) + 1))
        return tokens

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _span(self, start: int, end: int) -> Span:
        """Build a span from offsets relative to the current line."""
        return Span(
            start=self._line_start + start,
            end=self._line_start + end,
            line=self._line_no,
            column=start + 1,
        )

    def _stray(self, line: str, at: int, kind: str) -> GrammarError:
        return GrammarError(
            f"'{line[at]}' does not start a valid {kind}",
            text=line[at : at + 20],
            span=self._span(at, at + 1),
        )


def tokenize(text: str) -> Document:
    """Tokenize recipe markup into a Document tree."""
    return Tokenizer(text).tokenize()
