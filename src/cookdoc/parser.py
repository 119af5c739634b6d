"""Entry point: recipe markup in, Recipe out."""

from cookdoc.config import get_settings
from cookdoc.errors import CookdocError
from cookdoc.grammar.tokenizer import tokenize
from cookdoc.logging_config import LoggingContext, get_logger
from cookdoc.model.document import Recipe
from cookdoc.reduce.reducer import reduce_document

logger = get_logger(__name__)


def parse(text: str, name: str | None = None) -> Recipe:
    """
    Parse recipe markup into a Recipe.

    Args:
        text: The recipe markup.
        name: Optional label for the recipe, used in log context.

    Returns:
        The reduced Recipe.

    Raises:
        GrammarError: If the text does not follow the markup.
        NumericParseError: If a servings count, quantity or duration is malformed.
        AmountAlgebraError: If an amount combines shapes that cannot be combined.
        UnitMismatchError: If one ingredient is mentioned with different units.
    """
    settings = get_settings()
    source = text.strip() if settings.strip_source else text

    with LoggingContext(recipe=name):
        try:
            return reduce_document(tokenize(source))
        except CookdocError as e:
            logger.error(f"Failed to parse recipe: {e}")
            raise
