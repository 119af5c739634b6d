"""Amount algebra for ingredient quantities.

An ingredient mention carries one of three mutually exclusive shapes:

- ``Single``: a fixed quantity.
- ``Multi``: a quantity multiplied by the requested servings at render time
  (the mention carried the ``*`` scaling marker).
- ``Servings``: one quantity per declared serving bracket (``1|2|3``).

The functions below are the only legal transitions between them. Anything
else raises ``AmountAlgebraError`` instead of coercing.
"""

from collections.abc import Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from cookdoc.errors import AmountAlgebraError

# Value of a bracket slot opened by a separator but not yet filled
PLACEHOLDER = 0.0


class BaseAmount(BaseModel):
    """Base class for all amount variants."""

    model_config = ConfigDict(frozen=True)

    def __add__(self, other: Any) -> "Amount":
        if not isinstance(other, BaseAmount):
            return NotImplemented
        return add(self, other)


class Single(BaseAmount):
    """An absolute quantity."""

    kind: Literal["single"] = "single"
    value: float

    def __init__(self, value: float, **data: Any):
        super().__init__(value=value, **data)


class Multi(BaseAmount):
    """An absolute quantity to be multiplied by the servings count."""

    kind: Literal["multi"] = "multi"
    value: float

    def __init__(self, value: float, **data: Any):
        super().__init__(value=value, **data)


class Servings(BaseAmount):
    """One quantity per serving bracket, aligned with Metadata.servings."""

    kind: Literal["servings"] = "servings"
    values: tuple[float, ...] = Field(min_length=1)

    def __init__(self, values: Sequence[float], **data: Any):
        super().__init__(values=tuple(values), **data)


Amount = Annotated[Union[Single, Multi, Servings], Field(discriminator="kind")]


def add(a: BaseAmount, b: BaseAmount) -> BaseAmount:
    """
    Add two amounts of the same variant.

    Raises:
        AmountAlgebraError: If the variants differ or two Servings amounts
            have a different number of brackets.
    """
    if isinstance(a, Single) and isinstance(b, Single):
        return Single(a.value + b.value)
    if isinstance(a, Multi) and isinstance(b, Multi):
        return Multi(a.value + b.value)
    if isinstance(a, Servings) and isinstance(b, Servings):
        if len(a.values) != len(b.values):
            raise AmountAlgebraError(
                f"Cannot add servings amounts with {len(a.values)} and {len(b.values)} brackets"
            )
        return Servings([x + y for x, y in zip(a.values, b.values)])
    raise AmountAlgebraError(f"Cannot add a {b.kind} amount to a {a.kind} amount")


def promote_to_scalable(a: BaseAmount | None) -> Multi:
    """Turn a fixed quantity into one that scales with servings."""
    if isinstance(a, Single):
        return Multi(a.value)
    if a is None:
        raise AmountAlgebraError("Scaling marker without a quantity")
    raise AmountAlgebraError(f"Scaling marker cannot be applied to a {a.kind} amount")


def extend_with_separator(a: BaseAmount | None) -> Servings:
    """Open the next serving bracket, leaving a placeholder slot."""
    if isinstance(a, Single):
        return Servings([a.value, PLACEHOLDER])
    if isinstance(a, Servings):
        return Servings([*a.values, PLACEHOLDER])
    if a is None:
        raise AmountAlgebraError("Serving bracket separator without a preceding quantity")
    raise AmountAlgebraError(f"Serving bracket separator cannot follow a {a.kind} amount")


def apply_next_number(a: BaseAmount | None, n: float) -> BaseAmount:
    """
    Fold a newly scanned number into the amount under construction.

    The first number starts a Single. Further numbers divide the current
    value (``1/2`` is half), except that a freshly opened serving bracket
    takes the number as its value.
    """
    if a is None:
        return Single(n)
    if isinstance(a, Multi):
        raise AmountAlgebraError("A scaled amount cannot take further numbers")
    if isinstance(a, Single):
        return Single(_divide(a.value, n))

    values = list(a.values)
    if values[-1] == PLACEHOLDER:
        values[-1] = n
    else:
        values[-1] = _divide(values[-1], n)
    return Servings(values)


def _divide(value: float, divisor: float) -> float:
    if divisor == 0:
        raise AmountAlgebraError(f"Cannot divide {value:g} by zero")
    return value / divisor


def quantity_for(
    amount: BaseAmount,
    servings: Sequence[int] | None,
    requested: int,
) -> float:
    """
    Resolve an amount to a plain quantity for a requested serving count.

    Args:
        amount: The amount to resolve.
        servings: The recipe's declared serving brackets, if any.
        requested: Number of servings to cook for.

    Returns:
        The quantity to use.
    """
    if isinstance(amount, Single):
        return amount.value
    if isinstance(amount, Multi):
        return amount.value * requested

    if not servings:
        raise AmountAlgebraError("Per-serving amount in a recipe without a servings declaration")
    if len(servings) != len(amount.values):
        raise AmountAlgebraError(
            f"Amount has {len(amount.values)} brackets but {len(servings)} servings are declared"
        )
    try:
        index = list(servings).index(requested)
    except ValueError:
        raise AmountAlgebraError(f"{requested} is not a declared serving count") from None
    return amount.values[index]
