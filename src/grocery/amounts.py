"""Free-text amount parsing and combination.

Amounts are the unstructured strings recipes carry ("2 cups", "200g",
"to taste"). Parsing is shallow: a leading integer or decimal
becomes the quantity and whatever is left once digits and periods are removed
becomes the unit. There is no unit conversion, so "1 cup" + "250 ml" sums the
numbers and keeps "cup".
"""

import re
from typing import Optional

from src.models.models import NumericAmount, OpaqueAmount, ParsedAmount


LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)")
NUMBER_CHARS = re.compile(r"[\d.]")
# "{number} {rest}", the only shape servings scaling rewrites
SCALABLE_AMOUNT = re.compile(r"^\s*(\d+(?:\.\d+)?)\s+(\S.*)$")


def unit_of(amount: Optional[str]) -> str:
    """Strip every digit and period from an amount: "2.5 cups" -> "cups"."""
    return NUMBER_CHARS.sub("", amount or "").strip()


def parse_amount(amount: Optional[str]) -> ParsedAmount:
    """Split an amount into quantity and unit.

    Args:
        amount: Free-text amount, None is treated as empty.

    Returns:
        NumericAmount when the text starts with a number, otherwise
        OpaqueAmount holding the trimmed text. Never raises.

    Example:
        >>> parse_amount("2 cups")
        NumericAmount(kind='numeric', quantity=2.0, unit='cups')
        >>> parse_amount("as needed")
        OpaqueAmount(kind='opaque', text='as needed')
    """
    text = amount or ""
    match = LEADING_NUMBER.match(text)
    if not match:
        return OpaqueAmount(text=text.strip())
    return NumericAmount(quantity=float(match.group(1)), unit=unit_of(text))


def format_quantity(quantity: float) -> str:
    """Render a quantity without a trailing ".0" for whole numbers."""
    rounded = round(quantity, 6)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def combine_amounts(left: Optional[str], right: Optional[str]) -> str:
    """Merge the amounts of two occurrences of the same ingredient.

    Rules, in order:
    - an empty side yields the other side unchanged
    - non-numeric sides count as zero; if the total is zero the left text is
      kept as-is (nothing is synthesized from "to taste" + "as needed")
    - otherwise the total is rendered with the first non-empty unit of the
      numeric sides, left first
    """
    if not left and not right:
        return ""
    if not left:
        return right
    if not right:
        return left

    parsed = [parse_amount(left), parse_amount(right)]
    numeric = [p for p in parsed if isinstance(p, NumericAmount)]
    total = sum(p.quantity for p in numeric)

    if total == 0:
        return left

    unit = next((p.unit for p in numeric if p.unit), "")
    return f"{format_quantity(total)} {unit}".strip()


def scale_amount(amount: str, multiplier: float) -> str:
    """Multiply the leading number of a "{number} {rest}" amount.

    The result is rounded to one decimal place; other shapes ("200g",
    "to taste") come back untouched.
    """
    match = SCALABLE_AMOUNT.match(amount or "")
    if not match:
        return amount
    scaled = round(float(match.group(1)) * multiplier, 1)
    return f"{format_quantity(scaled)} {match.group(2)}"
