"""Legal amount line for printed checks - dollars written out in English words"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union
from echeck_gateway.domain.exceptions import InvalidAmountError, AmountOutOfRangeError

ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# One thousands group only: 999,999.99 is the largest writable amount
MAX_WHOLE_DOLLARS = 999_999

Number = Union[Decimal, int, float, str]


def to_cents_decimal(amount: Number) -> Decimal:
    """
    Normalise an amount to a Decimal quantised to cents.

    Floats go through str() so 450.5 becomes Decimal("450.50"), not its binary expansion.

    Raises:
        InvalidAmountError: For negative, NaN, infinite, or non-numeric input
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Amount must be numeric, got {amount!r}")

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidAmountError(f"Amount must be numeric, got {amount!r}") from e

    if not value.is_finite():
        raise InvalidAmountError(f"Amount must be finite, got {amount!r}")
    if value < 0:
        raise InvalidAmountError(f"Amount must not be negative, got {amount!r}")

    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def convert_group(n: int) -> str:
    """
    Convert 0-999 to words, each word followed by a single space.

    Teens use their own word and never take a trailing ones word (14 → "Fourteen ").
    """
    if n == 0:
        return ""

    words = ""
    if n >= 100:
        words += ONES[n // 100] + " Hundred "
        n %= 100

    if n >= 20:
        words += TENS[n // 10] + " "
        n %= 10
    elif n >= 10:
        return words + TEENS[n - 10] + " "

    if n > 0:
        words += ONES[n] + " "

    return words


def amount_to_words(amount: Number) -> str:
    """
    Write a USD amount the way it appears on the legal line of a check.

    Requirements:
    - Whole dollars in words, "Zero" when below one dollar
    - Thousands group followed by "Thousand", then the remainder group
    - Cents as a two-digit fraction over 100

    Raises:
        InvalidAmountError: Negative or non-finite amount
        AmountOutOfRangeError: Amount of one million dollars or more

    Example:
        1250.00 → "*** One Thousand Two Hundred Fifty and 00/100 Dollars ***"
    """
    value = to_cents_decimal(amount)
    whole = int(value)
    cents = int((value - whole) * 100)

    if whole > MAX_WHOLE_DOLLARS:
        raise AmountOutOfRangeError(
            f"Amounts of $1,000,000 or more cannot be written on a check, got {value}"
        )

    if whole == 0:
        result = "Zero"
    else:
        thousands, remainder = divmod(whole, 1000)
        result = ""
        if thousands:
            result += convert_group(thousands) + "Thousand "
        result += convert_group(remainder)

    return f"*** {result.rstrip()} and {cents:02d}/100 Dollars ***"
