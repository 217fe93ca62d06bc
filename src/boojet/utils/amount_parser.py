"""Amount parsing utilities."""

import re

from boojet.domain.errors import InvalidAmountError
from boojet.domain.money import Money


def parse_amount(amount_str: str) -> Money:
    """Parse an amount string into Money.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    The result is rounded half-up to cents.

    Args:
        amount_str: Amount string

    Returns:
        Money amount

    Raises:
        InvalidAmountError: If amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        raise InvalidAmountError("Empty amount string")

    text = amount_str.strip()

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = re.sub(r"[$\s,]", "", text)
    if text.startswith("-"):
        is_negative = not is_negative
        text = text[1:]

    if not re.fullmatch(r"\d+(\.\d*)?|\.\d+", text):
        raise InvalidAmountError(f"Could not parse amount '{amount_str}'")

    amount = Money.of(text)
    return amount.negate() if is_negative else amount
