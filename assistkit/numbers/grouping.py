"""
AssistKit — Digit Grouping
===========================
Right-aligned chunking of a digit string with `_` separators.

`group` strips any existing separators first, so regrouping an already
grouped (or irregularly grouped) literal is idempotent.
"""

import string

from assistkit.models import NumberLiteralType

DIGIT_SEPARATOR = "_"

_RADIX_ALPHABETS = {
    NumberLiteralType.DECIMAL: frozenset(string.digits),
    NumberLiteralType.HEX: frozenset(string.hexdigits),
    NumberLiteralType.OCTAL: frozenset(string.octdigits),
    NumberLiteralType.BINARY: frozenset("01"),
}


def strip(digits: str) -> str:
    """Remove every separator character."""
    return digits.replace(DIGIT_SEPARATOR, "")


def has_separator(text: str) -> bool:
    return DIGIT_SEPARATOR in text


def group(digits: str, group_size: int) -> str:
    """
    Group `digits` from the right into chunks of `group_size`.

    The leftmost chunk absorbs the remainder:
    group("24204242420", 4) == "242_0424_2420".
    """
    if group_size <= 0:
        raise ValueError(f"Group size must be positive, got {group_size}")

    canonical = strip(digits)
    offset = group_size - (len(canonical) % group_size)

    result = []
    for i, digit in enumerate(canonical):
        if i != 0 and (i + offset) % group_size == 0:
            result.append(DIGIT_SEPARATOR)
        result.append(digit)
    return "".join(result)


def is_valid_digits(digits: str, number_type: NumberLiteralType) -> bool:
    """True when every non-separator character belongs to the kind's radix."""
    canonical = strip(digits)
    alphabet = _RADIX_ALPHABETS[number_type]
    return bool(canonical) and all(c in alphabet for c in canonical)
