"""
AssistKit — Integer Literal Decomposition
==========================================
Splits the raw text of an integer token into prefix, digits and suffix.
Separators stay in `digits`; normalization happens at grouping time.
"""

from assistkit.models import NumberLiteral, NumberLiteralType
from assistkit.syntax.base import SyntaxKind, Token

_PREFIXES = {
    "0x": NumberLiteralType.HEX,
    "0o": NumberLiteralType.OCTAL,
    "0b": NumberLiteralType.BINARY,
}


class NotALiteral(ValueError):
    """The token is not an integer literal."""


def decompose(token_text: str, known_suffix_len: int = 0) -> NumberLiteral:
    if known_suffix_len < 0 or known_suffix_len > len(token_text):
        raise ValueError(
            f"Suffix length {known_suffix_len} does not fit token {token_text!r}"
        )
    split_at = len(token_text) - known_suffix_len
    non_suffix, suffix = token_text[:split_at], token_text[split_at:]

    # Prefixes are case-sensitive: "0X1F" is not recognised as hex.
    maybe_prefix = non_suffix[:2] if len(non_suffix) >= 2 else None
    number_type = _PREFIXES.get(maybe_prefix, NumberLiteralType.DECIMAL)
    prefix = maybe_prefix if number_type is not NumberLiteralType.DECIMAL else None

    return NumberLiteral(
        number_type=number_type,
        digits=non_suffix[len(prefix or ""):],
        prefix=prefix,
        suffix=suffix or None,
    )


def decompose_token(token: Token) -> NumberLiteral:
    if token.kind is not SyntaxKind.INT_NUMBER:
        raise NotALiteral(f"{token.kind.value} token {token.text!r} is not an integer literal")
    return decompose(token.text, token.suffix_len)
