"""
Caret markers in fixture text.

`<|>` marks a caret; two markers mark a selection. Used by the CLI's
`--marked` mode and by the test helpers.
"""

from typing import Tuple, Union

from assistkit.edit.text_range import TextRange

CURSOR_MARKER = "<|>"

RangeOrOffset = Union[int, TextRange]


def extract_offset(text: str) -> Tuple[int, str]:
    offset = text.find(CURSOR_MARKER)
    if offset < 0:
        raise ValueError(f"Text should contain cursor marker {CURSOR_MARKER}")
    return offset, text[:offset] + text[offset + len(CURSOR_MARKER):]


def try_extract_offset(text: str) -> Tuple[Union[int, None], str]:
    try:
        return extract_offset(text)
    except ValueError:
        return None, text


def extract_range(text: str) -> Tuple[TextRange, str]:
    start, text = extract_offset(text)
    end, text = extract_offset(text)
    return TextRange(start, end), text


def extract_range_or_offset(text: str) -> Tuple[RangeOrOffset, str]:
    start, text = extract_offset(text)
    end, stripped = try_extract_offset(text)
    if end is None:
        return start, text
    return TextRange(start, end), stripped


def as_range(range_or_offset: RangeOrOffset) -> TextRange:
    if isinstance(range_or_offset, TextRange):
        return range_or_offset
    return TextRange.empty(range_or_offset)


def add_cursor(text: str, offset: int) -> str:
    return text[:offset] + CURSOR_MARKER + text[offset:]
