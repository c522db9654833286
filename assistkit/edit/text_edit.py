"""
AssistKit — Text Edits
=======================
Positioned insert/replace operations and the validated, ordered edit
that applies them to a buffer in one pass.

All offsets are measured in the coordinate space of the ORIGINAL buffer.
Reconciling the shift introduced by earlier operations happens here and
only here, through `TextEdit.translate`.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple

from assistkit.edit.text_range import TextRange


class OverlappingEditError(ValueError):
    """Two operations of the same edit touch the same span of text."""


@dataclass(frozen=True)
class EditOperation:
    """Replace `range` of the original buffer with `text` (empty range = insert)."""
    range: TextRange
    text: str

    @classmethod
    def insert_at(cls, offset: int, text: str) -> "EditOperation":
        return cls(TextRange.empty(offset), text)

    @classmethod
    def replace_range(cls, range: TextRange, text: str) -> "EditOperation":
        return cls(range, text)

    @classmethod
    def delete_range(cls, range: TextRange) -> "EditOperation":
        return cls(range, "")

    @property
    def is_insert(self) -> bool:
        return self.range.is_empty

    @property
    def delta(self) -> int:
        return len(self.text) - self.range.len

    def to_dict(self) -> dict:
        return {"start": self.range.start, "end": self.range.end, "text": self.text}


class TextEdit:
    """
    Immutable set of non-overlapping operations, sorted by start offset.

    Operations may be supplied in any order. Inserts at the same offset
    keep the order in which they were supplied.
    """

    def __init__(self, operations: Iterable[EditOperation] = ()):
        ops = sorted(operations, key=lambda op: (op.range.start, op.range.end))
        for prev, nxt in zip(ops, ops[1:]):
            if nxt.range.start < prev.range.end:
                raise OverlappingEditError(
                    f"Edit operations overlap: {prev.range} and {nxt.range}"
                )
        self._operations: Tuple[EditOperation, ...] = tuple(ops)

    @property
    def operations(self) -> Tuple[EditOperation, ...]:
        return self._operations

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self):
        return iter(self._operations)

    def __eq__(self, other) -> bool:
        return isinstance(other, TextEdit) and self._operations == other._operations

    def __repr__(self) -> str:
        return f"TextEdit({list(self._operations)!r})"

    def apply(self, text: str) -> str:
        parts: List[str] = []
        cursor = 0
        for op in self._operations:
            if op.range.end > len(text):
                raise ValueError(
                    f"Edit operation {op.range} is outside a buffer of length {len(text)}"
                )
            parts.append(text[cursor:op.range.start])
            parts.append(op.text)
            cursor = op.range.end
        parts.append(text[cursor:])
        return "".join(parts)

    def translate(self, offset: int) -> int:
        """
        Map an offset in the original buffer to the same logical position
        in the edited buffer.

        An insertion exactly at `offset` does not move it. An offset strictly
        inside a replaced span maps to the start of the replacement.
        """
        shift = 0
        for op in self._operations:
            if op.range.start >= offset:
                break
            if offset < op.range.end:
                return op.range.start + shift
            shift += op.delta
        return offset + shift

    def finalize(self, buffer: str) -> Tuple[str, Callable[[int], int]]:
        return self.apply(buffer), self.translate
