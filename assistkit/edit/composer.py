"""
AssistKit — Edit Composer
==========================
Accumulates the operations of one assist together with its highlight
target and explicit cursor, and hands back a single `ComposedEdit`.

Handlers never add offsets by hand: positions after earlier insertions
are obtained through `EditComposer.translate`.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from assistkit.edit.text_edit import EditOperation, TextEdit
from assistkit.edit.text_range import TextRange


@dataclass(frozen=True)
class ComposedEdit:
    """An atomic edit: operations, optional target range and optional cursor."""
    edit: TextEdit
    target: Optional[TextRange] = None
    cursor: Optional[int] = None

    @property
    def operations(self):
        return self.edit.operations

    def finalize(self, buffer: str) -> Tuple[str, Callable[[int], int]]:
        return self.edit.finalize(buffer)

    def apply(self, buffer: str) -> str:
        return self.edit.apply(buffer)

    def translate(self, offset: int) -> int:
        return self.edit.translate(offset)

    def cursor_in(self, new_text: str) -> Optional[int]:
        if self.cursor is None:
            return None
        if not 0 <= self.cursor <= len(new_text):
            raise ValueError(
                f"Cursor {self.cursor} is outside the edited buffer of length {len(new_text)}"
            )
        return self.cursor

    def to_dict(self) -> dict:
        return {
            "operations": [op.to_dict() for op in self.edit],
            "target": [self.target.start, self.target.end] if self.target else None,
            "cursor": self.cursor,
        }


class EditComposer:
    """Builder handed to an assist's resolve step."""

    def __init__(self):
        self._operations: List[EditOperation] = []
        self._target: Optional[TextRange] = None
        self._cursor: Optional[int] = None

    def target(self, range: TextRange) -> None:
        self._target = range

    def insert(self, offset: int, text: str) -> None:
        self._operations.append(EditOperation.insert_at(offset, text))

    def replace(self, range: TextRange, text: str) -> None:
        self._operations.append(EditOperation.replace_range(range, text))

    def delete(self, range: TextRange) -> None:
        self._operations.append(EditOperation.delete_range(range))

    def set_cursor(self, offset: int) -> None:
        self._cursor = offset

    def current_edit(self) -> TextEdit:
        """The operations composed so far, validated."""
        return TextEdit(self._operations)

    def translate(self, offset: int) -> int:
        return self.current_edit().translate(offset)

    def finish(self) -> ComposedEdit:
        return ComposedEdit(
            edit=self.current_edit(),
            target=self._target,
            cursor=self._cursor,
        )


def apply_edit(buffer: str, composed: ComposedEdit) -> str:
    """Apply a composed edit to a buffer, returning the new text."""
    return composed.apply(buffer)
