"""Half-open text ranges measured in `str` indices."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TextRange:
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid text range: {self.start}..{self.end}")

    @classmethod
    def offset_len(cls, start: int, length: int) -> "TextRange":
        return cls(start, start + length)

    @classmethod
    def empty(cls, offset: int) -> "TextRange":
        return cls(offset, offset)

    @property
    def len(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        # Inclusive on both ends: a caret right after the last char still touches the range.
        return self.start <= offset <= self.end

    def contains_range(self, other: "TextRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def intersects(self, other: "TextRange") -> bool:
        return self.start < other.end and other.start < self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
