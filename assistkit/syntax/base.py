"""
AssistKit — Syntax Provider Interface
======================================
The read-only view of a parsed buffer that assists consume: tokens,
covering lookups and parent navigation. Concrete providers live next
to this module (`rust.py`, `python.py`).

The core never mutates a tree and never keeps one beyond a request.
"""

import bisect
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from assistkit.edit.text_range import TextRange


class Language(str, Enum):
    RUST = "rust"
    PYTHON = "python"


class SyntaxKind(str, Enum):
    # Tokens
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    IDENT = "ident"
    LIFETIME = "lifetime"
    INT_NUMBER = "int_number"
    FLOAT_NUMBER = "float_number"
    STRING = "string"
    RAW_STRING = "raw_string"
    BYTE_STRING = "byte_string"
    CHAR = "char"
    BYTE = "byte"
    PUNCT = "punct"
    ERROR = "error"
    # Nodes
    SOURCE_FILE = "source_file"
    MACRO_CALL = "macro_call"
    CALL = "call"
    DELIMITED = "delimited"
    EXPR = "expr"

    @property
    def is_trivia(self) -> bool:
        return self in (SyntaxKind.WHITESPACE, SyntaxKind.COMMENT)

    @property
    def is_call_like(self) -> bool:
        return self in (SyntaxKind.MACRO_CALL, SyntaxKind.CALL)


# `\xHH`, `\u{...}` and a line continuation (with the whitespace it skips)
# are longer than two characters.
_ESCAPE = re.compile(r"\\(?:x[0-9a-fA-F]{0,2}|u\{[^}\\]*\}?|\r?\n\s*|[\s\S])")


@dataclass(frozen=True)
class Token:
    """One lexical token. `suffix_len` counts a trailing type suffix (e.g. `u32`)."""
    kind: SyntaxKind
    text: str
    range: TextRange
    suffix_len: int = 0
    quote_len: int = 1
    prefix_len: int = 0

    def between_quotes(self) -> Optional[TextRange]:
        """Interior of a quoted string token, excluding prefix and quotes."""
        if self.kind not in (SyntaxKind.STRING, SyntaxKind.RAW_STRING, SyntaxKind.BYTE_STRING):
            return None
        open_len = self.prefix_len + self.quote_len
        if self.range.len < open_len + self.quote_len:
            # Unterminated string
            return None
        return TextRange(self.range.start + open_len, self.range.end - self.quote_len)

    def escape_ranges(self) -> List[TextRange]:
        """Absolute ranges of backslash escapes in a plain string token."""
        if self.kind is not SyntaxKind.STRING:
            return []
        interior = self.between_quotes()
        if interior is None:
            return []
        base = interior.start - self.range.start
        text = self.text[base:base + interior.len]
        return [
            TextRange(interior.start + m.start(), interior.start + m.end())
            for m in _ESCAPE.finditer(text)
        ]


@dataclass(eq=False)
class Node:
    """A structural node. Call-like nodes carry their callee path text."""
    kind: SyntaxKind
    range: TextRange
    callee: Optional[str] = None

    def __repr__(self) -> str:
        suffix = f" {self.callee}" if self.callee else ""
        return f"Node({self.kind.value}{suffix} @ {self.range})"


Element = Union[Token, Node]


@dataclass(frozen=True)
class SplitStyle:
    """How the fragments of a split string are wrapped and separated."""
    concat_callee: str
    wrapper_open: str
    wrapper_close: str
    separator: str
    cursor_shift: int
    # Only a call of this kind and callee is reused as the wrapper
    concat_kind: SyntaxKind = SyntaxKind.MACRO_CALL


class SyntaxTree:
    """
    Base class for syntax providers.

    Subclasses fill `tokens` (sorted, contiguous or not) and `_parents`
    (element -> innermost enclosing node) in their constructor.
    """

    language: Language = None
    split_style: Optional[SplitStyle] = None

    def __init__(self, text: str):
        self.text = text
        self.tokens: List[Token] = []
        self.nodes: List[Node] = []
        self._parents: Dict[tuple, Optional[Node]] = {}
        self._starts: List[int] = []

    def _index(self) -> None:
        self.tokens.sort(key=lambda t: (t.range.start, t.range.end))
        self._starts = [t.range.start for t in self.tokens]

    def _set_parent(self, element: Element, parent: Optional[Node]) -> None:
        self._parents[self._key(element)] = parent

    @staticmethod
    def _key(element: Element):
        if isinstance(element, Token):
            return ("token", element.range, element.kind)
        return ("node", id(element))

    # ── Queries ────────────────────────────────────────────────────────────

    def covering_token(
        self,
        range: TextRange,
        kinds: Optional[Iterable[SyntaxKind]] = None,
    ) -> Optional[Token]:
        """
        Smallest token containing `range`.

        For an empty range on a token boundary both neighbours touch the
        offset; a token of one of `kinds` wins, then a non-trivia token,
        then the right-hand one.
        """
        wanted = set(kinds) if kinds is not None else None
        candidates = self._touching(range)
        if not candidates:
            return None

        def rank(token: Token) -> Tuple[int, int, int]:
            return (
                0 if wanted is None or token.kind in wanted else 1,
                1 if token.kind.is_trivia else 0,
                -token.range.start,
            )

        best = min(candidates, key=rank)
        if wanted is not None and best.kind not in wanted:
            return None
        return best

    def _touching(self, range: TextRange) -> List[Token]:
        idx = bisect.bisect_right(self._starts, range.start)
        found = []
        for token in self.tokens[max(0, idx - 2):idx + 1]:
            r = token.range
            if range.is_empty:
                if r.contains(range.start):
                    found.append(token)
            elif r.contains_range(range):
                found.append(token)
        return found

    def covering_node(self, range: TextRange) -> Optional[Node]:
        """Innermost node whose range contains `range`."""
        best = None
        for node in self.nodes:
            if node.range.contains_range(range):
                if best is None or node.range.len <= best.range.len:
                    best = node
        return best

    def parent_of(self, element: Element) -> Optional[Node]:
        return self._parents.get(self._key(element))

    def node_kind(self, node: Node) -> SyntaxKind:
        return node.kind

    def callee_name(self, node: Node) -> Optional[str]:
        return node.callee if node.kind.is_call_like else None

    def token_text(self, token: Token) -> str:
        return token.range.slice(self.text)


def line_starts(text: str) -> Sequence[int]:
    """Offsets of the first character of every line."""
    starts = [0]
    for i, ch in enumerate(text):
        if ch == "\n":
            starts.append(i + 1)
    return starts
