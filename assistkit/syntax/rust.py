"""
AssistKit — Rust Syntax Provider
=================================
A tolerant lexer for a Rust-flavoured subset plus a delimiter tree that
is just deep enough for the assists: it knows which tokens are integer
and string literals and which call or macro invocation encloses them.

It is not a parser. Unbalanced delimiters and unknown characters never
fail; they produce PUNCT/ERROR tokens and the tree closes open nodes at
the end of the buffer.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from assistkit.edit.text_range import TextRange
from assistkit.syntax.base import Language, Node, SplitStyle, SyntaxKind, SyntaxTree, Token

logger = logging.getLogger(__name__)

INT_SUFFIXES = (
    "u128", "usize", "u16", "u32", "u64", "u8",
    "i128", "isize", "i16", "i32", "i64", "i8",
)

KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else",
    "enum", "extern", "fn", "for", "if", "impl", "in", "let", "loop", "match",
    "mod", "move", "mut", "pub", "ref", "return", "static", "struct", "trait",
    "type", "unsafe", "use", "where", "while",
})

RUST_SPLIT_STYLE = SplitStyle(
    concat_callee="concat",
    concat_kind=SyntaxKind.MACRO_CALL,
    wrapper_open="concat!(",
    wrapper_close=")",
    separator='", "',
    # Cursor lands after the closing quote and comma, before the new fragment.
    cursor_shift=2,
)

_SUFFIX = "(?P<suffix>" + "|".join(INT_SUFFIXES) + ")?"

_TOKEN_PATTERNS: List[Tuple[SyntaxKind, Pattern]] = [
    (SyntaxKind.WHITESPACE, re.compile(r"\s+")),
    (SyntaxKind.COMMENT, re.compile(r"//[^\n]*|/\*[\s\S]*?(?:\*/|\Z)")),
    (SyntaxKind.RAW_STRING, re.compile(r'r(?P<hashes>#*)"[\s\S]*?"(?P=hashes)')),
    (SyntaxKind.BYTE_STRING, re.compile(r'b"(?:\\[\s\S]|[^"\\])*"')),
    (SyntaxKind.BYTE, re.compile(r"b'(?:\\x[0-9a-fA-F]{2}|\\.|[^\\'])'")),
    (SyntaxKind.STRING, re.compile(r'"(?:\\[\s\S]|[^"\\])*"')),
    (SyntaxKind.CHAR, re.compile(r"'(?:\\u\{[0-9a-fA-F]+\}|\\x[0-9a-fA-F]{2}|\\.|[^\\'])'")),
    (SyntaxKind.LIFETIME, re.compile(r"'[A-Za-z_][A-Za-z0-9_]*")),
    (SyntaxKind.FLOAT_NUMBER, re.compile(
        r"[0-9][0-9_]*\.[0-9][0-9_]*(?:[eE][+-]?[0-9_]+)?(?:f32|f64)?"
        r"|[0-9][0-9_]*[eE][+-]?[0-9_]+(?:f32|f64)?"
        r"|[0-9][0-9_]*(?:f32|f64)"
    )),
    (SyntaxKind.INT_NUMBER, re.compile(
        r"(?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+|[0-9][0-9_]*)" + _SUFFIX
    )),
    (SyntaxKind.IDENT, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
    (SyntaxKind.PUNCT, re.compile(r"::|=>|->|\.\.=|\.\.|[^\sA-Za-z0-9_]")),
]

_IDENT_TAIL = re.compile(r"[A-Za-z0-9_]+")

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def tokenize(text: str) -> List[Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        token = _next_token(text, pos)
        tokens.append(token)
        pos = token.range.end
    return tokens


def _next_token(text: str, pos: int) -> Token:
    for kind, pattern in _TOKEN_PATTERNS:
        m = pattern.match(text, pos)
        if not m or m.end() == pos:
            continue
        end = m.end()
        extra = {}
        if kind is SyntaxKind.INT_NUMBER:
            tail = _IDENT_TAIL.match(text, end)
            if tail:
                # `42foo` / `0b102`: not a literal we can reason about
                end = tail.end()
                kind = SyntaxKind.ERROR
            elif m.group("suffix"):
                extra["suffix_len"] = len(m.group("suffix"))
        elif kind is SyntaxKind.RAW_STRING:
            extra["prefix_len"] = 1
            extra["quote_len"] = 1 + len(m.group("hashes"))
        elif kind is SyntaxKind.BYTE_STRING:
            extra["prefix_len"] = 1
        return Token(kind, text[pos:end], TextRange(pos, end), **extra)
    return Token(SyntaxKind.ERROR, text[pos], TextRange(pos, pos + 1))


class RustSyntaxTree(SyntaxTree):
    """Token list plus call/macro/delimiter nodes for Rust source."""

    language = Language.RUST
    split_style = RUST_SPLIT_STYLE

    def __init__(self, text: str):
        super().__init__(text)
        self.tokens = tokenize(text)
        self._index()
        self.root = Node(SyntaxKind.SOURCE_FILE, TextRange(0, len(text)))
        self.nodes.append(self.root)
        self._set_parent(self.root, None)
        self._build()
        logger.debug(
            f"[RustSyntaxTree] {len(self.tokens)} tokens, {len(self.nodes)} nodes"
        )

    def _build(self) -> None:
        # (node, expected closer)
        stack: List[Tuple[Node, Optional[str]]] = [(self.root, None)]
        significant: List[Token] = []

        for token in self.tokens:
            if token.kind.is_trivia:
                self._set_parent(token, stack[-1][0])
                continue

            if token.kind is SyntaxKind.PUNCT and token.text in _OPENERS:
                node, owned = self._open_node(token, significant)
                self._set_parent(node, stack[-1][0])
                for owned_token in owned:
                    self._set_parent(owned_token, node)
                self._set_parent(token, node)
                self.nodes.append(node)
                stack.append((node, _OPENERS[token.text]))
            elif token.kind is SyntaxKind.PUNCT and token.text in _CLOSERS:
                if any(closer == token.text for _, closer in stack[1:]):
                    while True:
                        node, closer = stack.pop()
                        if closer == token.text:
                            node.range = TextRange(node.range.start, token.range.end)
                            self._set_parent(token, node)
                            break
                        node.range = TextRange(node.range.start, token.range.start)
                else:
                    self._set_parent(token, stack[-1][0])
            else:
                self._set_parent(token, stack[-1][0])

            significant.append(token)

        for node, _ in stack[1:]:
            node.range = TextRange(node.range.start, len(self.text))

    def _open_node(self, opener: Token, significant: List[Token]) -> Tuple[Node, List[Token]]:
        prev = significant[-1] if significant else None

        if prev is not None and prev.text == "!":
            path = self._path_before(significant, len(significant) - 1)
            if path:
                callee = "".join(t.text for t in path)
                return (
                    Node(SyntaxKind.MACRO_CALL, TextRange(path[0].range.start, opener.range.end), callee),
                    path + [prev],
                )

        if (
            opener.text == "("
            and prev is not None
            and prev.kind is SyntaxKind.IDENT
            and prev.text not in KEYWORDS
        ):
            path = self._path_before(significant, len(significant))
            before = significant[-len(path) - 1] if len(significant) > len(path) else None
            if before is None or before.text != "fn":
                callee = "".join(t.text for t in path)
                return (
                    Node(SyntaxKind.CALL, TextRange(path[0].range.start, opener.range.end), callee),
                    path,
                )

        return Node(SyntaxKind.DELIMITED, TextRange(opener.range.start, opener.range.end)), []

    @staticmethod
    def _path_before(significant: List[Token], end: int) -> List[Token]:
        """`a::b::c` ending just before index `end` of `significant`."""
        path: List[Token] = []
        i = end - 1
        expect_ident = True
        while i >= 0:
            token = significant[i]
            if expect_ident and token.kind is SyntaxKind.IDENT:
                path.insert(0, token)
            elif not expect_ident and token.text == "::":
                path.insert(0, token)
            else:
                break
            expect_ident = not expect_ident
            i -= 1
        if path and path[0].text == "::":
            path.pop(0)
        return path
