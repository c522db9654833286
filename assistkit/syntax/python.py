"""
AssistKit — Python Syntax Provider
===================================
Uses libcst to expose the integer and string literals of a Python
module as tokens, with their enclosing calls as parent nodes.

Python has no concatenation call, so `split_style` is None and the
split-string assist is never offered on Python buffers.
"""

import logging
from typing import Dict, Optional

import libcst as cst
from libcst.helpers import get_full_name_for_node
from libcst.metadata import CodeRange, MetadataWrapper, ParentNodeProvider, PositionProvider

from assistkit.edit.text_range import TextRange
from assistkit.syntax.base import Language, Node, SyntaxKind, SyntaxTree, Token, line_starts

logger = logging.getLogger(__name__)


class _LiteralCollector(cst.CSTVisitor):
    """Collects Integer/SimpleString literals and Call nodes with their positions."""

    METADATA_DEPENDENCIES = (PositionProvider, ParentNodeProvider)

    def __init__(self, tree: "PythonSyntaxTree"):
        super().__init__()
        self.tree = tree
        self._nodes: Dict[int, Node] = {}

    # ── Visitors ─────────────────────────────────────────────────────────

    def visit_Integer(self, node: cst.Integer) -> None:
        token = Token(SyntaxKind.INT_NUMBER, node.value, self._literal_range(node))
        self._add_token(node, token)

    def visit_SimpleString(self, node: cst.SimpleString) -> None:
        value = node.value
        prefix = node.prefix
        quote_len = len(node.quote)
        lowered = prefix.lower()
        if "b" in lowered:
            kind = SyntaxKind.BYTE_STRING
        elif "r" in lowered:
            kind = SyntaxKind.RAW_STRING
        else:
            kind = SyntaxKind.STRING
        token = Token(
            kind,
            value,
            self._literal_range(node),
            quote_len=quote_len,
            prefix_len=len(prefix),
        )
        self._add_token(node, token)

    def visit_Call(self, node: cst.Call) -> None:
        self._node_for(node)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _literal_range(self, node: cst.BaseExpression) -> TextRange:
        start = self.tree.offset_of(self.get_metadata(PositionProvider, node))
        found = self.tree.text.find(node.value, start)
        return TextRange.offset_len(found if found >= 0 else start, len(node.value))

    def _add_token(self, node: cst.CSTNode, token: Token) -> None:
        self.tree.tokens.append(token)
        self.tree._set_parent(token, self._parent_node(node))

    def _parent_node(self, node: cst.CSTNode) -> Optional[Node]:
        parent = self.get_metadata(ParentNodeProvider, node, None)
        while isinstance(parent, cst.Arg):
            parent = self.get_metadata(ParentNodeProvider, parent, None)
        if parent is None:
            return None
        return self._node_for(parent)

    def _node_for(self, node: cst.CSTNode) -> Node:
        key = id(node)
        if key not in self._nodes:
            if isinstance(node, cst.Module):
                result = Node(SyntaxKind.SOURCE_FILE, TextRange(0, len(self.tree.text)))
            else:
                code_range = self.get_metadata(PositionProvider, node)
                range = TextRange(
                    self.tree.offset_of(code_range),
                    self.tree.offset_of(code_range, end=True),
                )
                if isinstance(node, cst.Call):
                    result = Node(SyntaxKind.CALL, range, get_full_name_for_node(node.func))
                else:
                    result = Node(SyntaxKind.EXPR, range)
            self._nodes[key] = result
            self.tree.nodes.append(result)
        return self._nodes[key]


class PythonSyntaxTree(SyntaxTree):
    """Literal tokens and call nodes of a Python module, via libcst."""

    language = Language.PYTHON
    split_style = None

    def __init__(self, text: str):
        super().__init__(text)
        self._line_starts = line_starts(text)
        try:
            module = cst.parse_module(text)
        except cst.ParserSyntaxError as e:
            # Unparseable buffers simply offer no assists.
            logger.warning(f"[PythonSyntaxTree] Parse failed: {e}")
        else:
            wrapper = MetadataWrapper(module)
            wrapper.visit(_LiteralCollector(self))
        self._index()
        logger.debug(f"[PythonSyntaxTree] {len(self.tokens)} literal tokens")

    def offset_of(self, code_range: CodeRange, end: bool = False) -> int:
        position = code_range.end if end else code_range.start
        return self._line_starts[position.line - 1] + position.column
