"""
AssistKit — Assist Driver
==========================
Runs every registered assist handler over one buffer snapshot.

1. Parse the buffer with the configured syntax provider
2. Build one read-only AssistContext for the request
3. Ask each handler for its assist (labels only, or fully resolved)
4. In resolve mode, sort by target length: narrowest target first,
   assists without a target last

A handler that composes overlapping operations has a bug; its assist is
dropped with a warning and the remaining handlers are unaffected.
"""

import logging
from typing import List, Optional, Union

from assistkit.assists.base import AssistContext, BaseAssist, all_assists
from assistkit.config import AssistConfig
from assistkit.edit.text_edit import OverlappingEditError
from assistkit.edit.text_range import TextRange
from assistkit.models import Assist, AssistLabel, ResolvedAssist
from assistkit.syntax.base import SyntaxTree
from assistkit.syntax.providers import parse

# Auto-register assists
import assistkit.assists.number_representation  # noqa
import assistkit.assists.split_string           # noqa

logger = logging.getLogger(__name__)

_NO_TARGET = float("inf")


class AssistDriver:
    """Lists or resolves the assists applicable at a caret or selection."""

    def __init__(self, config: Optional[AssistConfig] = None):
        self.config = config or AssistConfig()
        self.handlers: List[BaseAssist] = all_assists(self.config.disabled)

    def parse(self, text: str) -> SyntaxTree:
        return parse(text, self.config.language)

    def list_applicable(self, text: Union[str, SyntaxTree], range: TextRange) -> List[AssistLabel]:
        """Cheap mode: labels only, no edits are computed."""
        ctx = AssistContext(self._tree(text), self._checked(text, range), resolve=False)
        labels = [assist.label for assist in self._collect(ctx)]
        logger.debug(f"[AssistDriver] {len(labels)} assist(s) applicable at {range}")
        return labels

    def resolve_all(self, text: Union[str, SyntaxTree], range: TextRange) -> List[ResolvedAssist]:
        """Full mode: every applicable assist with its edit, most specific first."""
        ctx = AssistContext(self._tree(text), self._checked(text, range), resolve=True)
        resolved = [
            ResolvedAssist(label=a.label, edit=a.edit, group_label=a.group_label)
            for a in self._collect(ctx)
        ]
        resolved.sort(key=lambda r: r.target_len if r.target_len is not None else _NO_TARGET)
        logger.info(
            f"[AssistDriver] Resolved {len(resolved)} assist(s) at {range}: "
            f"{[r.label.id.value for r in resolved]}"
        )
        return resolved

    def _collect(self, ctx: AssistContext) -> List[Assist]:
        assists = []
        for handler in self.handlers:
            try:
                assist = handler.collect(ctx)
            except OverlappingEditError as e:
                logger.warning(f"[AssistDriver] Assist {handler.name} aborted: {e}")
                continue
            if assist is None or assist.label.id.value in self.config.disabled:
                continue
            assists.append(assist)
        return assists

    def _tree(self, text: Union[str, SyntaxTree]) -> SyntaxTree:
        return text if isinstance(text, SyntaxTree) else self.parse(text)

    @staticmethod
    def _checked(text: Union[str, SyntaxTree], range: TextRange) -> TextRange:
        length = len(text.text if isinstance(text, SyntaxTree) else text)
        if range.end > length:
            raise ValueError(f"Range {range} is outside a buffer of length {length}")
        return range


def list_applicable(
    text: str,
    range: TextRange,
    config: Optional[AssistConfig] = None,
) -> List[AssistLabel]:
    return AssistDriver(config).list_applicable(text, range)


def resolve_all(
    text: str,
    range: TextRange,
    config: Optional[AssistConfig] = None,
) -> List[ResolvedAssist]:
    return AssistDriver(config).resolve_all(text, range)
