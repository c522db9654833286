"""
AssistKit — String Split Planner
=================================
Decides what to insert to split one string literal at a caret (two
fragments) or around a selection (three fragments), and whether the
fragments need a concatenation wrapper.

Only the call-wrap style is supported: fragments become arguments of
the language's concatenation call, e.g. `concat!("random", "string")`.
"""

import logging
from typing import Callable, Iterable, Optional

from assistkit.edit.composer import EditComposer
from assistkit.edit.text_range import TextRange
from assistkit.models import SplitPlan
from assistkit.syntax.base import Node, SplitStyle

logger = logging.getLogger(__name__)

EnclosingCallLookup = Callable[[], Optional[Node]]


def needs_wrapper(parent: Optional[Node], style: SplitStyle) -> bool:
    """False only when the string already is an argument of the concatenation call."""
    if parent is None or parent.kind is not style.concat_kind:
        return True
    return parent.callee != style.concat_callee


def plan_split(
    token_range: TextRange,
    between_quotes: Optional[TextRange],
    selection: TextRange,
    enclosing_call: EnclosingCallLookup,
    style: SplitStyle,
    escape_ranges: Iterable[TextRange] = (),
) -> Optional[SplitPlan]:
    if between_quotes is None or not token_range.contains_range(between_quotes):
        return None
    if not between_quotes.contains_range(selection):
        return None

    split_offsets = [selection.start]
    if not selection.is_empty:
        split_offsets.append(selection.end)

    escapes = list(escape_ranges)
    for offset in split_offsets:
        if any(esc.start < offset < esc.end for esc in escapes):
            logger.debug(f"[SplitPlanner] Offset {offset} falls inside an escape sequence")
            return None

    wrap = needs_wrapper(enclosing_call(), style)
    return SplitPlan(
        needs_wrapper=wrap,
        boundary_texts=[style.separator] * len(split_offsets),
        split_offsets=split_offsets,
        wrapper_open=style.wrapper_open if wrap else None,
        wrapper_close=style.wrapper_close if wrap else None,
    )


def compose_split(
    plan: SplitPlan,
    token_range: TextRange,
    selection: TextRange,
    style: SplitStyle,
    edit: EditComposer,
) -> None:
    """Populate `edit` from `plan`; the cursor ends up before the last new fragment."""
    edit.target(token_range)
    if plan.needs_wrapper:
        edit.insert(token_range.start, plan.wrapper_open)
    for offset, text in zip(plan.split_offsets, plan.boundary_texts):
        edit.insert(offset, text)

    edit.set_cursor(edit.translate(selection.end) + style.cursor_shift)

    if plan.needs_wrapper:
        edit.insert(token_range.end, plan.wrapper_close)
