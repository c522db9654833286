"""
Fixture helpers for assist tests.

Fixtures mark the caret with `<|>` (or a selection with two markers).
"""

from typing import Optional, Tuple

from assistkit.assists.base import AssistContext, BaseAssist
from assistkit.models import Assist
from assistkit.syntax.base import Language
from assistkit.syntax.markers import RangeOrOffset, add_cursor, as_range, extract_range_or_offset
from assistkit.syntax.providers import parse


def run_assist(
    assist: BaseAssist,
    fixture: str,
    language: Language = Language.RUST,
    resolve: bool = True,
) -> Tuple[RangeOrOffset, str, Optional[Assist]]:
    range_or_offset, before = extract_range_or_offset(fixture)
    ctx = AssistContext(parse(before, language), as_range(range_or_offset), resolve=resolve)
    return range_or_offset, before, assist.collect(ctx)


def check_assist(assist: BaseAssist, before: str, after: str, language: Language = Language.RUST):
    range_or_offset, text, result = run_assist(assist, before, language)
    assert result is not None, "No code action is applicable"

    actual, translate = result.edit.finalize(text)
    cursor = result.edit.cursor_in(actual)
    if cursor is None and isinstance(range_or_offset, int):
        cursor = translate(range_or_offset)
    if cursor is not None:
        actual = add_cursor(actual, cursor)
    assert actual == after


def check_assist_target(assist: BaseAssist, fixture: str, target: str, language: Language = Language.RUST):
    _, text, result = run_assist(assist, fixture, language)
    assert result is not None, "No code action is applicable"
    assert result.edit.target is not None, "expected target on action"
    assert result.edit.target.slice(text) == target


def check_assist_not_applicable(assist: BaseAssist, fixture: str, language: Language = Language.RUST):
    _, _, result = run_assist(assist, fixture, language)
    assert result is None, "assist should not be applicable!"
