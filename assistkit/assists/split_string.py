"""
AssistKit Assists — Split String
=================================
Splits a plain string literal at the caret, or around the selection:

    let s = "random<|>string";  ->  let s = concat!("random",<|> "string");

An existing `concat!` call is reused instead of nesting a new one.
"""

import logging
from typing import Optional

from assistkit.assists.base import AssistContext, BaseAssist, register_assist
from assistkit.assists.split_plan import compose_split, plan_split
from assistkit.edit.composer import EditComposer
from assistkit.models import Assist, AssistId
from assistkit.syntax.base import SyntaxKind

logger = logging.getLogger(__name__)


@register_assist
class SplitStringAssist(BaseAssist):
    name = "split_string"
    assist_ids = (AssistId.SPLIT_STRING,)

    def collect(self, ctx: AssistContext) -> Optional[Assist]:
        style = ctx.tree.split_style
        if style is None:
            return None
        token = ctx.covering_token(SyntaxKind.STRING)
        if token is None:
            return None

        plan = plan_split(
            token.range,
            token.between_quotes(),
            ctx.range,
            lambda: ctx.parent_of(token),
            style,
            escape_ranges=token.escape_ranges(),
        )
        if plan is None:
            return None
        logger.debug(
            f"[SplitString] {len(plan.split_offsets)} split point(s), wrapper={plan.needs_wrapper}"
        )

        def build(edit: EditComposer) -> None:
            compose_split(plan, token.range, ctx.range, style, edit)

        return ctx.add_assist(AssistId.SPLIT_STRING, "Split string", build)
