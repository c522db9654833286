"""
AssistKit Assists — Number Representation
==========================================
Two assists on integer literals:

- remove_digit_separators: `42_420u32` -> `42420u32`
- separate_number_literal: `4242420` -> `4_242_420`, `0x2A2A2A` ->
  `0x2A_2A2A`, `0b101010101` -> `0b1_01010101`

The suffix is never touched and the prefix decides the group size.
Octal literals are never grouped.
"""

import logging
from typing import Optional

from assistkit.assists.base import AssistContext, BaseAssist, register_assist
from assistkit.edit.composer import EditComposer
from assistkit.models import Assist, AssistId, grouping_spec_for
from assistkit.numbers.grouping import group, has_separator, is_valid_digits, strip
from assistkit.numbers.literal import NotALiteral, decompose_token
from assistkit.syntax.base import SyntaxKind

logger = logging.getLogger(__name__)


@register_assist
class RemoveDigitSeparatorsAssist(BaseAssist):
    """Strips every `_` from an integer literal."""

    name = "remove_digit_separators"
    assist_ids = (AssistId.REMOVE_DIGIT_SEPARATORS,)

    def collect(self, ctx: AssistContext) -> Optional[Assist]:
        token = ctx.covering_token(SyntaxKind.INT_NUMBER)
        if token is None or not has_separator(token.text):
            return None

        def build(edit: EditComposer) -> None:
            edit.replace(token.range, strip(token.text))

        return ctx.add_assist(
            AssistId.REMOVE_DIGIT_SEPARATORS, "Remove digit separators", build, target=token.range
        )


@register_assist
class SeparateNumberLiteralAssist(BaseAssist):
    """Regroups the digits of a decimal, hex or binary literal."""

    name = "separate_number_literal"
    assist_ids = (
        AssistId.SEPARATE_THOUSANDS,
        AssistId.SEPARATE_16BIT_WORDS,
        AssistId.SEPARATE_BYTES,
    )

    def collect(self, ctx: AssistContext) -> Optional[Assist]:
        token = ctx.covering_token(SyntaxKind.INT_NUMBER)
        if token is None:
            return None
        try:
            literal = decompose_token(token)
        except NotALiteral:
            return None

        spec = grouping_spec_for(literal.number_type)
        if spec is None:
            logger.debug(f"[SeparateNumberLiteral] No grouping for {literal.number_type.value} literal")
            return None
        if not is_valid_digits(literal.digits, literal.number_type):
            return None
        if len(strip(literal.digits)) <= spec.group_size:
            return None

        grouped = group(literal.digits, spec.group_size)
        # String comparison so irregular existing separators are still offered a fix
        if grouped == literal.digits:
            return None

        def build(edit: EditComposer) -> None:
            edit.replace(token.range, literal.with_digits(grouped).text)

        return ctx.add_assist(spec.assist_id, spec.label, build, target=token.range)
