"""
AssistKit — Shared Models
==========================
Dataclasses and enums shared across the literal, edit, syntax and
assist layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from assistkit.edit.composer import ComposedEdit


class AssistId(str, Enum):
    REMOVE_DIGIT_SEPARATORS = "remove_digit_separators"
    SEPARATE_THOUSANDS = "separate_thousands"
    SEPARATE_16BIT_WORDS = "separate_16bit_words"
    SEPARATE_BYTES = "separate_bytes"
    SPLIT_STRING = "split_string"


class NumberLiteralType(str, Enum):
    DECIMAL = "decimal"
    HEX = "hex"
    OCTAL = "octal"
    BINARY = "binary"


@dataclass(frozen=True)
class NumberLiteral:
    """An integer literal split into prefix, raw digits and suffix."""
    number_type: NumberLiteralType
    digits: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None

    @property
    def text(self) -> str:
        return f"{self.prefix or ''}{self.digits}{self.suffix or ''}"

    def with_digits(self, digits: str) -> "NumberLiteral":
        return NumberLiteral(
            number_type=self.number_type,
            digits=digits,
            prefix=self.prefix,
            suffix=self.suffix,
        )


@dataclass(frozen=True)
class GroupingSpec:
    """How the digits of one literal kind are grouped."""
    group_size: int
    assist_id: AssistId
    label: str


# Octal has no entry: grouping is deliberately not offered for it.
GROUPING_SPECS: Dict[NumberLiteralType, GroupingSpec] = {
    NumberLiteralType.DECIMAL: GroupingSpec(3, AssistId.SEPARATE_THOUSANDS, "Separate thousands"),
    NumberLiteralType.HEX: GroupingSpec(4, AssistId.SEPARATE_16BIT_WORDS, "Separate 16-bit words"),
    NumberLiteralType.BINARY: GroupingSpec(8, AssistId.SEPARATE_BYTES, "Separate bytes"),
}


def grouping_spec_for(number_type: NumberLiteralType) -> Optional[GroupingSpec]:
    return GROUPING_SPECS.get(number_type)


@dataclass(frozen=True)
class AssistLabel:
    """Identifier plus the short description shown in the editor UI."""
    id: AssistId
    label: str

    def __post_init__(self):
        if not self.label or not self.label[0].isupper():
            raise ValueError(f"Assist label must start with an uppercase letter: {self.label!r}")


@dataclass(frozen=True)
class GroupLabel:
    name: str


@dataclass(frozen=True)
class SplitPlan:
    """Text to insert when splitting one string token."""
    needs_wrapper: bool
    boundary_texts: List[str] = field(default_factory=list)
    split_offsets: List[int] = field(default_factory=list)
    wrapper_open: Optional[str] = None
    wrapper_close: Optional[str] = None


@dataclass
class Assist:
    """One applicable assist; `edit` is only filled in resolve mode."""
    label: AssistLabel
    edit: Optional[ComposedEdit] = None
    group_label: Optional[GroupLabel] = None


@dataclass
class ResolvedAssist:
    """An assist with its edit fully computed."""
    label: AssistLabel
    edit: ComposedEdit
    group_label: Optional[GroupLabel] = None

    @property
    def target_len(self) -> Optional[int]:
        return self.edit.target.len if self.edit.target is not None else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.label.id.value,
            "label": self.label.label,
            "group_label": self.group_label.name if self.group_label else None,
            "edit": self.edit.to_dict(),
        }
