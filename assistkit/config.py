"""AssistKit configuration, read from ASSISTKIT_* environment variables."""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from assistkit.syntax.base import Language


@dataclass
class AssistConfig:
    """Controls which language is parsed and which assists run."""

    language: Language = Language.RUST

    # Handler names or assist ids to skip
    disabled: FrozenSet[str] = field(default_factory=frozenset)

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AssistConfig":
        env = os.environ if environ is None else environ
        disabled = frozenset(
            item.strip()
            for item in env.get("ASSISTKIT_DISABLED", "").split(",")
            if item.strip()
        )
        return cls(
            language=Language(env.get("ASSISTKIT_LANGUAGE", Language.RUST.value).lower()),
            disabled=disabled,
            log_level=env.get("ASSISTKIT_LOG_LEVEL", "WARNING").upper(),
        )
