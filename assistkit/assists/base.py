"""
AssistKit — Assist Handler Contract (Base + Registry)
======================================================
Every assist is a handler with two phases:

- applicability: cheap checks that end in `ctx.add_assist(...)` with a
  label, or return None
- resolution: the `build` callback handed to `add_assist`, run only when
  the context was created in resolve mode

Handlers only read the context and build their own edit. They never
mutate the tree and never observe another handler's output.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Type

from assistkit.edit.composer import EditComposer
from assistkit.edit.text_range import TextRange
from assistkit.models import Assist, AssistId, AssistLabel, GroupLabel
from assistkit.syntax.base import Element, Node, SyntaxKind, SyntaxTree, Token


@dataclass(frozen=True)
class AssistContext:
    """Immutable request view: buffer, tree, caret/selection and mode."""
    tree: SyntaxTree
    range: TextRange
    resolve: bool = False

    @property
    def text(self) -> str:
        return self.tree.text

    def covering_token(self, *kinds: SyntaxKind) -> Optional[Token]:
        return self.tree.covering_token(self.range, kinds or None)

    def parent_of(self, element: Element) -> Optional[Node]:
        return self.tree.parent_of(element)

    def add_assist(
        self,
        assist_id: AssistId,
        label: str,
        build: Callable[[EditComposer], None],
        target: Optional[TextRange] = None,
        group_label: Optional[str] = None,
    ) -> Assist:
        assist = Assist(
            label=AssistLabel(assist_id, label),
            group_label=GroupLabel(group_label) if group_label else None,
        )
        if self.resolve:
            composer = EditComposer()
            if target is not None:
                composer.target(target)
            build(composer)
            assist.edit = composer.finish()
        return assist


class BaseAssist:
    """Base class for all assist handlers."""

    name: str = None
    assist_ids: Tuple[AssistId, ...] = ()

    def collect(self, ctx: AssistContext) -> Optional[Assist]:
        """Return the applicable assist (resolved when `ctx.resolve`), or None."""
        raise NotImplementedError


# Registry of all available handlers, in registration order
_ASSIST_REGISTRY: Dict[str, Type[BaseAssist]] = {}


def register_assist(cls: Type[BaseAssist]) -> Type[BaseAssist]:
    """Decorator to register an assist handler."""
    _ASSIST_REGISTRY[cls.name] = cls
    return cls


def get_assist(name: str) -> BaseAssist:
    """Retrieve a registered handler by name."""
    if name not in _ASSIST_REGISTRY:
        raise ValueError(f"Unknown assist handler: {name}")
    return _ASSIST_REGISTRY[name]()


def list_assists() -> List[str]:
    """List all registered handler names."""
    return list(_ASSIST_REGISTRY.keys())


def all_assists(disabled: Iterable[str] = ()) -> List[BaseAssist]:
    """
    Instantiate every registered handler, skipping those whose name or
    every produced assist id is listed in `disabled`.
    """
    disabled = set(disabled)
    handlers = []
    for name, cls in _ASSIST_REGISTRY.items():
        ids = {assist_id.value for assist_id in cls.assist_ids}
        if name in disabled or (ids and ids <= disabled):
            continue
        handlers.append(cls())
    return handlers
