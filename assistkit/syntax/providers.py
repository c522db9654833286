"""Syntax provider lookup by language or file extension."""

from pathlib import Path
from typing import Dict, Optional, Type, Union

from assistkit.syntax.base import Language, SyntaxTree
from assistkit.syntax.python import PythonSyntaxTree
from assistkit.syntax.rust import RustSyntaxTree

_PROVIDERS: Dict[Language, Type[SyntaxTree]] = {
    Language.RUST: RustSyntaxTree,
    Language.PYTHON: PythonSyntaxTree,
}

_EXTENSIONS = {
    ".rs": Language.RUST,
    ".py": Language.PYTHON,
    ".pyi": Language.PYTHON,
}


def parse(text: str, language: Union[Language, str] = Language.RUST) -> SyntaxTree:
    """Parse `text` with the provider registered for `language`."""
    return _PROVIDERS[Language(language)](text)


def language_for_path(path: Union[str, Path]) -> Optional[Language]:
    return _EXTENSIONS.get(Path(path).suffix.lower())
