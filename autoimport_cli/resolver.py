"""Pick candidate modules for an identifier from the module index."""

from __future__ import annotations

import builtins
import keyword
from typing import Iterable, List

from .models import ModuleIndex


def suggest_modules(name: str, index: ModuleIndex) -> List[str]:
    """Modules whose top-level symbols contain *name*, in index order."""
    if not name:
        return []
    return [module for module, symbols in index.items() if module and name in symbols]


def module_candidates(prefix: str, suggestions: Iterable[str]) -> List[str]:
    """Put an already-typed qualifier first and drop repeated entries."""
    ordered = [prefix] if prefix else []
    ordered.extend(suggestions)
    seen = set()
    unique: List[str] = []
    for module in ordered:
        if module and module not in seen:
            seen.add(module)
            unique.append(module)
    return unique


def is_reserved_name(name: str) -> bool:
    """True for Python keywords and builtins, which rarely need importing."""
    return keyword.iskeyword(name) or hasattr(builtins, name)
