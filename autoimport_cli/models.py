"""Core data models shared by the scanner, writer and command layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Union

# Module name -> top-level symbols, in project file order
ModuleIndex = Dict[str, List[str]]

EditStatus = Literal["inserted", "extended", "already_imported"]
OutcomeStatus = Literal["inserted", "extended", "already_imported", "cancelled"]


@dataclass(frozen=True)
class Selected:
    """A value picked (or typed) by the user."""
    value: str


@dataclass(frozen=True)
class Cancelled:
    """The user dismissed the prompt."""


CANCELLED = Cancelled()

ChoiceResult = Union[Selected, Cancelled]


@dataclass
class Identifier:
    """An identifier found under the cursor."""
    text: str
    start: int
    end: int

    @property
    def parts(self) -> List[str]:
        return self.text.split(".")

    @property
    def is_qualified(self) -> bool:
        return "." in self.text


@dataclass
class ImportEdit:
    """What the import writer did to the buffer."""
    status: EditStatus
    offset: int = -1
    text: str = ""

    @property
    def changed(self) -> bool:
        return self.status != "already_imported"


@dataclass
class ImportOutcome:
    """Result of a full import command."""
    status: OutcomeStatus
    module: str = ""
    name: str = ""
    alias: str = ""
    statement: str = ""
    qualified_usage: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status in ("inserted", "extended") or self.qualified_usage
