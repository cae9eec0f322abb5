"""User prompts that either select a value or are cancelled.

A chooser is any callable ``choose(prompt, options, default=None)`` that
returns :class:`~autoimport_cli.models.Selected` or
:data:`~autoimport_cli.models.CANCELLED`. Cancellation is a return value,
never an exception, so callers can abort before touching the buffer.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence

import typer
from rich.console import Console
from rich.table import Table

from .models import CANCELLED, ChoiceResult, Selected


class Chooser(Protocol):
    def __call__(
        self,
        prompt: str,
        options: Sequence[str],
        default: Optional[str] = None,
    ) -> ChoiceResult:
        ...


class PromptChooser:
    """Interactive chooser: numbered options, or any typed-in value."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def __call__(
        self,
        prompt: str,
        options: Sequence[str],
        default: Optional[str] = None,
    ) -> ChoiceResult:
        if options:
            table = Table(title=prompt, show_header=False, show_lines=False)
            table.add_column("#", style="cyan", justify="right")
            table.add_column("Option")
            for i, option in enumerate(options, 1):
                table.add_row(str(i), option)
            self.console.print(table)
            label = f"Select [1-{len(options)}] or enter a value"
        else:
            label = prompt

        try:
            answer = typer.prompt(label, default=default or "", show_default=bool(default))
        except typer.Abort:
            return CANCELLED

        answer = answer.strip()
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return Selected(options[int(answer) - 1])
        return Selected(answer)


class ScriptedChooser:
    """Replays fixed answers in order.

    ``None`` answers, or running out of answers, mean cancelled. An empty
    answer picks the prompt's default when there is one.
    """

    def __init__(self, answers: Iterable[Optional[str]]):
        self._answers: List[Optional[str]] = list(answers)
        self.prompts: List[str] = []
        self.offered: List[List[str]] = []

    def __call__(
        self,
        prompt: str,
        options: Sequence[str],
        default: Optional[str] = None,
    ) -> ChoiceResult:
        self.prompts.append(prompt)
        self.offered.append(list(options))
        if not self._answers:
            return CANCELLED
        answer = self._answers.pop(0)
        if answer is None:
            return CANCELLED
        if answer == "" and default:
            return Selected(default)
        return Selected(answer)
