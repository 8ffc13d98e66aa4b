from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import IOFailure

SELECT = "[SELECT]"
PARENT = ".."

Chooser = Callable[[str, Sequence[str]], str]


def filter_choices(query: str, choices: Sequence[str]) -> list[str]:
    needle = query.lower()
    return [choice for choice in choices if needle in choice.lower()]


def terminal_choose(message: str, choices: Sequence[str]) -> str:
    """Pick one entry by number or by a substring matching a single entry."""
    while True:
        print(message)
        for index, choice in enumerate(choices):
            print(f"  {index:3d}  {choice}")
        answer = input("> ").strip()
        if answer.isdecimal() and int(answer) < len(choices):
            return choices[int(answer)]
        matches = filter_choices(answer, choices) if answer else []
        if len(matches) == 1:
            return matches[0]
        if answer in choices:
            return answer
        print(f"No unique match for {answer!r}" if answer else "Nothing selected")


class FileSelector:
    def __init__(self, start: str | Path | None = None, choose: Chooser = terminal_choose) -> None:
        self.current = Path(start or os.getcwd()).resolve()
        self.choose = choose

    def entries(self) -> list[str]:
        try:
            names = sorted(os.listdir(self.current))
        except OSError as exc:
            raise IOFailure("list", str(self.current), exc) from exc
        return [SELECT, PARENT, *names]

    def run(self) -> Path:
        selected: Optional[Path] = None
        while selected is None:
            choice = self.choose(
                f"Select a file (current path: {self.current})", self.entries()
            )
            if choice == PARENT:
                self.current = self.current.parent
            elif choice == SELECT:
                selected = self.current
            else:
                candidate = self.current / choice
                if candidate.is_dir():
                    self.current = candidate
                else:
                    selected = candidate
        return selected
