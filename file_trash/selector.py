"""Interactive choice of the record to restore.

A selector is any callable taking the records (newest first) and returning
the index of the chosen one. Returning None or raising
SelectionCancelledError cancels the restore.
"""
import os
import sys
from datetime import datetime
from typing import List, Optional, Sequence, TextIO

from .errors import SelectionCancelledError
from .models import Record
from .preview import head
from .utils import display, human_size, human_time


def _normalize(text: str) -> str:
    return text.lower().replace(" ", "")


def match_name(name: str, query: str) -> bool:
    """Case- and space-insensitive substring match on the file name."""
    return _normalize(query) in _normalize(name)


def details(rec: Record, now: Optional[datetime] = None) -> str:
    try:
        size = human_size(os.lstat(rec.archive_path).st_size)
    except OSError:
        size = "(missing)"
    return "\n".join([
        f"Name:      {rec.name}",
        f"Path:      {rec.source_path}",
        f"Size:      {size}",
        f"DeletedAt: {human_time(rec.timestamp, now)}",
        "Content:",
        head(rec.archive_path, name=rec.name),
    ])


class ConsoleSelector:
    """Numbered list prompt.

    Typing a number picks that entry; any other text narrows the list to the
    names containing it. With a single match left, a blank answer picks it.
    Blank input on the full list, `q`, or end of input cancels.
    """

    prompt = "Which to restore? (number, text to search, q to quit): "

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None, show_details: bool = True):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.show_details = show_details

    def _print(self, text: str = "") -> None:
        print(display(text), file=self.stdout)

    def _ask(self) -> str:
        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise SelectionCancelledError("no file selected")
        return line.strip()

    def _show(self, records: Sequence[Record], shown: List[int]) -> None:
        now = datetime.now().astimezone()
        for pos, idx in enumerate(shown, 1):
            rec = records[idx]
            self._print(f"{pos:3d}) {rec.name:30} {human_time(rec.timestamp, now):>16}  {rec.source_path}")

    def __call__(self, records: Sequence[Record]) -> Optional[int]:
        shown = list(range(len(records)))
        while True:
            if not shown:
                self._print("No matches.")
                shown = list(range(len(records)))
            self._show(records, shown)
            answer = self._ask()
            if answer.lower() == "q":
                raise SelectionCancelledError("no file selected")
            if not answer:
                if len(shown) == len(records):
                    raise SelectionCancelledError("no file selected")
                if len(shown) == 1:
                    return self._chosen(records, shown[0])
                shown = list(range(len(records)))
                continue
            if answer.isdigit():
                pos = int(answer)
                if 1 <= pos <= len(shown):
                    return self._chosen(records, shown[pos - 1])
                self._print(f"No entry {pos}.")
                continue
            shown = [i for i in shown if match_name(records[i].name, answer)]

    def _chosen(self, records: Sequence[Record], idx: int) -> int:
        if self.show_details:
            self._print(details(records[idx]))
        return idx
