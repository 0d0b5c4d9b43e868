# cordova_inject/sizes.py
from __future__ import annotations

from typing import Callable

from cordova_inject.model import Document
from cordova_inject.util.console import eprint


def format_bytes(n: int) -> str:
    if n < 1000:
        return f"{n} B"
    kb = n / 1000.0
    if kb < 1000:
        return f"{kb:.2f} kB"
    return f"{kb / 1000.0:.2f} MB"


class SizeReporter:
    """Passive byte counter for build diagnostics; never alters documents."""

    def __init__(self, title: str, *, emit: Callable[[str], None] = eprint, enabled: bool = True):
        self.title = title
        self.files = 0
        self.total = 0
        self._emit = emit
        self._enabled = enabled

    def observe(self, doc: Document) -> Document:
        self.files += 1
        self.total += doc.size
        return doc

    def summary(self) -> str:
        noun = "file" if self.files == 1 else "files"
        return f"[cordova-inject] {self.title} all files {format_bytes(self.total)} ({self.files} {noun})"

    def report(self) -> None:
        if self._enabled:
            self._emit(self.summary())


__all__ = ["SizeReporter", "format_bytes"]
