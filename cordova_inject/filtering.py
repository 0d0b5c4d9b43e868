# cordova_inject/filtering.py
from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator, List, Pattern, Tuple

from cordova_inject.model import DEFAULT_PATTERN, Document

Indexed = Tuple[int, Document]


def glob_to_regex(pattern: str) -> Pattern[str]:
    """
    Translate a path glob into a regex over POSIX-style relative paths.

      **/  -> zero or more directories
      **   -> anything (including /)
      *    -> anything but /
      ?    -> one character but /
    """
    out: List[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("".join(out) + r"\Z")


def _normalize(path: str) -> str:
    p = str(path).replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p.lstrip("/")


class GlobFilter:
    """Split a document stream by path glob and merge it back in input order."""

    def __init__(self, pattern: str = DEFAULT_PATTERN):
        self.pattern = pattern
        self._re = glob_to_regex(pattern)

    def matches(self, path: str) -> bool:
        return self._re.match(_normalize(path)) is not None

    def split(self, docs: Iterable[Document]) -> Tuple[List[Indexed], List[Indexed]]:
        matched: List[Indexed] = []
        rest: List[Indexed] = []
        for i, doc in enumerate(docs):
            (matched if self.matches(doc.path) else rest).append((i, doc))
        return matched, rest

    @staticmethod
    def restore(matched: Iterable[Indexed], rest: Iterable[Indexed]) -> List[Document]:
        merged = sorted([*matched, *rest], key=lambda item: item[0])
        return [doc for _, doc in merged]

    def apply(self, docs: Iterable[Document], fn: Callable[[Document], Document]) -> Iterator[Document]:
        # Streaming equivalent of split -> transform matched -> restore.
        for doc in docs:
            yield fn(doc) if self.matches(doc.path) else doc


__all__ = ["GlobFilter", "glob_to_regex"]
