# cordova_inject/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

# Canonical local entry point of the packaged app. When the configured source
# is this name the CSP whitelists the file: scheme instead of the source itself.
DEFAULT_SOURCE = "index.html"

DEFAULT_PATTERN = "**/*.html"

# Serialization order of the CSP meta tag (stable, never re-sorted).
CSP_DIRECTIVES: Tuple[str, ...] = (
    "default-src",
    "media-src",
    "img-src",
    "font-src",
    "style-src",
    "connect-src",
    "frame-src",
    "child-src",
)


def _origins(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class InjectionFragmentSet:
    head_start: str
    head_end: str
    body_start: str
    body_end: str


@dataclass(frozen=True)
class InjectionConfig:
    connect_src: Tuple[str, ...] = ()
    default_src: Tuple[str, ...] = ()
    frame_src: Tuple[str, ...] = ()
    source: str = DEFAULT_SOURCE
    template_path: Optional[str] = None
    pattern: str = DEFAULT_PATTERN

    def __post_init__(self) -> None:
        # Accept lists (or a bare string) from callers; store tuples.
        object.__setattr__(self, "connect_src", _origins(self.connect_src))
        object.__setattr__(self, "default_src", _origins(self.default_src))
        object.__setattr__(self, "frame_src", _origins(self.frame_src))
        if self.template_path is not None:
            object.__setattr__(self, "template_path", str(self.template_path))


@dataclass(frozen=True)
class Document:
    path: str
    contents: bytes = field(default=b"", repr=False)

    @property
    def size(self) -> int:
        return len(self.contents)


__all__ = [
    "CSP_DIRECTIVES",
    "DEFAULT_PATTERN",
    "DEFAULT_SOURCE",
    "Document",
    "InjectionConfig",
    "InjectionFragmentSet",
]
