"""Error kinds raised by the injector (library-facing)."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple, Union


class InjectionError(RuntimeError):
    """Base class for fatal injection setup failures."""


class TemplateNotFoundError(InjectionError):
    """Raised when the template file is missing, unreadable or empty."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"File {self.path} not found or empty")


class MalformedTemplateError(InjectionError):
    """Raised when one or more delimiter tags are absent from the template."""

    def __init__(self, path: Union[str, Path], missing: Sequence[str]):
        self.path = str(path)
        self.missing: Tuple[str, ...] = tuple(missing)
        tags = ", ".join(f"<{t}>" for t in self.missing)
        super().__init__(
            f"Bad injection file '{self.path}': required tags not found ({tags}). "
            "Each of <head-start>, <head-end>, <body-start>, <body-end> must be present."
        )


class ConfigError(InjectionError, ValueError):
    """Raised when an injection config file or mapping is invalid."""


__all__ = [
    "ConfigError",
    "InjectionError",
    "MalformedTemplateError",
    "TemplateNotFoundError",
]
