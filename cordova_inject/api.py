"""cordova_inject.api

Stable *library* entrypoint for cordova-inject.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from cordova_inject.config import load_config, resolve_config
from cordova_inject.csp import build_csp_rules, compose_csp
from cordova_inject.errors import (
    ConfigError,
    InjectionError,
    MalformedTemplateError,
    TemplateNotFoundError,
)
from cordova_inject.filtering import GlobFilter
from cordova_inject.fragments import DEFAULT_TEMPLATE_PATH, extract_fragments
from cordova_inject.injector import Injector, build_injector
from cordova_inject.model import (
    DEFAULT_SOURCE,
    Document,
    InjectionConfig,
    InjectionFragmentSet,
)
from cordova_inject.pipeline import build_steps, transform_html

TreePath = Union[str, Path]

# Directories never collected from a www tree.
_SKIP_DIRS = {".git", "node_modules", "__pycache__"}


def iter_tree(root: TreePath) -> Iterator[Document]:
    """Yield every file under `root` as a Document (sorted, POSIX relative paths)."""
    base = Path(root)
    for p in sorted(base.rglob("*")):
        if not p.is_file():
            continue
        rel = p.relative_to(base)
        if any(part in _SKIP_DIRS for part in rel.parts):
            continue
        yield Document(path=rel.as_posix(), contents=p.read_bytes())


def write_tree(root: TreePath, documents: Iterable[Document]) -> List[Path]:
    base = Path(root)
    written: List[Path] = []
    for doc in documents:
        out = base / doc.path
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(doc.contents)
        written.append(out)
    return written


def inject_html(html: str, config: Optional[InjectionConfig] = None) -> str:
    """One-shot helper: inject a single HTML string."""
    injector = build_injector(config, report_sizes=False)
    return transform_html(html, injector.steps)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "ConfigError",
    "DEFAULT_SOURCE",
    "DEFAULT_TEMPLATE_PATH",
    "Document",
    "GlobFilter",
    "InjectionConfig",
    "InjectionError",
    "InjectionFragmentSet",
    "Injector",
    "MalformedTemplateError",
    "TemplateNotFoundError",
    "build_csp_rules",
    "build_injector",
    "build_steps",
    "compose_csp",
    "extract_fragments",
    "inject_html",
    "iter_tree",
    "load_config",
    "resolve_config",
    "write_tree",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
