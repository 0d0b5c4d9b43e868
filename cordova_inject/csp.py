"""Content-Security-Policy composition for the app shell.

The policy allows embedded YouTube players, Google Analytics and Google Fonts
out of the box; callers append extra origins per directive.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from cordova_inject.model import CSP_DIRECTIVES, DEFAULT_SOURCE

DEFAULT_SRC_PREFIX = "'self' data: gap: https://ssl.gstatic.com 'unsafe-eval' 'unsafe-inline'"

BASELINE_DEFAULT_SRC = (
    "https://www.google-analytics.com",
    "https://www.youtube.com",
    "https://s.ytimg.com",
)

BASELINE_FRAME_SRC = ("https://www.youtube.com",)

FIXED_RULES = {
    "media-src": "data: *",
    "img-src": "data: blob: *",
    "font-src": "data: 'self' https://fonts.gstatic.com",
    "style-src": "'self' 'unsafe-inline' https://fonts.googleapis.com",
}


def _listed(values: Optional[Iterable[str]]) -> List[str]:
    return [str(v) for v in (values or ())]


def connect_src_tokens(source: str = DEFAULT_SOURCE, connect_src: Optional[Iterable[str]] = None) -> List[str]:
    # A networked source (e.g. a dev server origin) is whitelisted as-is.
    origin = "file:" if source == DEFAULT_SOURCE else source
    return ["self:", origin, *_listed(connect_src)]


def build_csp_rules(
    source: str = DEFAULT_SOURCE,
    connect_src: Optional[Iterable[str]] = None,
    default_src: Optional[Iterable[str]] = None,
    frame_src: Optional[Iterable[str]] = None,
) -> Dict[str, str]:
    """Return the directive -> value mapping in serialization order."""
    default_tokens = [*BASELINE_DEFAULT_SRC, *_listed(default_src)]
    frame_tokens = [*BASELINE_FRAME_SRC, *_listed(frame_src)]

    computed = {
        "default-src": f"{DEFAULT_SRC_PREFIX} {' '.join(default_tokens)}",
        "connect-src": " ".join(connect_src_tokens(source, connect_src)),
        "frame-src": " ".join(frame_tokens),
        "child-src": " ".join(frame_tokens),
    }
    computed.update(FIXED_RULES)
    return {name: computed[name] for name in CSP_DIRECTIVES}


def serialize_csp(rules: Dict[str, str]) -> str:
    return ";".join(f"{name} {value}" for name, value in rules.items())


def meta_csp_tag(csp: str) -> str:
    # No escaping: origin tokens are trusted build configuration.
    return f'<meta http-equiv="Content-Security-Policy" content="{csp}">'


def compose_csp(
    source: str = DEFAULT_SOURCE,
    connect_src: Optional[Iterable[str]] = None,
    default_src: Optional[Iterable[str]] = None,
    frame_src: Optional[Iterable[str]] = None,
) -> str:
    """Build the CSP <meta> tag for the given source and extra origins."""
    return meta_csp_tag(serialize_csp(build_csp_rules(source, connect_src, default_src, frame_src)))


__all__ = [
    "BASELINE_DEFAULT_SRC",
    "BASELINE_FRAME_SRC",
    "DEFAULT_SRC_PREFIX",
    "FIXED_RULES",
    "build_csp_rules",
    "compose_csp",
    "connect_src_tokens",
    "meta_csp_tag",
    "serialize_csp",
]
