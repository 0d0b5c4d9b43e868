# cordova_inject/pipeline.py
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List, Pattern, Sequence, Union

from cordova_inject.model import Document, InjectionFragmentSet

SCRIPT_MARKER = "<!-- inject:cordova-script -->"
CSP_MARKER = "<!-- inject:cordova-csp -->"
CORDOVA_SCRIPT_TAG = '<script src="cordova.js" async></script>'

# <base href="..."> in any attribute/whitespace/quoting variant, self-closing or not.
# Both the tag name and the href attribute must be whitespace-delimited
# (not <base-widget>, not data-href).
BASE_TAG_RE = re.compile(
    r"""<base\s(?:[^>]*?\s)?href\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)[^>]*>""",
    flags=re.IGNORECASE,
)


_HTML_ENCODING = "utf-8"
_HTML_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Substitution:
    """Replace the first occurrence of `pattern` with literal `replacement`."""

    label: str
    pattern: Union[str, Pattern[str]]
    replacement: str

    def apply(self, text: str) -> str:
        if isinstance(self.pattern, str):
            i = text.find(self.pattern)
            if i < 0:
                return text
            start, end = i, i + len(self.pattern)
        else:
            m = self.pattern.search(text)
            if m is None:
                return text
            start, end = m.span()
        return text[:start] + self.replacement + text[end:]


def fragment_steps(fragments: InjectionFragmentSet) -> List[Substitution]:
    return [
        Substitution("head-start", "<head>", "<head>" + fragments.head_start),
        Substitution("head-end", "</head>", fragments.head_end + "</head>"),
        Substitution("body-start", "<body>", "<body>" + fragments.body_start),
        Substitution("body-end", "</body>", fragments.body_end + "</body>"),
    ]


def shell_steps(csp_meta: str) -> List[Substitution]:
    return [
        Substitution("base-href", BASE_TAG_RE, ""),
        Substitution("cordova-script", SCRIPT_MARKER, CORDOVA_SCRIPT_TAG),
        Substitution("cordova-csp", CSP_MARKER, csp_meta),
    ]


def build_steps(fragments: InjectionFragmentSet, csp_meta: str) -> List[Substitution]:
    """Full ordered substitution list applied to every HTML document."""
    return fragment_steps(fragments) + shell_steps(csp_meta)


def transform_html(text: str, steps: Sequence[Substitution]) -> str:
    for step in steps:
        text = step.apply(text)
    return text


def transform_document(doc: Document, steps: Sequence[Substitution]) -> Document:
    text = doc.contents.decode(_HTML_ENCODING, _HTML_ERRORS)
    out = transform_html(text, steps)
    if out == text:
        return doc
    return replace(doc, contents=out.encode(_HTML_ENCODING, _HTML_ERRORS))


__all__ = [
    "BASE_TAG_RE",
    "CORDOVA_SCRIPT_TAG",
    "CSP_MARKER",
    "SCRIPT_MARKER",
    "Substitution",
    "build_steps",
    "fragment_steps",
    "shell_steps",
    "transform_document",
    "transform_html",
]
