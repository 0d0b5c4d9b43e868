# Template fragment extraction: <head-start>...</head-start> etc.
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Union

from cordova_inject.errors import MalformedTemplateError, TemplateNotFoundError
from cordova_inject.model import InjectionFragmentSet

DEFAULT_TEMPLATE_PATH = Path(__file__).resolve().parent / "templates" / "index.html.inject"

# Tag name -> InjectionFragmentSet field. Order is the reporting order for missing tags.
FRAGMENT_TAGS = (
    ("head-start", "head_start"),
    ("head-end", "head_end"),
    ("body-start", "body_start"),
    ("body-end", "body_end"),
)

_TAG_RES = {
    tag: re.compile(rf"<{tag}>(?P<body>.*?)</{tag}>", flags=re.DOTALL)
    for tag, _ in FRAGMENT_TAGS
}


def extract_fragments_from_text(text: str, *, label: Union[str, Path] = "<template>") -> InjectionFragmentSet:
    """
    Extract the four injection fragments from template text.

    The inner text of each region is kept verbatim (whitespace included).
    First match wins when a tag is repeated. All four tags are required.
    """
    if not text:
        raise TemplateNotFoundError(label)

    found: Dict[str, str] = {}
    missing = []
    for tag, attr in FRAGMENT_TAGS:
        m = _TAG_RES[tag].search(text)
        if m is None:
            missing.append(tag)
            continue
        found[attr] = m.group("body")

    if missing:
        raise MalformedTemplateError(label, missing)

    return InjectionFragmentSet(**found)


def extract_fragments(path: Union[str, Path, None] = None) -> InjectionFragmentSet:
    """Read and extract a template file (default: the bundled one).

    Decoded like HTML documents (UTF-8, surrogateescape), so non-UTF-8 bytes
    in the template reach the output pages unchanged.
    """
    p = Path(path) if path is not None else DEFAULT_TEMPLATE_PATH
    try:
        text = p.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise TemplateNotFoundError(p) from e
    return extract_fragments_from_text(text, label=p)


__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "FRAGMENT_TAGS",
    "extract_fragments",
    "extract_fragments_from_text",
]
