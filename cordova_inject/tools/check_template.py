#!/usr/bin/env python3
from __future__ import annotations

import argparse
import re
from typing import List

from cordova_inject.config import resolve_config
from cordova_inject.errors import InjectionError
from cordova_inject.fragments import DEFAULT_TEMPLATE_PATH, extract_fragments
from cordova_inject.model import InjectionConfig
from cordova_inject.sizes import format_bytes
from cordova_inject.util.console import die, eprint

PREFIX = "cordova-inject-check"

# Characters that break out of the content="..." attribute or split a CSP token.
_UNSAFE_ORIGIN_RE = re.compile(r"""["'<>\s;]""")


def _die(msg: str, rc: int = 2) -> int:
    return die(PREFIX, msg, rc)


def origin_warnings(cfg: InjectionConfig) -> List[str]:
    warnings: List[str] = []
    fields = (
        ("connectSrc", cfg.connect_src),
        ("defaultSrc", cfg.default_src),
        ("frameSrc", cfg.frame_src),
        ("source", (cfg.source,)),
    )
    for name, values in fields:
        for i, v in enumerate(values):
            # Quoted keywords like 'self' are legitimate CSP sources.
            if re.fullmatch(r"'[a-z0-9-]+'", v):
                continue
            if _UNSAFE_ORIGIN_RE.search(v):
                warnings.append(f"{name}[{i}] {v!r} contains characters that will corrupt the CSP meta tag")
    return warnings


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PREFIX,
        description="Check an injection template (and optional config) before a build.",
    )
    ap.add_argument("--template", default=None, help="Template file (default: config/env template or the bundled one)")
    ap.add_argument("--config", default=None, help="JSON config file whose origins are checked too")
    ap.add_argument("--strict", action="store_true", help="Treat warnings as errors (exit 4)")
    ns = ap.parse_args(argv)

    try:
        cfg = resolve_config(ns.config)
    except InjectionError as e:
        return _die(str(e))

    template = ns.template or cfg.template_path or str(DEFAULT_TEMPLATE_PATH)
    try:
        fragments = extract_fragments(template)
    except InjectionError as e:
        return _die(str(e))

    for name in ("head_start", "head_end", "body_start", "body_end"):
        size = len(getattr(fragments, name).encode("utf-8"))
        print(f"[{PREFIX}] {name}: {format_bytes(size)}")

    warnings = origin_warnings(cfg)
    for w in warnings:
        eprint(f"[{PREFIX}] WARN: {w}")
    if warnings and ns.strict:
        return 4

    print(f"[{PREFIX}] OK: {template}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
