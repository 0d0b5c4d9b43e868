from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

from .api import iter_tree, write_tree
from .config import ENV_CONFIG, ENV_SOURCE, ENV_TEMPLATE, merge_config, resolve_config
from .errors import InjectionError
from .injector import build_injector
from .model import DEFAULT_PATTERN, DEFAULT_SOURCE
from .util.console import die

PREFIX = "cordova-inject"


def _die(msg: str, rc: int = 2) -> int:
    return die(PREFIX, msg, rc)


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PREFIX,
        description="Inject Cordova bootstrap markup and a CSP meta tag into built HTML files.",
    )
    ap.add_argument("--www", required=True, help="Built web assets folder (e.g. www/)")
    ap.add_argument("--out", default=None, help="Write the full tree here instead of rewriting --www in place")
    ap.add_argument("--config", default=None, help=f"JSON config file (default: env {ENV_CONFIG}, if set)")
    ap.add_argument("--connect-src", action="append", default=[], metavar="ORIGIN", help="Extra connect-src entry (repeatable)")
    ap.add_argument("--default-src", action="append", default=[], metavar="ORIGIN", help="Extra default-src entry (repeatable)")
    ap.add_argument("--frame-src", action="append", default=[], metavar="ORIGIN", help="Extra frame-src/child-src entry (repeatable)")
    ap.add_argument(
        "--source",
        default=None,
        help=f"App source, e.g. {DEFAULT_SOURCE} or http://localhost:8080 (default: env {ENV_SOURCE} or {DEFAULT_SOURCE})",
    )
    ap.add_argument("--template", default=None, help=f"Injection template file (default: env {ENV_TEMPLATE} or the bundled one)")
    ap.add_argument("--pattern", default=None, help=f"Glob of files to treat as HTML (default: {DEFAULT_PATTERN})")
    ap.add_argument("--quiet", action="store_true", help="Do not print size reports")
    ns = ap.parse_args(argv)

    www = Path(ns.www)
    if not www.is_dir():
        return _die(f"Missing www folder: {www}")

    try:
        cfg = merge_config(
            resolve_config(ns.config),
            connect_src=ns.connect_src,
            default_src=ns.default_src,
            frame_src=ns.frame_src,
            source=ns.source,
            template_path=ns.template,
            pattern=ns.pattern,
        )
        injector = build_injector(cfg, report_sizes=not ns.quiet)
    except InjectionError as e:
        return _die(str(e))

    try:
        docs = list(iter_tree(www))
    except OSError as e:
        return _die(f"Failed to read {www}: {e}")

    out_docs = injector.transform_all(docs)
    changed = [new for old, new in zip(docs, out_docs) if new.contents != old.contents]

    target = Path(ns.out) if ns.out else www
    try:
        # In place: only touched HTML files are rewritten.
        write_tree(target, out_docs if ns.out else changed)
    except OSError as e:
        return _die(f"Failed to write {target}: {e}", rc=3)

    print(f"[{PREFIX}] OK: {len(changed)} html file(s) injected -> {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
