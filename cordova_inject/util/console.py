# cordova_inject/util/console.py
from __future__ import annotations
import sys
from typing import Any

def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def die(prefix: str, msg: str, rc: int = 2) -> int:
    eprint(f"[{prefix}] ERROR: {msg}")
    return rc
