"""cordova-inject Python package.

Public API:
  - import from `cordova_inject.api` (preferred) or `import cordova_inject` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    Document,
    InjectionConfig,
    build_injector,
    compose_csp,
    extract_fragments,
)
