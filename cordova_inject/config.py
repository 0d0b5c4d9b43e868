"""Load injection config from JSON / environment.

Accepted file format (all keys optional):

  {
    "connectSrc": ["https://api.example.com"],
    "defaultSrc": [],
    "frameSrc": ["https://player.vimeo.com"],
    "source": "index.html",            # or e.g. "http://localhost:8080"
    "template": "path/to/index.html.inject",
    "pattern": "**/*.html"
  }

snake_case spellings (connect_src, default_src, frame_src, template_path) are
accepted too. A relative "template" is resolved against the config file's folder.
"""

from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from cordova_inject.errors import ConfigError
from cordova_inject.model import DEFAULT_SOURCE, InjectionConfig

ENV_SOURCE = "CORDOVA_INJECT_SOURCE"
ENV_TEMPLATE = "CORDOVA_INJECT_TEMPLATE"
ENV_CONFIG = "CORDOVA_INJECT_CONFIG"

_KEYS = {
    "connectSrc": "connect_src",
    "connect_src": "connect_src",
    "defaultSrc": "default_src",
    "default_src": "default_src",
    "frameSrc": "frame_src",
    "frame_src": "frame_src",
    "source": "source",
    "template": "template_path",
    "template_path": "template_path",
    "pattern": "pattern",
}
_LIST_FIELDS = ("connect_src", "default_src", "frame_src")


def _str_list(key: str, v: Any) -> List[str]:
    if v is None:
        return []
    if not isinstance(v, list):
        raise ConfigError(f"{key} must be a list of strings; got {type(v).__name__}")
    out: List[str] = []
    for i, x in enumerate(v):
        if not isinstance(x, str) or not x.strip():
            raise ConfigError(f"{key}[{i}] must be a non-empty string")
        out.append(x.strip())
    return out


def config_from_mapping(obj: Mapping[str, Any], *, base_dir: Optional[Path] = None) -> InjectionConfig:
    if not isinstance(obj, Mapping):
        raise ConfigError(f"config must be a JSON object; got {type(obj).__name__}")

    unknown = sorted(k for k in obj if k not in _KEYS)
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    fields: Dict[str, Any] = {}
    for key, v in obj.items():
        name = _KEYS[key]
        if name in _LIST_FIELDS:
            fields[name] = _str_list(key, v)
            continue
        if v is None:
            continue
        if not isinstance(v, str) or not v.strip():
            raise ConfigError(f"{key} must be a non-empty string")
        fields[name] = v.strip()

    tpl = fields.get("template_path")
    if tpl and base_dir is not None and not Path(tpl).is_absolute():
        fields["template_path"] = str(base_dir / tpl)

    return InjectionConfig(**fields)


def _read_json(p: Path) -> Any:
    try:
        return json.loads(p.read_text(encoding="utf-8", errors="replace"))
    except OSError as e:
        raise ConfigError(f"cannot read config file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"config file {p} is not valid JSON: {e}") from e


def load_config(path: Union[str, Path]) -> InjectionConfig:
    p = Path(path)
    return config_from_mapping(_read_json(p), base_dir=p.resolve().parent)


def env_defaults(environ: Optional[Mapping[str, str]] = None) -> InjectionConfig:
    env = os.environ if environ is None else environ
    source = (env.get(ENV_SOURCE) or "").strip() or DEFAULT_SOURCE
    template = (env.get(ENV_TEMPLATE) or "").strip() or None
    return InjectionConfig(source=source, template_path=template)


def merge_config(
    base: InjectionConfig,
    *,
    connect_src: Iterable[str] = (),
    default_src: Iterable[str] = (),
    frame_src: Iterable[str] = (),
    source: Optional[str] = None,
    template_path: Optional[str] = None,
    pattern: Optional[str] = None,
) -> InjectionConfig:
    """Layer overrides on `base`: scalars replace, origin lists append."""
    return replace(
        base,
        connect_src=(*base.connect_src, *connect_src),
        default_src=(*base.default_src, *default_src),
        frame_src=(*base.frame_src, *frame_src),
        source=source if source else base.source,
        template_path=template_path if template_path else base.template_path,
        pattern=pattern if pattern else base.pattern,
    )


def resolve_config(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InjectionConfig:
    """Environment defaults, overlaid by the config file when one is given (or set via env)."""
    env = os.environ if environ is None else environ
    base = env_defaults(env)
    path = config_path or (env.get(ENV_CONFIG) or "").strip() or None
    if not path:
        return base
    p = Path(path)
    raw = _read_json(p)
    file_cfg = config_from_mapping(raw, base_dir=p.resolve().parent)
    return merge_config(
        base,
        connect_src=file_cfg.connect_src,
        default_src=file_cfg.default_src,
        frame_src=file_cfg.frame_src,
        # Only a source the file actually sets may replace the env default.
        source=file_cfg.source if "source" in raw else None,
        template_path=file_cfg.template_path,
        pattern=file_cfg.pattern,
    )


__all__ = [
    "ENV_CONFIG",
    "ENV_SOURCE",
    "ENV_TEMPLATE",
    "config_from_mapping",
    "env_defaults",
    "load_config",
    "merge_config",
    "resolve_config",
]
