#!/usr/bin/env python3
# readcommand/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, readcommand.ini, readcommand.json, readcommand.toml
  3) Environment variables prefixed with READCOMMAND_ (prefix stripped)

Validation:
  - PS1 / PS2: str (may be empty)
  - PROMPT_COLOR: None or a key of ui.ANSI
  - FRONTEND: one of {'auto','prompt_toolkit','readline','plain'}
  - ENABLE_COMPLETION: bool
  - HISTORY_FILE_PATH / LOG_FILE_PATH: None or normalized path
  - HISTORY_SIZE: int >= 0 (0 keeps everything)
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional
import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+

from readcommand.interface.cli import FRONTENDS
from readcommand.ui import ANSI

ENV_PREFIX = "READCOMMAND_"

# ---------- defaults ----------


def _default_history_path() -> str:
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or str(
            Path.home() / "AppData" / "Local")
        return str(Path(base) / "readcommand" / "history")
    # POSIX
    return str(Path.home() / ".local" / "share" / "readcommand" / "history")


DEFAULTS: dict[str, Any] = {
    "PS1": "> ",
    "PS2": "> ",
    "PROMPT_COLOR": None,
    "FRONTEND": "auto",
    "ENABLE_COMPLETION": True,
    "HISTORY_FILE_PATH": _default_history_path(),
    "HISTORY_SIZE": 1000,
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class ReaderConfig:
    ps1: str
    ps2: str
    prompt_color: str | None
    frontend: str
    enable_completion: bool

    history_file_path: Path | None
    history_size: int

    log_level: str | None
    log_file_path: Path | None

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    # No interpolation: prompts may contain '%'
    cfg = configparser.ConfigParser(interpolation=None)
    if not cfg.read(path, encoding="utf-8"):
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'history': {'size': 50}} -> {'HISTORY_SIZE': 50}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(base: Path) -> list[Path]:
    return [
        base / ".env",
        base / "readcommand.ini",
        base / "readcommand.json",
        base / "readcommand.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key}: expected boolean, got {val!r}")


def _as_int(key: str, val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except ValueError as exc:
        raise ValueError(f"{key}: expected integer, got {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_choice(key: str, val: Any, allowed: tuple[str, ...]) -> str:
    s = str(val).strip().lower()
    if s not in allowed:
        raise ValueError(f"{key} must be one of {list(allowed)}, got {val!r}")
    return s


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_prompt_color(val: Any) -> str | None:
    color = _as_opt_str(val)
    if color is None:
        return None
    if color not in ANSI:
        raise ValueError(f"PROMPT_COLOR must be an ANSI style name, got {color!r}")
    return color


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _strip_prefix(d: Mapping[str, Any]) -> dict[str, Any]:
    """Accept both READCOMMAND_PS1 and PS1 in config files."""
    return {(k[len(ENV_PREFIX):] if k.startswith(ENV_PREFIX) else k): v for k, v in d.items()}


def _merge_sources(
    base: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(base or Path.cwd()):
        # Path(".env").suffix is empty, so dotenv files are matched by name
        if file.name == ".env":
            loaded: Mapping[str, Any] = _load_env_file(file)
        elif file.suffix == ".ini":
            loaded = _load_ini_file(file)
        elif file.suffix == ".json":
            loaded = _flatten_mapping(_load_json_file(file))
        elif file.suffix == ".toml":
            loaded = _flatten_mapping(_load_toml_file(file))
        else:
            continue
        merged.update(_strip_prefix(_normalize_keys(loaded)))

    # Environment variables override all; only take prefixed keys
    env = os.environ if environ is None else environ
    merged.update({k[len(ENV_PREFIX):]: v for k, v in env.items()
                   if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)})
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> ReaderConfig:
    ps1 = str(config.get("PS1", DEFAULTS["PS1"]) or "")
    ps2 = str(config.get("PS2", DEFAULTS["PS2"]) or "")
    prompt_color = _as_prompt_color(config.get("PROMPT_COLOR"))
    frontend = _as_choice("FRONTEND", config.get(
        "FRONTEND", DEFAULTS["FRONTEND"]), FRONTENDS)
    enable_completion = _as_bool("ENABLE_COMPLETION", config.get(
        "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]))
    history_file_path = _as_opt_path(config.get("HISTORY_FILE_PATH"))
    history_size = _as_int("HISTORY_SIZE", config.get(
        "HISTORY_SIZE", DEFAULTS["HISTORY_SIZE"]))
    log_level = _as_log_level(config.get("LOG_LEVEL"))
    log_file_path = _as_opt_path(config.get("LOG_FILE_PATH"))

    if history_size < 0:
        raise ValueError("HISTORY_SIZE must be >= 0")

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ReaderConfig(
        ps1=ps1,
        ps2=ps2,
        prompt_color=prompt_color,
        frontend=frontend,
        enable_completion=enable_completion,
        history_file_path=history_file_path,
        history_size=history_size,
        log_level=log_level,
        log_file_path=log_file_path,
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    base: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReaderConfig:
    """
    Load, merge, normalize, and validate configuration.

    `base` is the directory searched for config files (default: CWD) and
    `environ` the environment mapping (default: os.environ).
    Raises ValueError naming the offending key on invalid values.
    """
    return _validate_and_build(_merge_sources(base, environ))
