"""
Configuration and environment loading for the match engine.

- Loads settings.yml (YAML) from repo root if present; falls back to environment variables.
- Exposes SETTINGS with defaults used by entry-point scripts (log level, default ruleset/difficulty, seed).
"""
from dataclasses import dataclass
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

load_dotenv()


def _repo_root() -> str:
    # this file: src/rps_match/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data if isinstance(data, dict) else {}


_cfg = _load_yaml(os.path.join(_repo_root(), "settings.yml"))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None, cfg: dict | None = None) -> Any:
    cfg = _cfg if cfg is None else cfg
    if name in cfg:
        val = cfg[name]
        return cast(val) if cast else val
    env = os.environ.get(name)
    if env is not None:
        return cast(env) if cast else env
    return default


def _optional_int(val: Any) -> int | None:
    if val is None or str(val).strip() == "":
        return None
    return int(val)


@dataclass(frozen=True)
class Settings:
    log_level: str
    default_ruleset: str
    default_difficulty: str
    computer_name: str
    # None means seed from OS entropy
    seed: int | None


def load_settings(cfg: dict | None = None) -> Settings:
    return Settings(
        log_level=str(_get("RPS_LOG_LEVEL", "INFO", cfg=cfg)).upper(),
        default_ruleset=str(_get("RPS_DEFAULT_RULESET", "Classic", cfg=cfg)),
        default_difficulty=str(_get("RPS_DEFAULT_DIFFICULTY", "Normal", cfg=cfg)),
        computer_name=str(_get("RPS_COMPUTER_NAME", "Computer", cfg=cfg)),
        seed=_get("RPS_SEED", None, cast=_optional_int, cfg=cfg),
    )


SETTINGS = load_settings()
