"""Runtime configuration read from ``SONNET_*`` environment variables.

Every setting has a safe default: the CMU data bundled with ``pronouncing``
as the base table, an in-memory overlay, the Shakespearean form and lenient
meter matching.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _env_bool(env: Mapping[str, str], name: str, default: str = "0") -> bool:
    return str(env.get(name, default)).strip().lower() in {"1", "true", "yes", "on"}


def _env_path(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    dict_path: Optional[str] = None
    overlay_path: Optional[str] = None
    default_form: str = "shakespearean"
    strict: bool = False
    share: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            log_level=env.get("SONNET_LOG_LEVEL", "INFO"),
            dict_path=_env_path(env, "SONNET_DICT_PATH"),
            overlay_path=_env_path(env, "SONNET_OVERLAY_PATH"),
            default_form=env.get("SONNET_DEFAULT_FORM", "shakespearean"),
            strict=_env_bool(env, "SONNET_STRICT"),
            share=_env_bool(env, "SONNET_SHARE"),
        )


SETTINGS = Settings.from_env()

__all__ = ["SETTINGS", "Settings"]
