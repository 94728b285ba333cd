from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    pass


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{name} cannot be negative")
    return value


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass
class Settings:
    ai_delay: float = 2.0
    ai_seed: Optional[int] = None
    strict_rules: bool = False
    rejected_move_consumes_turn: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            ai_delay=_env_float("BECKERS_AI_DELAY", defaults.ai_delay),
            ai_seed=_env_int("BECKERS_AI_SEED"),
            strict_rules=_env_bool("BECKERS_STRICT_RULES", defaults.strict_rules),
            rejected_move_consumes_turn=_env_bool(
                "BECKERS_REJECTED_MOVE_CONSUMES_TURN", defaults.rejected_move_consumes_turn
            ),
            log_level=(os.getenv("BECKERS_LOG_LEVEL", "") or defaults.log_level).strip().upper(),
        )


__all__ = ["ConfigError", "Settings"]
