"""Environment-driven engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "HILITE_ENGINE_"

DEFAULT_QUIET_MS = 120
DEFAULT_HISTORY_LIMIT = 200
DEFAULT_LANGUAGE = "kotlin"


def env(
    name: str,
    default: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def env_flag(
    name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(
    name: str,
    fallback: int,
    *,
    minimum: int = 1,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    raw = env(name, environ=environ)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= minimum else fallback


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Tunables shared by the highlighter, history, and demo host."""

    quiet_ms: int = DEFAULT_QUIET_MS
    history_limit: int = DEFAULT_HISTORY_LIMIT
    language: str = DEFAULT_LANGUAGE
    rules_file: Optional[str] = None

    def __post_init__(self) -> None:
        if self.quiet_ms < 0:
            raise ValueError("quiet_ms cannot be negative")
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Read ``HILITE_ENGINE_*`` variables; malformed numbers keep defaults."""

        return cls(
            quiet_ms=env_int("QUIET_MS", DEFAULT_QUIET_MS, minimum=0, environ=environ),
            history_limit=env_int(
                "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT, environ=environ
            ),
            language=(env("LANGUAGE", environ=environ) or DEFAULT_LANGUAGE).lower(),
            rules_file=env("RULES_FILE", environ=environ) or None,
        )


__all__ = [
    "ENV_PREFIX",
    "EngineSettings",
    "env",
    "env_flag",
    "env_int",
]
