from __future__ import annotations

import multiprocessing
import os
from dataclasses import dataclass


def _default_start_method() -> str:
    methods = multiprocessing.get_all_start_methods()
    return "forkserver" if "forkserver" in methods else "spawn"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 3030
    timeout: float | None = 10.0
    start_method: str = "spawn"
    class_prefix: str = "hl-"
    log_level: str = "info"
    quiet: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        timeout = _env_float("HIGHLIGHT_TIMEOUT", 10.0)
        if timeout < 0:
            raise ValueError(f"HIGHLIGHT_TIMEOUT must not be negative, got {timeout}")
        start_method = os.getenv("HIGHLIGHT_START_METHOD") or _default_start_method()
        if start_method not in multiprocessing.get_all_start_methods():
            raise ValueError(
                f"HIGHLIGHT_START_METHOD {start_method!r} is not available. "
                f"Supported: {multiprocessing.get_all_start_methods()}"
            )
        return cls(
            host=os.getenv("HIGHLIGHT_HOST", "127.0.0.1"),
            port=_env_int("HIGHLIGHT_PORT", 3030),
            timeout=timeout if timeout > 0 else None,
            start_method=start_method,
            class_prefix=os.getenv("HIGHLIGHT_CLASS_PREFIX", "hl-"),
            log_level=os.getenv("LOG_LEVEL", "info"),
            quiet=os.getenv("QUIET", "").lower() == "true",
        )
