from __future__ import annotations
import os
from dataclasses import dataclass


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class VocabularyConfig:
    extra_path: str | None = None  # JSON vocabulary merged into the default table


def get_vocabulary_config() -> VocabularyConfig:
    return VocabularyConfig(extra_path=os.getenv("ROMAN_URDU_VOCAB") or None)


@dataclass(frozen=True)
class ConsoleConfig:
    prefix: str = ""


def get_console_config() -> ConsoleConfig:
    return ConsoleConfig(prefix=os.getenv("ROMAN_URDU_CONSOLE_PREFIX", ""))


@dataclass(frozen=True)
class ApiConfig:
    api_key: str | None = None
    allow_execute: bool = False
    rate_limit_n: int = 5
    rate_limit_window_sec: float = 1.0
    execute_time_limit_sec: float = 2.0


def get_api_config() -> ApiConfig:
    return ApiConfig(
        api_key=os.getenv("API_KEY") or None,
        allow_execute=_flag("ROMAN_URDU_ALLOW_EXECUTE"),
        rate_limit_n=int(os.getenv("RATE_LIMIT_N", "5")),
        rate_limit_window_sec=float(os.getenv("RATE_LIMIT_WINDOW_SEC", "1.0")),
        execute_time_limit_sec=float(os.getenv("ROMAN_URDU_EXECUTE_TIME_LIMIT", "2.0")),
    )
