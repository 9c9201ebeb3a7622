import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    clone_depth: int = 50
    log_max_count: int = 100
    max_display_commits: int = 50
    git_timeout: float = 60.0
    clone_timeout: float = 300.0
    history_workers: int = 1
    debug: bool = False
    log_level: str = "WARNING"
    allow_file_urls: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            clone_depth=_env_int("GIT_EXPLORER_CLONE_DEPTH", cls.clone_depth),
            log_max_count=_env_int("GIT_EXPLORER_LOG_MAX_COUNT", cls.log_max_count),
            max_display_commits=_env_int("GIT_EXPLORER_MAX_DISPLAY_COMMITS", cls.max_display_commits),
            git_timeout=_env_float("GIT_EXPLORER_GIT_TIMEOUT", cls.git_timeout),
            clone_timeout=_env_float("GIT_EXPLORER_CLONE_TIMEOUT", cls.clone_timeout),
            history_workers=_env_int("GIT_EXPLORER_HISTORY_WORKERS", cls.history_workers),
            debug=_env_bool("GIT_EXPLORER_DEBUG"),
            log_level=os.getenv("GIT_EXPLORER_LOG_LEVEL", cls.log_level).upper(),
            allow_file_urls=_env_bool("GIT_EXPLORER_ALLOW_FILE_URLS"),
        )
