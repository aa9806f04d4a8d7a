"""Runtime settings, read from ``ANAGRAMS_*`` environment variables."""
import os
from dataclasses import dataclass, field, replace

from .words import DEFAULT_JOINERS, JoinerSet

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    joiners: JoinerSet = field(default_factory=JoinerSet)
    num_reducers: int = 4
    num_mappers: int = 4
    max_attempts: int = 3
    include_signature: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if isinstance(self.joiners, str):
            object.__setattr__(self, "joiners", JoinerSet(self.joiners))
        for name in ("num_reducers", "num_mappers", "max_attempts"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            joiners=JoinerSet(os.getenv("ANAGRAMS_JOINERS", DEFAULT_JOINERS)),
            num_reducers=_env_int("ANAGRAMS_REDUCERS", 4),
            num_mappers=_env_int("ANAGRAMS_MAPPERS", 4),
            max_attempts=_env_int("ANAGRAMS_MAX_ATTEMPTS", 3),
            include_signature=_env_bool("ANAGRAMS_WITH_SIGNATURE", False),
            log_level=os.getenv("ANAGRAMS_LOG_LEVEL", "INFO").upper(),
        )

    def replace(self, **changes) -> "Settings":
        """Copy with the non-None ``changes`` applied (CLI overrides)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
