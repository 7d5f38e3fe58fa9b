import os
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    resolver: str = "fs"
    keep_going: bool = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def get_settings() -> Settings:
    """Build settings from ``TAGCASE_*`` environment variables."""
    return Settings(
        resolver=os.getenv("TAGCASE_RESOLVER", "fs").strip().lower() or "fs",
        keep_going=_env_flag("TAGCASE_KEEP_GOING"),
    )
