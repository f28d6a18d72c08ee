"""Runtime settings read from the environment (and a local ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    low_stock_threshold: int = 10
    barcode_max_attempts: int = 100
    page_size: int = 10
    log_level: str = "WARNING"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            data_dir=Path(os.getenv("UIS_DATA_DIR", "data")).expanduser(),
            low_stock_threshold=_int_env("UIS_LOW_STOCK_THRESHOLD", 10, minimum=0),
            barcode_max_attempts=_int_env("UIS_BARCODE_MAX_ATTEMPTS", 100),
            page_size=_int_env("UIS_PAGE_SIZE", 10),
            log_level=os.getenv("UIS_LOG_LEVEL", "WARNING").upper(),
            json_logs=os.getenv("UIS_LOG_FORMAT", "text").lower() == "json",
        )


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings.from_env()
