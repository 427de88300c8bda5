"""Settings loaded from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

ENV_PREFIX = "ITEMSTORE_"


class Settings(BaseModel):
    database_url: str = "sqlite:///items.db"
    in_memory: bool = False

    # HTTP view
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``ITEMSTORE_*`` variables; unset ones keep
        their defaults."""
        load_dotenv()
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        return cls.model_validate(values)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    global _settings
    _settings = None
