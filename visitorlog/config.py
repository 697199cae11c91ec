"""
Runtime settings and logging setup.

Fixed normalization tables live in rules.py; only values an operator may
reasonably tune are read from the environment (prefix ``VISITORLOG_``).
"""

from __future__ import annotations

import logging.config
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import DEFAULT_STAY_DAYS, RANKING_LIMIT, UNKNOWN_LABEL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VISITORLOG_", env_file=".env", extra="ignore")

    log_level: str = "INFO"
    default_stay_days: int = Field(default=DEFAULT_STAY_DAYS, ge=0)
    ranking_limit: int = Field(default=RANKING_LIMIT, ge=1)
    unknown_label: str = UNKNOWN_LABEL


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": level.upper(),
                },
            },
            "loggers": {
                "visitorlog": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            },
        }
    )
