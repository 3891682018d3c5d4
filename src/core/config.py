"""Application configuration, read from the environment (a local .env file is picked up as well)."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Config:
    log_level: str
    log_format: str
    date_format: str


@lru_cache
def get_config() -> Config:
    load_dotenv()
    return Config(
        log_level=os.getenv("OTHELLO_LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("OTHELLO_LOG_FORMAT", DEFAULT_LOG_FORMAT),
        date_format=os.getenv("OTHELLO_DATE_FORMAT", DEFAULT_DATE_FORMAT),
    )


def configure_logging(config: Config | None = None) -> None:
    config = config or get_config()
    logging.basicConfig(
        level=config.log_level,
        format=config.log_format,
        datefmt=config.date_format,
    )
