"""
Runtime configuration, read from the environment and an optional .env file
"""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings"""
    db_path: str = "bakery.db"
    random_seed: int = 1
    log_level: str = "INFO"


def load_settings() -> Settings:
    return Settings(
        db_path=os.getenv('BAKERY_DB_PATH', 'bakery.db'),
        random_seed=int(os.getenv('BAKERY_RANDOM_SEED', '1')),
        log_level=os.getenv('BAKERY_LOG_LEVEL', 'INFO').upper()
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
