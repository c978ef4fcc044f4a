# pos_core/config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Config:
    db_path: str = "pos.db"
    snapshot_key: str = "pos_db"
    log_level: str = "INFO"
    default_username: str = "admin"
    default_password: str = "admin"
    company_name: str = "My Store"
    currency: str = "EGP"


def load_config() -> Config:
    return Config(
        db_path=os.getenv("POS_DB_PATH", "pos.db").strip() or "pos.db",
        snapshot_key=os.getenv("POS_SNAPSHOT_KEY", "pos_db").strip() or "pos_db",
        log_level=os.getenv("POS_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        default_username=os.getenv("POS_DEFAULT_USERNAME", "admin"),
        default_password=os.getenv("POS_DEFAULT_PASSWORD", "admin"),
        company_name=os.getenv("POS_COMPANY_NAME", "My Store"),
        currency=os.getenv("POS_CURRENCY", "EGP"),
    )


def configure_logging(level_name: str = "INFO") -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        root.setLevel(level)
