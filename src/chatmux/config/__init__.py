"""Application configuration"""

import logging
from dotenv import load_dotenv

from .loader import load_raw_config
from .core import Settings

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RAW_CONFIG = load_raw_config()

settings = Settings(_RAW_CONFIG)

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=settings.LOG_LEVEL)
logging.getLogger("discord.gateway").setLevel(logging.WARNING)
logging.getLogger("discord.http").setLevel(logging.WARNING)


__all__ = ["settings", "Settings", "load_raw_config", "LOG_FORMAT", "DATE_FORMAT"]
