import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(filename)s:%(lineno)d - %(funcName)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.logging_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
