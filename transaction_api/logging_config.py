import sys

from loguru import logger

from .config import Settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(settings: Settings, log_to_file: bool = True):
    """Replace loguru's default sink with stdout and a rotating file."""
    logger.remove()
    logger.add(sys.stdout, format=LOG_FORMAT, level=settings.log_level)
    if log_to_file and settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level
        )
