import locale
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config.settings import settings
from .services.browser_service import RecipeBrowser

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optionally rotating file) handlers to the package
    logger. Safe to call more than once.
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_file = settings.LOG_FILE if log_file is None else log_file

    package_logger = logging.getLogger("backend")
    package_logger.setLevel(level)

    # Replace handlers from a previous call
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    # Create formatters
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # File handler, only when a log file is configured
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    return package_logger

def create_browser() -> RecipeBrowser:
    """Set up logging and return a browser over the seed catalog"""
    configure_logging()
    try:
        # Title sorting collates with the user's locale rather than the C default
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Could not apply the environment's collation locale: {e}")

    if not settings.validate_filter_ranges():
        logger.warning("Configured filter defaults fall outside their slider ranges")

    browser = RecipeBrowser()
    logger.info(f"Recipe browser ready: {browser.result_summary} in catalog")
    return browser
