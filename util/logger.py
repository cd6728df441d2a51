import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def init_logger() -> logging.Logger:
    """
    Idempotent root logger setup: stdout always, a size-rotated file under
    LOG_DIR when LOG_TO_FILE is set. Upload keys and image bytes never reach
    the logger; callers log filenames, sizes and attempt counts.
    """
    root = logging.getLogger()
    if getattr(root, "_photodrop_inited", False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
                maxBytes=settings.LOG_MAX_BYTES,
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)
        root.addHandler(h)

    # httpx logs every GitHub round-trip at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    root._photodrop_inited = True  # type: ignore[attr-defined]
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("Logger initialized level=%s file=%s", level, settings.LOG_TO_FILE)
    return logger
