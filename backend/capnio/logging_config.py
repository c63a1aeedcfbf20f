"""Logging configuration for the Capnio monitoring backend."""

import logging
from datetime import datetime

from capnio.config import LOG_DIR, LOG_LEVEL

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries that log every request or statement at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def setup_logging() -> None:
    """Attach console and dated file handlers to the root logger.

    File logging is skipped when ``LOG_DIR`` is unset. Calling this twice
    (reload, tests) does not stack handlers.
    """
    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if any(getattr(h, "_capnio", False) for h in root_logger.handlers):
        return

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = None
    if LOG_DIR is not None:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = LOG_DIR / f"capnio-{datetime.now().strftime('%Y-%m-%d')}.log"
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        handler._capnio = True
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging initialized at %s (file: %s)", logging.getLevelName(level), log_file or "off"
    )
