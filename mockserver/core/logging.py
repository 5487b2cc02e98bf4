"""Logging utilities for the mock game server."""
import logging
import sys

from mockserver.core.config import Settings
from mockserver.core.request_context import get_request_id

APP_LOGGER_NAME = "mock_server"

_record_factory_installed = False


def configure_logging(
    settings: Settings, *,
    logger_name: str = APP_LOGGER_NAME,
) -> logging.Logger:
    """Configure the root logger and return the application logger.

    The record factory that stamps ``request_id`` on every record is only
    installed once per process, so building several apps (as the test suite
    does) does not stack factories.

    Args:
        settings: Application settings containing log-level information.
        logger_name: Name of the logger to retrieve.

    Returns:
        Configured logger instance.
    """
    global _record_factory_installed

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "[%(filename)s:%(lineno)d] - request_id=%(request_id)s - %(message)s"
        ),
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    if not _record_factory_installed:
        old_factory = logging.getLogRecordFactory()

        def record_factory(*args, **kwargs) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            record.request_id = get_request_id() or "system"
            return record

        logging.setLogRecordFactory(record_factory)
        _record_factory_installed = True

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    logger.debug("Logging configured with level %s", logging.getLevelName(log_level))
    return logger
