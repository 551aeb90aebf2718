"""
Logging setup shared by the Streamlit app and the gateway.

Everything logs under the ``advisory`` namespace via
``logging.getLogger(__name__)``; only that namespace gets a handler.

Log Levels:
    DEBUG:   Extraction results, status transitions, progress ticker start/stop
    INFO:    Request attempts, gateway forwards, identifier dialog outcomes
    WARNING: 502/timeout retries, unusable artifact URL, overlapping submissions
    ERROR:   All attempts exhausted, gateway upstream unreachable
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the ``advisory`` logger and set its level.

    Streamlit re-executes ``app.py`` on every interaction, so repeated
    calls only change the level.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR). Unknown names fall
            back to INFO.

    Returns:
        The ``advisory`` namespace logger.
    """
    global _handler  # noqa: PLW0603

    app_logger = logging.getLogger("advisory")

    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(_handler)
        # Streamlit and uvicorn install their own root handlers
        app_logger.propagate = False

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return app_logger
