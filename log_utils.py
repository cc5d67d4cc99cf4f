"""Colored console logging on top of loguru.

Every module binds its own namespace so a line reads
``[2026-01-01T10:00:00.000Z] [QuerySubmission] [SUCCESS] Found submit button``.
"""

import sys

from loguru import logger


DEFAULT_NAMESPACE = "Scraper"
STEP_LEVEL = "STEP"

LOG_FORMAT = (
    "<level>[{time:YYYY-MM-DD[T]HH:mm:ss.SSS!UTC}Z] [{extra[namespace]}] "
    "[{extra[label]}]</level> {message}"
)


def _ensure_step_level():
    try:
        logger.level(STEP_LEVEL)
    except ValueError:
        logger.level(STEP_LEVEL, no=22, color="<bold><white>")


def _label(record):
    # Steps print as "STEP 3", everything else as the level name.
    step = record["extra"].get("step")
    if record["level"].name == STEP_LEVEL and step is not None:
        record["extra"]["label"] = f"STEP {step}"
    else:
        record["extra"]["label"] = record["level"].name.replace("WARNING", "WARN")


def setup_logging(level="DEBUG", sink=None):
    """Replace loguru's default stderr sink with one colored stdout sink."""
    _ensure_step_level()
    logger.remove()
    logger.configure(extra={"namespace": DEFAULT_NAMESPACE}, patcher=_label)
    return logger.add(
        sink or sys.stdout,
        level=level.upper() if isinstance(level, str) else level,
        format=LOG_FORMAT,
        colorize=None,
        backtrace=False,
        diagnose=False,
    )


def get_logger(namespace=DEFAULT_NAMESPACE):
    _ensure_step_level()
    return logger.bind(namespace=namespace)


def log_step(log, step, message):
    log.bind(step=step).log(STEP_LEVEL, message)


def log_error(log, message, error=None):
    """Log an error line, with the traceback of ``error`` when given."""
    if error is None:
        log.error(message)
    else:
        log.opt(exception=error).error(message)
