"""
Error Reporting

Records exceptions that reach an outer boundary and lets execution
continue. Whether a failure is fatal is left to the caller.

Author: SyncGuard Project
License: MIT
"""

import traceback
from contextlib import contextmanager
from typing import Iterator, Mapping

from .logger import get_logger

logger = get_logger(__name__)

SEPARATOR = "!" * 52


def log_exception(error: BaseException, component: str = "unknown") -> None:
    """
    Write the details of an exception to the log at error level.

    Records the message, the originating component, the exception type,
    the traceback, and every entry of a ``data`` mapping attached to the
    exception.

    Args:
        error: The exception to record
        component: Name of the component the exception came from
    """
    logger.error(SEPARATOR)
    logger.error(f"Message: {error}")
    logger.error("--")
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    logger.error(f"StackTrace: {stack.rstrip()}")
    logger.error("--")
    logger.error(f"Source: {component} Type: {type(error).__name__}")

    data = getattr(error, "data", None)
    if isinstance(data, Mapping) and data:
        logger.error("--")
        for key, value in data.items():
            logger.error(f"key: {key} value: {value}")

    logger.error(SEPARATOR)


@contextmanager
def report_errors(component: str, reraise: bool = False) -> Iterator[None]:
    """
    Capture and log any exception raised inside the block.

    Args:
        component: Name recorded as the source of the failure
        reraise: Propagate the exception after logging it

    Example:
        with report_errors("uploader"):
            upload(path)
    """
    try:
        yield
    except Exception as e:
        log_exception(e, component)
        if reraise:
            raise
