"""Logging setup shared by the CodeShare components."""

import logging
import os
import re
import sys
from contextvars import ContextVar, Token
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

NO_REQUEST = '-'

SENSITIVE_KEYS = ('secret_hash', 'secret', 'password', 'pin', 'token', 'authorization')

_request_id: ContextVar[str] = ContextVar('request_id', default=NO_REQUEST)


def set_request_id(request_id: str) -> Token:
    """
    Bind a request id to the current context until reset_request_id().

    Returns:
        Token to pass to reset_request_id()
    """
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Stamp every record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


class SensitiveDataFilter(logging.Filter):
    """
    Mask secret-like `key=value` / `"key": "value"` pairs in log output.

    The message is rendered with its arguments first, so values passed as
    %-style args are masked the same way as values in f-strings.
    """

    PATTERN = re.compile(
        r'((?:%s)["\']?\s*[:=]\s*["\']?)([^"\'}\s,]+)' % '|'.join(SENSITIVE_KEYS),
        re.IGNORECASE,
    )
    REPLACEMENT = r'\1***MASKED***'

    def mask(self, text: str) -> str:
        return self.PATTERN.sub(self.REPLACEMENT, text)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self.mask(record.getMessage())
        record.args = None
        return True


def setup_logging(component_name: str, log_level: Optional[str] = None) -> logging.Logger:
    """
    Set up the stdout handler for a component's logger tree.

    Child loggers obtained with get_logger() propagate to this one, so the
    handler's filters apply to every module of the component.

    Args:
        component_name: Top-level logger name (e.g., 'codeshare')
        log_level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')

    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
