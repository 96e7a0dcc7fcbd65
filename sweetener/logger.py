import logging
import os
import sys
import structlog
from typing import Any, Optional

LOGGER_NAME = "Sweetener"

_file_handler: Optional[logging.Handler] = None

def configure_logger(log_file: str = "sweetener.log", level: str = "info", json_logs: bool = False):
    """
    Configures structlog to write step lifecycle lines to a fixed local file,
    rendered as JSON or plain console text.
    Safe to call again: the file handler is replaced, not duplicated.
    """
    global _file_handler

    directory = os.path.dirname(log_file)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # 1. Standard Python Logging Configuration
    # - File: the configured level (full step trace)
    # - Console: WARNING only
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))
    log.propagate = False

    formatter = logging.Formatter('%(message)s')

    if _file_handler is not None:
        log.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = logging.FileHandler(log_file, encoding='utf-8')
    _file_handler.setFormatter(formatter)
    log.addHandler(_file_handler)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in log.handlers):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        log.addHandler(console_handler)

    # 2. Structlog Configuration
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

def get_logger(name: str = LOGGER_NAME) -> Any:
    return structlog.get_logger(name)
