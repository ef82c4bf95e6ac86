import inspect
import logging
import sys

from soap_http_client.enums import LogLevel


def create_logger(module_name: str | None = None, level: int = LogLevel.INFO) -> logging.Logger:
    """Return a logger writing to stdout, attaching the handler only once"""
    logger_name = module_name or get_caller_module_name()
    logger = logging.getLogger(logger_name)

    if not logger.handlers:
        logger.setLevel(level)
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger


def get_caller_module_name() -> str:
    frame = inspect.stack()[2]
    module = inspect.getmodule(frame.frame)
    return module.__name__ if module else "soap_http_client"
