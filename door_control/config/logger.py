"""
Logger configuration for NFC Door Control using Loguru.

Console output is colored. Two rotating files live under LOG_DIR:
- app.log: everything from DEBUG up
- access.log: request middleware lines and validation timings
"""

import sys
from datetime import datetime
from pathlib import Path

from fastapi import Request
from loguru import logger

from door_control.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
ACCESS_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {message}"

ACCESS_PREFIXES = ("REQUEST", "PERFORMANCE")


def _is_access_line(record) -> bool:
    return record["message"].startswith(ACCESS_PREFIXES)


class LoguruConfig:
    """Installs the console and file sinks."""

    def __init__(self, logs_dir: str = "logs"):
        self.logs_dir = Path(logs_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def setup_logger(self, log_level: str = "INFO") -> None:
        logger.remove()
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=log_level, colorize=True)
        logger.add(
            self.logs_dir / "app.log",
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
            backtrace=True,
        )
        logger.add(
            self.logs_dir / "access.log",
            format=ACCESS_FORMAT,
            level="INFO",
            rotation="20 MB",
            retention="14 days",
            compression="zip",
            encoding="utf-8",
            filter=_is_access_line,
        )


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def log_request_start(request: Request) -> None:
    """Log the start of a request."""
    logger.info(
        "REQUEST START: {method} {path}",
        method=request.method,
        path=request.url.path,
        extra={
            "query_params": str(request.query_params),
            "client_ip": _client_ip(request),
            "user_agent": request.headers.get("user-agent"),
            "timestamp": datetime.now().isoformat(),
        }
    )


def log_request_end(request: Request, status_code: int, process_time: float) -> None:
    """Log the completion of a request."""
    logger.info(
        "REQUEST END: {method} {path} - {status_code} ({process_time:.4f}s)",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        process_time=round(process_time, 4),
        extra={
            "client_ip": _client_ip(request),
            "timestamp": datetime.now().isoformat(),
        }
    )


def log_request_error(request: Request, error: Exception, process_time: float) -> None:
    """Log a request error."""
    logger.error(
        "REQUEST ERROR: {method} {path} - {error} ({process_time:.4f}s)",
        method=request.method,
        path=request.url.path,
        error=str(error),
        process_time=round(process_time, 4),
        extra={
            "error_type": type(error).__name__,
            "client_ip": _client_ip(request),
            "timestamp": datetime.now().isoformat(),
        }
    )


def log_performance(operation: str, duration: float, **kwargs) -> None:
    """Log performance metrics."""
    logger.info(
        "PERFORMANCE: {operation} completed in {duration:.4f}s",
        operation=operation,
        duration=duration,
        **kwargs
    )


loguru_config = LoguruConfig(logs_dir=settings.LOG_DIR)
loguru_config.setup_logger(settings.LOG_LEVEL)

# Export logger for use in other modules
app_logger = logger
