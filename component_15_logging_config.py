"""
component_15_logging_config.py

Central logging system for the GOAP planner.
Provides structured logging with levels, formatting and performance tracking.

Features:
- Console and (optional) file logging
- Structured formatting with timestamps and component names
- Performance tracking for planning calls
- Contextual key=value information appended to each record

Usage:
    from component_15_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Plan found", extra={"goal": "hasWood == True", "length": 1})
"""

import logging
import logging.handlers
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

from common.constants import (
    CONSOLE_LOG_LEVEL,
    ERROR_LOG_FILENAME,
    FILE_LOG_LEVEL,
    LOG_DIR_NAME,
    PERFORMANCE_LOG_FILENAME,
    PERFORMANCE_LOGGER_NAME,
)

LOG_DIR: Path = Path(LOG_DIR_NAME)


class GOAPLogFormatter(logging.Formatter):
    """
    Formatter for structured log output.
    Optionally colors console output.
    """

    # ANSI color codes for console output
    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, use_colors: bool = False, include_extra: bool = True) -> None:
        self.use_colors: bool = use_colors
        self.include_extra: bool = include_extra

        # Format: [TIMESTAMP] [LEVEL] [COMPONENT] MESSAGE
        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if self.include_extra and hasattr(record, "extra_info"):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_info.items())
            log_message += f" | {extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            log_message = f"{color}{log_message}{reset}"

        return log_message


class PerformanceLogger:
    """
    Context manager for timing planning operations.

    Usage:
        with PerformanceLogger(logger.logger, "plan", goal=str(goal)):
            planner.plan(goal, agent)
    """

    def __init__(
        self, logger: logging.Logger, operation_name: str, **context: Any
    ) -> None:
        self.logger: logging.Logger = logger
        self.operation_name: str = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[datetime] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = datetime.now()
        self.logger.debug(
            f"START: {self.operation_name}", extra={"extra_info": self.context}
        )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        assert (
            self.start_time is not None
        ), "PerformanceLogger was not entered correctly"
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000
        self.duration_ms = duration_ms

        if exc_type is None:
            self.logger.debug(
                f"END: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )

            perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
            perf_logger.info(
                f"{self.operation_name}: {duration_ms:.2f}ms",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )
        else:
            self.logger.error(
                f"FAILED: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={
                    "extra_info": {
                        **self.context,
                        "duration_ms": duration_ms,
                        "error": str(exc_val),
                    }
                },
            )

        # Propagate the exception
        return False


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that stores structured `extra` values as `extra_info`.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs

    def log_exception(self, exc: Exception, message: str = "", **context: Any) -> None:
        """
        Logs an exception with full traceback and context.
        """
        tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

        self.error(
            f"{message}: {type(exc).__name__}: {str(exc)}\n{tb_str}", extra=context
        )


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_file: Optional[Path] = None,
    enable_performance_logging: bool = False,
) -> None:
    """
    Configures the global logging system.

    Args:
        console_level: Level for console output
        file_level: Level for file output
        log_file: Main log file; file logging is disabled when None
        enable_performance_logging: Write planner timings to a separate file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filtering happens per handler

    # Prevent duplicate handlers on repeated setup
    root_logger.handlers.clear()

    # === Console handler ===
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(GOAPLogFormatter(use_colors=True, include_extra=True))
    root_logger.addHandler(console_handler)

    # === Main log file ===
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"  # 10 MB
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(GOAPLogFormatter(use_colors=False, include_extra=True))
        root_logger.addHandler(file_handler)

        # === Error-only log file ===
        error_handler = logging.handlers.RotatingFileHandler(
            log_file.parent / ERROR_LOG_FILENAME,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(GOAPLogFormatter(use_colors=False, include_extra=True))
        root_logger.addHandler(error_handler)

    # === Performance logger ===
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    perf_logger.handlers.clear()
    if enable_performance_logging:
        perf_dir = log_file.parent if log_file is not None else LOG_DIR
        perf_dir.mkdir(parents=True, exist_ok=True)
        perf_logger.setLevel(logging.INFO)
        perf_logger.propagate = False  # Keep timings out of the root logger

        perf_handler = logging.handlers.RotatingFileHandler(
            perf_dir / PERFORMANCE_LOG_FILENAME,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        perf_handler.setFormatter(GOAPLogFormatter(use_colors=False, include_extra=True))
        perf_logger.addHandler(perf_handler)
    else:
        # Timings are dropped unless performance logging is enabled
        perf_logger.setLevel(logging.WARNING)
        perf_logger.propagate = True

    logger = get_logger("goap.logging_config")
    logger.debug(
        "Logging initialised",
        extra={
            "console_level": logging.getLevelName(console_level),
            "file_level": logging.getLevelName(file_level),
            "log_file": str(log_file) if log_file is not None else None,
            "performance_logging": enable_performance_logging,
        },
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Creates a structured logger for a component.

    Args:
        name: Component name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Planning started", extra={"goal": "hasWood == True"})
    """
    base_logger = logging.getLogger(name)
    return StructuredLogger(base_logger, {})


# Automatic console-only initialisation on import.
# Can be overridden by an explicit setup_logging() call.
if not logging.getLogger().handlers:
    setup_logging()
