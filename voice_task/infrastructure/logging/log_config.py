"""
Unified logging configuration for the Voice-to-Task Gateway.
Provides singleton pattern to ensure single configuration.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER_NAME = "voice-task"


class JSONFormatter(logging.Formatter):
    """JSON formatter for CloudWatch-friendly structured logging."""

    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "service": self.service,
            "environment": self.environment
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.COLORS.get(record.levelname, '')
        colored_level = f"{level_color}{record.levelname}{self.COLORS['RESET']}"

        message = f"{self.formatTime(record)} - {record.name} - {colored_level} - {record.getMessage()}"

        if hasattr(record, 'extra_fields'):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_fields.items())
            message += f" | {extra_str}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class LoggingManager:
    """Singleton manager for logging configuration."""

    _instance: Optional['LoggingManager'] = None

    def __new__(cls) -> 'LoggingManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._configured = False
            cls._instance._handler = None
        return cls._instance

    def configure(
        self,
        environment: str,
        log_level: str,
        service_name: str = "voice-task-gateway",
        force: bool = False
    ) -> None:
        """
        Configure the application logger.

        Args:
            environment: Deployment environment; "production" selects JSON output
            log_level: Level name such as "INFO" or "DEBUG"
            service_name: Service name stamped on JSON records
            force: Replace an existing configuration
        """
        if self._configured and not force:
            return

        level = getattr(logging, log_level.upper(), logging.INFO)

        if environment.lower() in ("production", "prod"):
            formatter: logging.Formatter = JSONFormatter(service_name, environment)
        else:
            formatter = DevelopmentFormatter()

        app_logger = logging.getLogger(ROOT_LOGGER_NAME)
        if self._handler is not None:
            app_logger.removeHandler(self._handler)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(formatter)

        app_logger.setLevel(level)
        app_logger.addHandler(handler)
        app_logger.propagate = False
        self._handler = handler

        self._configure_third_party_loggers()
        self._configured = True

        app_logger.debug("Logging configuration initialized", extra={
            'extra_fields': {
                "environment": environment,
                "log_level": logging.getLevelName(level),
                "formatter": type(formatter).__name__
            }
        })

    def _configure_third_party_loggers(self) -> None:
        """Reduce noise from HTTP client libraries."""
        for logger_name in ("urllib3", "requests"):
            logger = logging.getLogger(logger_name)
            if logger.level < logging.WARNING:
                logger.setLevel(logging.WARNING)

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger under the voice-task namespace."""
        if not self._configured:
            self.configure(
                environment=os.getenv("ENVIRONMENT", "development"),
                log_level=os.getenv("LOG_LEVEL", "INFO")
            )

        if not name.startswith(ROOT_LOGGER_NAME):
            name = f"{ROOT_LOGGER_NAME}.{name}"

        return logging.getLogger(name)


# Singleton instance
logging_manager = LoggingManager()


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger under the voice-task namespace

    Example:
        logger = get_logger("voice_task.core.services.multipart_decoder")
        # Results in logger named: "voice-task.voice_task.core.services.multipart_decoder"
    """
    return logging_manager.get_logger(name)


def configure_logging(environment: str, log_level: str, service_name: str) -> None:
    """Apply loaded settings to the logging configuration."""
    logging_manager.configure(environment, log_level, service_name, force=True)
