"""
Logging Configuration and Utilities

Structured logging for the availability, pricing and offer engine:
JSON or text console output, request context propagation and a
thin logger adapter.
"""

import sys
import logging
import logging.handlers
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog
from pythonjsonlogger import jsonlogger

from .config import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class RequestContextProcessor:
    """Add request context to log records"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        event_dict['service'] = 'hotel-engine'
        event_dict['environment'] = settings.ENVIRONMENT

        return event_dict


class RequestContextFilter(logging.Filter):
    """Copy request context variables onto standard log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Configure structured logging with structlog"""

        processors = [
            RequestContextProcessor(),
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if settings.logging.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        """Configure standard Python logging"""

        level = getattr(logging, settings.logging.LOG_LEVEL)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if settings.logging.LOG_FORMAT == "json":
            formatter = CustomJsonFormatter(
                '%(asctime)s %(name)s %(levelname)s %(message)s'
            )
        else:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

        console_handler.setFormatter(formatter)
        console_handler.addFilter(RequestContextFilter())
        root_logger.addHandler(console_handler)

        if settings.logging.LOG_FILE:
            log_path = Path(settings.logging.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.TimedRotatingFileHandler(
                log_path,
                when='midnight',
                interval=1,
                backupCount=30
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(RequestContextFilter())
            root_logger.addHandler(file_handler)

        LoggingConfig._configure_library_loggers()

    @staticmethod
    def _configure_library_loggers():
        """Configure logging for external libraries"""

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.error").setLevel(logging.INFO)

        if settings.logging.LOG_SQL_QUERIES:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
        else:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

        logging.getLogger("httpx").setLevel(logging.WARNING)


class LoggerAdapter:
    """Thin wrapper over a standard logger; request context is added by filters"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or 'hotel_engine'))


_configured = False


def setup_logging(force: bool = False):
    """Initialize logging configuration"""
    global _configured
    if _configured and not force:
        return

    try:
        if settings.logging.ENABLE_STRUCTURED_LOGGING:
            LoggingConfig.configure_structured_logging()

        LoggingConfig.configure_standard_logging()
        _configured = True

        logger = get_logger(__name__)
        logger.info("Logging system initialized", extra={
            'log_level': settings.logging.LOG_LEVEL,
            'log_format': settings.logging.LOG_FORMAT,
            'structured_logging': settings.logging.ENABLE_STRUCTURED_LOGGING
        })

    except (OSError, ValueError) as e:
        # Fallback to basic console logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        logging.getLogger(__name__).warning("Failed to initialize logging: %s", e)


__all__ = [
    'get_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
]
