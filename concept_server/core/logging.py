"""
Logging configuration module.

Version: 1.0
"""

import logging
import logging.config
from typing import Dict, Any, Optional
import json
import socket
from datetime import datetime, timezone

from concept_server.config.settings import get_settings

# Global Constants
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
SERVICE_NAME = 'concept-server'


class JsonFormatter(logging.Formatter):
    """JSON formatter for log shipping in production."""

    def __init__(self, environment: str = "production"):
        super().__init__()
        self.hostname = socket.gethostname()
        self.environment = environment

    def format(self, record):
        """Format log record as JSON with additional context"""
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(LOG_DATE_FORMAT),
            'level': record.levelname,
            'service': SERVICE_NAME,
            'name': record.name,
            'message': record.getMessage(),
            'environment': getattr(record, 'environment', self.environment),
            'host': getattr(record, 'hostname', self.hostname),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Structured context passed through ``extra``
        if hasattr(record, 'context'):
            log_entry['context'] = record.context

        return json.dumps(log_entry, default=str)


def get_log_config(environment: Optional[str] = None, level: Optional[str] = None) -> Dict[str, Any]:
    """Generate logging configuration for ``logging.config.dictConfig``."""
    settings = get_settings()
    environment = environment or settings.ENVIRONMENT
    level = level or settings.LOG_LEVEL

    formatters = {
        'standard': {
            'format': LOG_FORMAT,
            'datefmt': LOG_DATE_FORMAT
        },
        'json': {
            '()': JsonFormatter,
            'environment': environment
        }
    }

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'json' if environment == 'production' else 'standard',
            'level': level
        }
    }

    loggers = {
        '': {  # Root logger
            'handlers': ['console'],
            'level': level,
            'propagate': True
        },
        # pymongo is chatty at DEBUG
        'pymongo': {
            'level': 'WARNING',
        }
    }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': formatters,
        'handlers': handlers,
        'loggers': loggers,
    }


def log_error(
    logger: logging.Logger,
    error: Exception,
    message: str,
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log an error with context.

    Args:
        logger: The logger instance to use
        error: The exception that occurred
        message: A descriptive message about the error
        context: Additional context to include in the log
    """
    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        **(context or {})
    }

    logger.error(message, extra={"context": error_context})


def setup_logging(environment: Optional[str] = None, level: Optional[str] = None) -> None:
    """Initialize logging configuration for the application."""
    logging.config.dictConfig(get_log_config(environment, level))
    logging.getLogger(__name__).info("Logging system initialized successfully")


__all__ = [
    'LOG_FORMAT',
    'LOG_DATE_FORMAT',
    'JsonFormatter',
    'get_log_config',
    'log_error',
    'setup_logging'
]
